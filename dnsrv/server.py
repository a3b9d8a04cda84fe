"""UDP server loop and command entry point."""

from __future__ import annotations

import argparse
import logging
import socket
import threading
from typing import Any

from .packet import answer_query
from .zone import Config, ZoneRegistry

log = logging.getLogger(__name__)

_MAX_DATAGRAM = 512
_POLL_INTERVAL = 0.2


class DNSServer:
    """A UDP socket answering queries from a zone registry, one thread per query."""

    def __init__(self, config: Config, registry: ZoneRegistry) -> None:
        self.config = config
        self.registry = registry
        family = socket.AF_INET6 if ":" in config.host else socket.AF_INET
        self._socket = socket.socket(family, socket.SOCK_DGRAM)
        try:
            self._socket.bind((config.host, config.port))
        except OSError:
            self._socket.close()
            raise
        self._socket.settimeout(_POLL_INTERVAL)
        self._closed = threading.Event()

    @property
    def address(self) -> Any:
        """The address the socket is bound to."""
        return self._socket.getsockname()

    def serve_forever(self) -> None:
        """Receive and answer queries until the server is closed."""
        while not self._closed.is_set():
            try:
                data, client = self._socket.recvfrom(_MAX_DATAGRAM)
            except socket.timeout:
                continue
            except OSError as exc:
                if self._closed.is_set():
                    break
                log.error("Failed to read from UDP: %s", exc)
                continue
            threading.Thread(target=self._handle, args=(data, client), daemon=True).start()

    def _handle(self, data: bytes, client: Any) -> None:
        try:
            response = answer_query(data, client[0], self.registry)
            self._socket.sendto(response, client)
        except Exception:
            log.exception("Failed to answer query from %s", client[0])

    def close(self) -> None:
        """Stop serving and release the socket."""
        if not self._closed.is_set():
            self._closed.set()
            self._socket.close()

    def __enter__(self) -> DNSServer:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


def serve(config: Config) -> None:
    """Load the configured zones and serve until interrupted."""
    registry = ZoneRegistry()
    try:
        registry.load(config.zones)
    except (OSError, ValueError) as exc:
        log.warning("Failed to load zones: %s", exc)
    with DNSServer(config, registry) as server:
        log.info("Started ..")
        server.serve_forever()


def main(argv: list[str] | None = None) -> int:
    """Run the server from the command line."""
    defaults = Config()
    parser = argparse.ArgumentParser(prog="dnsrv", description="Serve DNS zones over UDP.")
    parser.add_argument("--host", default=defaults.host)
    parser.add_argument("--port", type=int, default=defaults.port)
    parser.add_argument("--zones", action="append", metavar="DIR")
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    config = Config(host=args.host, port=args.port, zones=args.zones or defaults.zones)
    try:
        serve(config)
    except OSError as exc:
        log.error("Failed to start: %s", exc)
        return 1
    except KeyboardInterrupt:
        return 0
    return 0