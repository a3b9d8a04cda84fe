# dnsrv

A small authoritative DNS server. It listens on UDP, reads zones from YAML
files and answers queries for the records those zones define. Each record
name can carry a default answer plus per-region variants, chosen by the
client's region.

## Installing

```
pip install .
```

## Running

```
dnsrv
dnsrv --host 127.0.0.1 --port 5353 --zones ./zones.d --zones ./more-zones
```

Options:

- `--host` – address to bind to (default `0.0.0.0`; an address containing
  `:` is bound as IPv6).
- `--port` – UDP port (default `53`, which usually needs elevated
  privileges).
- `--zones DIR` – a directory of zone files; may be given more than once.
  Without it, `./zones.d` is used.

Every file in each zone directory is read, in name order. Loading stops at
the first file that cannot be read or parsed; the failure is logged as a
warning and the server starts with the zones loaded up to that point. If the
socket cannot be bound, the error is logged and the command exits with
status 1. Each query is answered on its own thread; the server runs until
interrupted.

## Zone files

Each file describes one zone:

```yaml
zone: example.com
records:
  SOA:
    name: ns1.example.com
    admin: hostmaster.example.com
    serial: 2024010101
    refresh: 3600
    retry: 600
    expire: 604800
    minimum: 300
    ttl: 3600
  A:
    www:
      default:
        records:
          - ttl: 300
            ipv4: 192.0.2.10
      regions:
        US:
          records:
            - ttl: 300
              ipv4: 192.0.2.20
  CNAME:
    blog:
      default:
        ttl: 300
        target: www.example.com
  MX:
    _@:
      default:
        records:
          - ttl: 3600
            priority: 10
            server: mail.example.com
  HTTPS:
    _@:
      default:
        records:
          - ttl: 300
            priority: 1
            target: .
            alpn: [h2, h3]
            ipv4hint: [192.0.2.10]
```

Record sets are keyed by type, then by owner name relative to the zone. The
name `_@` is the zone apex: it is used when the queried host is exactly a
zone name. Otherwise the host is split at each dot from the left, and the
first suffix that is a loaded zone decides the zone and the owner name
(for `www.example.com`, the name `www` in zone `example.com`). An SOA query
returns the zone's SOA whatever the owner name.

Supported types: SOA, A, AAAA, TXT, CNAME, MX, NS, PTR, SRV, CAA, CERT,
DNSKEY, DS, HTTPS, LOC, NAPTR, SMIMEA, SSHFP, SVCB, TLSA and URI. CNAME and
SOA hold a single value; the others hold a `records` list. CERT certificates
and DNSKEY public keys are written in base64; DS digests, SSHFP fingerprints
and SMIMEA/TLSA certificate data in hex. SVCB and HTTPS records accept
`alpn`, `ipv4hint`, `ipv6hint`, `no-default-alpn`, `mandatory`, `port`,
`dohpath`, and an `other` map of `keyNNNNN` parameters. LOC records take
`lat` and `lon` (`deg`, `min`, `sec`, `hem`) and `prec` (`alt`, `size`,
`horz`, `vert`, in metres).

## Using it as a library

```python
from dnsrv.zone import Config, ZoneRegistry
from dnsrv.packet import answer_query
from dnsrv.server import serve

registry = ZoneRegistry()
registry.load(["./zones.d"])
reply = answer_query(query_bytes, "198.51.100.7", registry)

serve(Config(host="127.0.0.1", port=5353, zones=["./zones.d"]))
```

- `dnsrv.zone`: `Config`, `Zone`, `Records`, `RegionalRecord`,
  `ZoneRegistry` (`add`, `load`, `resolve`), `load_zone_file`, `geo`.
- `dnsrv.packet`: `parse_query`, `build_response`, `answer_query`,
  `Header`, `Question`, `ParsedQuery`.
- `dnsrv.server`: `DNSServer` (a context manager with `serve_forever` and
  `close`), `serve`, `main`.
- `dnsrv.basic`, `dnsrv.security`, `dnsrv.svcb`, `dnsrv.loc`: the record
  types, each with `from_dict` and `encode`, which returns `Answer` objects
  from `dnsrv.encoding`.

## What it does not do

- Region selection is fixed: `geo` returns `"US"` for every client, so the
  `US` variant (or the default) is always served.
- Only UDP, one question per query, and datagrams up to 512 bytes are read.
  There is no TCP, EDNS, recursion or forwarding.
- Every response carries the NOERROR response flags; a name that is not found
  gets an empty answer section rather than NXDOMAIN, and no authority or
  additional records are sent.
- Each answer's owner name is a pointer to the question name.
- PTR answers are sent with record type 2 on the wire.
- Zones are read once at start-up; there is no reload.

## Tests

```
pip install .[test]
pytest
```