"""Service binding (SVCB and HTTPS) record types."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from typing import Any, Mapping

from .basic import _ipv6_bytes
from .encoding import (
    Answer,
    _items,
    _mapping,
    _text,
    _uint,
    encode_labels,
    svc_param_key,
    uint16_bytes,
)


def _string_list(data: Mapping[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{key!r} must be a list, got {type(value).__name__}")
    return [_text({key: item}, key) for item in value]


def _flag(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"{key!r} must be a boolean, got {value!r}")
    return value


def _string_map(data: Mapping[str, Any], key: str) -> dict[str, str]:
    value = _mapping(data.get(key))
    return {str(name): _text(value, name) for name in value}


def _ipv4_bytes(text: str) -> bytes:
    if "%" in text:
        return b""
    try:
        address = ipaddress.ip_address(text)
    except ValueError:
        return b""
    if address.version == 6:
        mapped = address.ipv4_mapped
        return mapped.packed if mapped is not None else b""
    return address.packed


def _param(key: bytes, value: bytes) -> bytes:
    return key + uint16_bytes(len(value)) + value


@dataclass
class ServiceBinding:
    """One service binding: priority, target name and service parameters."""

    ttl: int = 0
    priority: int = 0
    target: str = ""
    alpn: list[str] = field(default_factory=list)
    ipv4hint: list[str] = field(default_factory=list)
    ipv6hint: list[str] = field(default_factory=list)
    no_default_alpn: bool = False
    mandatory: list[str] = field(default_factory=list)
    port: int = 0
    dohpath: str = ""
    other: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> ServiceBinding:
        item = _mapping(data)
        return cls(
            ttl=_uint(item, "ttl"),
            priority=_uint(item, "priority", 16),
            target=_text(item, "target"),
            alpn=_string_list(item, "alpn"),
            ipv4hint=_string_list(item, "ipv4hint"),
            ipv6hint=_string_list(item, "ipv6hint"),
            no_default_alpn=_flag(item, "no-default-alpn"),
            mandatory=_string_list(item, "mandatory"),
            port=_uint(item, "port", 16),
            dohpath=_text(item, "dohpath"),
            other=_string_map(item, "other"),
        )

    def _params(self) -> bytes:
        params = bytearray()
        if self.mandatory:
            keys = b"".join(
                key for key in map(svc_param_key, self.mandatory) if key is not None
            )
            params += _param(b"\x00\x00", keys)
        if self.alpn:
            protocols = b"".join(
                bytes((len(raw) & 0xFF,)) + raw for raw in (p.encode() for p in self.alpn)
            )
            params += _param(b"\x00\x01", protocols)
        if self.no_default_alpn:
            params += b"\x00\x02\x00\x00"
        if self.port > 0:
            params += _param(b"\x00\x03", uint16_bytes(self.port))
        if self.ipv4hint:
            params += _param(b"\x00\x04", b"".join(map(_ipv4_bytes, self.ipv4hint)))
        if self.ipv6hint:
            params += _param(b"\x00\x06", b"".join(map(_ipv6_bytes, self.ipv6hint)))
        if self.dohpath:
            params += _param(b"\x00\x07", self.dohpath.encode())
        for name, value in self.other.items():
            key = svc_param_key(name)
            if key is not None:
                params += _param(key, value.encode())
        return bytes(params)

    def rdata(self) -> bytes:
        """Encode priority, target and parameters as RDATA."""
        out = bytearray(uint16_bytes(self.priority))
        if self.target not in ("", "."):
            out += encode_labels(self.target)
        params = self._params()
        if params:
            out += b"\x00" + params
        return bytes(out)


def _bindings(data: Any) -> list[ServiceBinding]:
    return [ServiceBinding.from_dict(i) for i in _items(data)]


def _binding_answers(rtype: int, records: list[ServiceBinding]) -> list[Answer]:
    return [Answer(rtype=rtype, ttl=rec.ttl, data=rec.rdata()) for rec in records]


@dataclass
class SVCB:
    """General service binding records."""

    records: list[ServiceBinding] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> SVCB:
        return cls(_bindings(data))

    def encode(self) -> list[Answer]:
        return _binding_answers(64, self.records)


@dataclass
class HTTPS:
    """HTTPS service binding records."""

    records: list[ServiceBinding] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> HTTPS:
        return cls(_bindings(data))

    def encode(self) -> list[Answer]:
        return _binding_answers(65, self.records)