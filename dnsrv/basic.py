"""Address, name, text and service record types."""

from __future__ import annotations

import ipaddress
import struct
from dataclasses import dataclass, field
from typing import Any

from .encoding import (
    Answer,
    _items,
    _mapping,
    _text,
    _uint,
    encode_dns_name,
    inet_aton,
    uint16_bytes,
)


def _character_string(text: str) -> bytes:
    raw = text.encode()
    return bytes((len(raw) & 0xFF,)) + raw


def _ipv6_bytes(text: str) -> bytes:
    if "%" in text:
        return b""
    try:
        address = ipaddress.ip_address(text)
    except ValueError:
        return b""
    if address.version == 4:
        return b"\x00" * 10 + b"\xff\xff" + address.packed
    return address.packed


@dataclass
class SOA:
    """Start-of-authority data for a zone."""

    name: str = ""
    admin: str = ""
    serial: int = 0
    refresh: int = 0
    retry: int = 0
    expire: int = 0
    minimum: int = 0
    ttl: int = 0

    @classmethod
    def from_dict(cls, data: Any) -> SOA:
        item = _mapping(data)
        return cls(
            name=_text(item, "name"),
            admin=_text(item, "admin"),
            serial=_uint(item, "serial"),
            refresh=_uint(item, "refresh"),
            retry=_uint(item, "retry"),
            expire=_uint(item, "expire"),
            minimum=_uint(item, "minimum"),
            ttl=_uint(item, "ttl"),
        )

    def encode(self) -> list[Answer]:
        data = (
            encode_dns_name(self.name)
            + encode_dns_name(self.admin)
            + struct.pack(">5I", self.serial, self.refresh, self.retry, self.expire, self.minimum)
        )
        return [Answer(rtype=6, ttl=self.ttl, data=data)]


@dataclass
class ARecord:
    ttl: int = 0
    ipv4: str = ""


@dataclass
class A:
    """IPv4 address records."""

    records: list[ARecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> A:
        return cls([ARecord(ttl=_uint(i, "ttl"), ipv4=_text(i, "ipv4")) for i in _items(data)])

    def encode(self) -> list[Answer]:
        return [
            Answer(rtype=1, ttl=rec.ttl, data=inet_aton(rec.ipv4).to_bytes(4, "big"))
            for rec in self.records
        ]


@dataclass
class AAAARecord:
    ttl: int = 0
    ipv6: str = ""


@dataclass
class AAAA:
    """IPv6 address records."""

    records: list[AAAARecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> AAAA:
        return cls([AAAARecord(ttl=_uint(i, "ttl"), ipv6=_text(i, "ipv6")) for i in _items(data)])

    def encode(self) -> list[Answer]:
        return [
            Answer(rtype=28, ttl=rec.ttl, data=_ipv6_bytes(rec.ipv6), length=16)
            for rec in self.records
        ]


@dataclass
class TXTRecord:
    ttl: int = 0
    value: str = ""


@dataclass
class TXT:
    """Text records, one character-string each."""

    records: list[TXTRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> TXT:
        return cls([TXTRecord(ttl=_uint(i, "ttl"), value=_text(i, "value")) for i in _items(data)])

    def encode(self) -> list[Answer]:
        return [
            Answer(rtype=16, ttl=rec.ttl, data=_character_string(rec.value))
            for rec in self.records
        ]


@dataclass
class CNAME:
    """A canonical-name alias."""

    ttl: int = 0
    target: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> CNAME:
        item = _mapping(data)
        return cls(ttl=_uint(item, "ttl"), target=_text(item, "target"))

    def encode(self) -> list[Answer]:
        return [Answer(rtype=5, ttl=self.ttl, data=encode_dns_name(self.target))]


@dataclass
class MXRecord:
    ttl: int = 0
    priority: int = 0
    server: str = ""


@dataclass
class MX:
    """Mail exchanger records."""

    records: list[MXRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> MX:
        return cls(
            [
                MXRecord(
                    ttl=_uint(i, "ttl"),
                    priority=_uint(i, "priority", 16),
                    server=_text(i, "server"),
                )
                for i in _items(data)
            ]
        )

    def encode(self) -> list[Answer]:
        return [
            Answer(
                rtype=15,
                ttl=rec.ttl,
                data=uint16_bytes(rec.priority) + encode_dns_name(rec.server),
            )
            for rec in self.records
        ]


@dataclass
class NSRecord:
    ttl: int = 0
    server: str = ""


@dataclass
class NS:
    """Name server records."""

    records: list[NSRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> NS:
        return cls([NSRecord(ttl=_uint(i, "ttl"), server=_text(i, "server")) for i in _items(data)])

    def encode(self) -> list[Answer]:
        return [
            Answer(rtype=2, ttl=rec.ttl, data=encode_dns_name(rec.server))
            for rec in self.records
        ]


@dataclass
class PTRRecord:
    ttl: int = 0
    domain: str = ""


@dataclass
class PTR:
    """Pointer records; answers carry type 2 on the wire."""

    records: list[PTRRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> PTR:
        return cls([PTRRecord(ttl=_uint(i, "ttl"), domain=_text(i, "domain")) for i in _items(data)])

    def encode(self) -> list[Answer]:
        return [
            Answer(rtype=2, ttl=rec.ttl, data=encode_dns_name(rec.domain))
            for rec in self.records
        ]


@dataclass
class SRVRecord:
    ttl: int = 0
    priority: int = 0
    weight: int = 0
    port: int = 0
    target: str = ""


@dataclass
class SRV:
    """Service location records."""

    records: list[SRVRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> SRV:
        return cls(
            [
                SRVRecord(
                    ttl=_uint(i, "ttl"),
                    priority=_uint(i, "priority", 16),
                    weight=_uint(i, "weight", 16),
                    port=_uint(i, "port", 16),
                    target=_text(i, "target"),
                )
                for i in _items(data)
            ]
        )

    def encode(self) -> list[Answer]:
        return [
            Answer(
                rtype=33,
                ttl=rec.ttl,
                data=struct.pack(">HHH", rec.priority, rec.weight, rec.port)
                + encode_dns_name(rec.target),
            )
            for rec in self.records
        ]


@dataclass
class CAARecord:
    ttl: int = 0
    flag: int = 0
    tag: str = ""
    value: str = ""


@dataclass
class CAA:
    """Certification authority authorisation records."""

    records: list[CAARecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> CAA:
        return cls(
            [
                CAARecord(
                    ttl=_uint(i, "ttl"),
                    flag=_uint(i, "flag", 8),
                    tag=_text(i, "tag"),
                    value=_text(i, "value"),
                )
                for i in _items(data)
            ]
        )

    def encode(self) -> list[Answer]:
        return [
            Answer(
                rtype=257,
                ttl=rec.ttl,
                data=bytes((rec.flag,)) + _character_string(rec.tag) + rec.value.encode(),
            )
            for rec in self.records
        ]


@dataclass
class URIRecord:
    ttl: int = 0
    priority: int = 0
    weight: int = 0
    target: str = ""


@dataclass
class URI:
    """URI records."""

    records: list[URIRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> URI:
        return cls(
            [
                URIRecord(
                    ttl=_uint(i, "ttl"),
                    priority=_uint(i, "priority", 16),
                    weight=_uint(i, "weight", 16),
                    target=_text(i, "target"),
                )
                for i in _items(data)
            ]
        )

    def encode(self) -> list[Answer]:
        return [
            Answer(
                rtype=256,
                ttl=rec.ttl,
                data=struct.pack(">HH", rec.priority, rec.weight) + rec.target.encode(),
            )
            for rec in self.records
        ]


@dataclass
class NAPTRRecord:
    ttl: int = 0
    order: int = 0
    pref: int = 0
    flags: str = ""
    service: str = ""
    regex: str = ""
    replace: str = ""


@dataclass
class NAPTR:
    """Naming authority pointer records."""

    records: list[NAPTRRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> NAPTR:
        return cls(
            [
                NAPTRRecord(
                    ttl=_uint(i, "ttl"),
                    order=_uint(i, "order", 16),
                    pref=_uint(i, "pref", 16),
                    flags=_text(i, "flags"),
                    service=_text(i, "service"),
                    regex=_text(i, "regex"),
                    replace=_text(i, "replace"),
                )
                for i in _items(data)
            ]
        )

    def encode(self) -> list[Answer]:
        return [
            Answer(
                rtype=35,
                ttl=rec.ttl,
                data=struct.pack(">HH", rec.order, rec.pref)
                + _character_string(rec.flags)
                + _character_string(rec.service)
                + _character_string(rec.regex)
                + encode_dns_name(rec.replace),
            )
            for rec in self.records
        ]