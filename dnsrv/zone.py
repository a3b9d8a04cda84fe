"""Zone data, zone loading and query resolution."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Protocol

import yaml

from .basic import A, AAAA, CAA, CNAME, MX, NAPTR, NS, PTR, SOA, SRV, TXT, URI
from .encoding import Answer, _mapping, _text
from .loc import LOC
from .security import CERT, DNSKEY, DS, SMIMEA, SSHFP, TLSA
from .svcb import HTTPS, SVCB

APEX = "_@"
SOA_TYPE = 6

_RECORD_TYPES: tuple[tuple[str, int, Any], ...] = (
    ("A", 1, A),
    ("AAAA", 28, AAAA),
    ("TXT", 16, TXT),
    ("CNAME", 5, CNAME),
    ("MX", 15, MX),
    ("NS", 2, NS),
    ("PTR", 12, PTR),
    ("SRV", 33, SRV),
    ("CAA", 257, CAA),
    ("CERT", 37, CERT),
    ("DNSKEY", 48, DNSKEY),
    ("DS", 43, DS),
    ("HTTPS", 65, HTTPS),
    ("LOC", 29, LOC),
    ("NAPTR", 35, NAPTR),
    ("SMIMEA", 53, SMIMEA),
    ("SSHFP", 44, SSHFP),
    ("SVCB", 64, SVCB),
    ("TLSA", 52, TLSA),
    ("URI", 256, URI),
)
_KEY_BY_TYPE = {rtype: key for key, rtype, _ in _RECORD_TYPES}


class Entry(Protocol):
    """Anything that can be turned into answer records."""

    def encode(self) -> list[Answer]: ...


@dataclass
class Config:
    """Where the server listens and where its zone files live."""

    host: str = "0.0.0.0"
    port: int = 53
    zones: list[str] = field(default_factory=lambda: ["./zones.d"])


def geo(ip: Any) -> str:
    """Return the region of a client address."""
    return "US"


@dataclass
class RegionalRecord:
    """A record set with a default value and per-region overrides."""

    default: Entry | None = None
    regions: dict[str, Entry | None] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any, entry_type: Any) -> RegionalRecord:
        item = _mapping(data)
        default = item.get("default")
        return cls(
            default=entry_type.from_dict(default) if default is not None else None,
            regions={
                str(region): entry_type.from_dict(value) if value is not None else None
                for region, value in _mapping(item.get("regions")).items()
            },
        )

    def resolve(self, region: str) -> Entry | None:
        """Return the entry for a region, or the default when the region has none."""
        if region in self.regions:
            return self.regions[region]
        return self.default


@dataclass
class Records:
    """All record sets of a zone, keyed by record type name and then by owner name."""

    soa: SOA | None = None
    tables: dict[str, dict[str, RegionalRecord]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> Records:
        item = _mapping(data)
        soa = item.get("SOA")
        tables = {
            key: {
                str(name): RegionalRecord.from_dict(value, entry_type)
                for name, value in _mapping(item.get(key)).items()
            }
            for key, _, entry_type in _RECORD_TYPES
        }
        return cls(soa=SOA.from_dict(soa) if soa is not None else None, tables=tables)

    def lookup(self, rectype: int, name: str, region: str) -> Entry | None:
        """Find the entry answering a query of a type for an owner name."""
        if rectype == SOA_TYPE:
            return self.soa
        key = _KEY_BY_TYPE.get(rectype)
        if key is None:
            return None
        record = self.tables.get(key, {}).get(name)
        return record.resolve(region) if record is not None else None


@dataclass
class Zone:
    """A named zone and its records."""

    zone: str = ""
    records: Records = field(default_factory=Records)

    @classmethod
    def from_dict(cls, data: Any) -> Zone:
        item = _mapping(data)
        return cls(zone=_text(item, "zone"), records=Records.from_dict(item.get("records")))


def load_zone_file(path: str | os.PathLike[str]) -> Zone:
    """Read one YAML zone file."""
    raw = Path(path).read_bytes()
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ValueError(f"{path}: {exc}") from exc
    return Zone.from_dict(data)


@dataclass
class ZoneRegistry:
    """The zones a server answers for, keyed by zone name."""

    zones: dict[str, Zone] = field(default_factory=dict)

    def add(self, zone: Zone) -> None:
        self.zones[zone.zone] = zone

    def load(self, directories: Iterable[str | os.PathLike[str]]) -> None:
        """Load every file of every directory, in name order; stop at the first error."""
        for directory in directories:
            for entry in sorted(Path(directory).iterdir(), key=lambda p: p.name):
                self.add(load_zone_file(entry))

    def resolve(self, ip: Any, host: str, rectype: int) -> Entry | None:
        """Find the entry answering a query from a client address."""
        name = APEX
        zone = self.zones.get(host)
        region = geo(ip)
        if zone is None:
            parts = host.split(".")
            for cut in range(1, len(parts)):
                name = ".".join(parts[:cut])
                zone = self.zones.get(".".join(parts[cut:]))
                if zone is not None:
                    break
        if zone is None:
            return None
        return zone.records.lookup(rectype, name, region)