"""Geographic location (LOC) record type."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .encoding import (
    Answer,
    _items,
    _mapping,
    _text,
    _uint,
    loc_altitude,
    loc_coordinate,
    loc_size_precision,
)


def _int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key!r} must be an integer, got {value!r}")
    return value


def _float(data: Mapping[str, Any], key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key!r} must be a number, got {value!r}")
    return float(value)


@dataclass
class Coords:
    """A latitude or longitude in degrees, minutes, seconds and hemisphere."""

    deg: int = 0
    min: int = 0
    sec: float = 0.0
    hem: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> Coords:
        item = _mapping(data)
        return cls(
            deg=_int(item, "deg"),
            min=_int(item, "min"),
            sec=_float(item, "sec"),
            hem=_text(item, "hem"),
        )

    def to_bytes(self) -> bytes:
        return loc_coordinate(self.deg, self.min, self.sec, self.hem)


@dataclass
class Precision:
    """Altitude, size and precisions in metres."""

    alt: float = 0.0
    size: float = 0.0
    horz: float = 0.0
    vert: float = 0.0

    @classmethod
    def from_dict(cls, data: Any) -> Precision:
        item = _mapping(data)
        return cls(
            alt=_float(item, "alt"),
            size=_float(item, "size"),
            horz=_float(item, "horz"),
            vert=_float(item, "vert"),
        )


@dataclass
class LOCRecord:
    ttl: int = 0
    lat: Coords | None = None
    lon: Coords | None = None
    prec: Precision | None = None

    def rdata(self) -> bytes:
        if self.lat is None or self.lon is None or self.prec is None:
            raise ValueError("LOC record needs 'lat', 'lon' and 'prec'")
        header = bytes(
            (
                0,
                loc_size_precision(self.prec.size * 100),
                loc_size_precision(self.prec.horz * 100),
                loc_size_precision(self.prec.vert * 100),
            )
        )
        return header + self.lat.to_bytes() + self.lon.to_bytes() + loc_altitude(self.prec.alt)


@dataclass
class LOC:
    """Location records."""

    records: list[LOCRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> LOC:
        return cls(
            [
                LOCRecord(
                    ttl=_uint(i, "ttl"),
                    lat=Coords.from_dict(i["lat"]) if i.get("lat") is not None else None,
                    lon=Coords.from_dict(i["lon"]) if i.get("lon") is not None else None,
                    prec=Precision.from_dict(i["prec"]) if i.get("prec") is not None else None,
                )
                for i in _items(data)
            ]
        )

    def encode(self) -> list[Answer]:
        return [
            Answer(rtype=29, ttl=rec.ttl, data=rec.rdata(), length=16)
            for rec in self.records
        ]