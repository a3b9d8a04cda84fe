"""Wire-format helpers shared by the resource record types."""

from __future__ import annotations

import math
import re
import struct
from dataclasses import dataclass
from typing import Any, Mapping

POINTER_TO_QUESTION = 0xC00C
CLASS_IN = 1

_UINT32_MASK = 0xFFFFFFFF
_DECIMAL = re.compile(r"[+-]?[0-9]+")
_NUMBERED_KEY = re.compile(
    r"key([1-9][0-9]{0,3}|[1-5][0-9]{4}|6[0-4][0-9]{3}"
    r"|65[0-4][0-9]{2}|655[0-2][0-9]|6553[0-4])"
)
_NAMED_KEYS = {
    "mandatory": 0,
    "alpn": 1,
    "no-default-alpn": 2,
    "port": 3,
    "ipv4hint": 4,
    "ipv6hint": 6,
    "dohpath": 7,
}


@dataclass
class Answer:
    """One resource record of a response, with its RDATA already encoded."""

    rtype: int
    ttl: int
    data: bytes
    rclass: int = CLASS_IN
    name: int = POINTER_TO_QUESTION
    length: int | None = None

    def __post_init__(self) -> None:
        if self.length is None:
            self.length = len(self.data)

    def to_bytes(self) -> bytes:
        """Serialise the record: name pointer, type, class, TTL, length, RDATA."""
        header = struct.pack(
            ">HHHIH",
            self.name,
            self.rtype,
            self.rclass,
            self.ttl,
            self.length & 0xFFFF,
        )
        return header + self.data


def inet_aton(ip: str) -> int:
    """Fold a dotted-quad string into a 32-bit integer; unparsable parts count as 0."""
    value = 0
    for octet in ip.split("."):
        number = int(octet) if _DECIMAL.fullmatch(octet) else 0
        value = ((value << 8) + number) & _UINT32_MASK
    return value


def _label_bytes(name: str) -> bytearray:
    out = bytearray()
    for part in name.split("."):
        raw = part.encode()
        out.append(len(raw) & 0xFF)
        out += raw
    return out


def encode_dns_name(name: str) -> bytes:
    """Encode a domain name as length-prefixed labels ending in a zero byte."""
    if name in ("", "."):
        return b"\x00"
    return bytes(_label_bytes(name) + b"\x00")


def encode_labels(name: str) -> bytes:
    """Encode a domain name as length-prefixed labels without the terminator."""
    return bytes(_label_bytes(name))


def loc_coordinate(degrees: int, minutes: int, seconds: float, hemisphere: str) -> bytes:
    """Encode a latitude or longitude for a LOC record."""
    total = degrees * 3_600_000 + minutes * 60_000 + int(seconds * 1000)
    value = (total & _UINT32_MASK) | 0x80000000
    if hemisphere in ("S", "W"):
        value = (-value) & _UINT32_MASK
    return value.to_bytes(4, "big")


def loc_altitude(altitude: float) -> bytes:
    """Encode an altitude in metres for a LOC record."""
    value = int((altitude + 100000) * 100) & _UINT32_MASK
    return value.to_bytes(4, "big")


def _round_half_away(value: float) -> int:
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def loc_size_precision(value: float) -> int:
    """Encode a size or precision as a mantissa/exponent byte."""
    exponent = 0
    if value > 0:
        while value > 9:
            value /= 10
            exponent += 1
        while value < 1 and exponent > 0:
            value *= 10
            exponent -= 1
    mantissa = _round_half_away(value) & 0xFF
    return ((mantissa << 4) | exponent) & 0xFF


def svc_param_key(key: str) -> bytes | None:
    """Return the two-byte SvcParamKey for a key name, or None if it is unknown."""
    if key in _NAMED_KEYS:
        return uint16_bytes(_NAMED_KEYS[key])
    match = _NUMBERED_KEY.fullmatch(key)
    if match:
        number = int(match.group(1))
        if number == 5 or number > 7:
            return uint16_bytes(number)
    return None


def uint16_bytes(n: int) -> bytes:
    """Return the low 16 bits of n, big-endian."""
    return bytes(((n >> 8) & 0xFF, n & 0xFF))


def _mapping(data: Any) -> Mapping[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError(f"expected a mapping, got {type(data).__name__}")
    return data


def _items(data: Any) -> list[Mapping[str, Any]]:
    records = _mapping(data).get("records")
    if records is None:
        return []
    if not isinstance(records, list):
        raise ValueError(f"'records' must be a list, got {type(records).__name__}")
    return [_mapping(item) for item in records]


def _uint(data: Mapping[str, Any], key: str, bits: int = 32) -> int:
    value = data.get(key)
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key!r} must be an unsigned integer, got {value!r}")
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{key!r} does not fit in {bits} bits: {value}")
    return value


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, (Mapping, list)):
        raise ValueError(f"{key!r} must be a scalar, got {type(value).__name__}")
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)