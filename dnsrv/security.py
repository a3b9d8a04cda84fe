"""Certificate, key and fingerprint record types."""

from __future__ import annotations

import base64
import binascii
import re
import struct
from dataclasses import dataclass, field
from typing import Any

from .encoding import Answer, _items, _text, _uint

_HEX_PAIRS = re.compile(r"(?:[0-9a-fA-F]{2})*")


def _decode_base64(text: str) -> bytes:
    """Decode standard base64, keeping the whole groups read before any error."""
    cleaned = text.replace("\r", "").replace("\n", "")
    try:
        return base64.b64decode(cleaned, validate=True)
    except (binascii.Error, ValueError):
        pass
    decoded = bytearray()
    chunks = (cleaned[start:start + 4] for start in range(0, len(cleaned) - 3, 4))
    for chunk in chunks:
        try:
            decoded += base64.b64decode(chunk, validate=True)
        except (binascii.Error, ValueError):
            break
    return bytes(decoded)


def _decode_hex(text: str) -> bytes:
    """Decode hexadecimal, keeping the bytes read before any invalid digit."""
    match = _HEX_PAIRS.match(text)
    return bytes.fromhex(match.group()) if match else b""


@dataclass
class CERTRecord:
    ttl: int = 0
    cert_type: int = 0
    key_tag: int = 0
    algo: int = 0
    cert: str = ""


@dataclass
class CERT:
    """Certificate records; the certificate is given in base64."""

    records: list[CERTRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> CERT:
        return cls(
            [
                CERTRecord(
                    ttl=_uint(i, "ttl"),
                    cert_type=_uint(i, "type", 16),
                    key_tag=_uint(i, "keytag", 16),
                    algo=_uint(i, "algo", 8),
                    cert=_text(i, "cert"),
                )
                for i in _items(data)
            ]
        )

    def encode(self) -> list[Answer]:
        return [
            Answer(
                rtype=37,
                ttl=rec.ttl,
                data=struct.pack(">HHB", rec.cert_type, rec.key_tag, rec.algo)
                + _decode_base64(rec.cert),
            )
            for rec in self.records
        ]


@dataclass
class DNSKEYRecord:
    ttl: int = 0
    flags: int = 0
    proto: int = 0
    algo: int = 0
    public_key: str = ""


@dataclass
class DNSKEY:
    """DNSSEC public key records; the key is given in base64."""

    records: list[DNSKEYRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> DNSKEY:
        return cls(
            [
                DNSKEYRecord(
                    ttl=_uint(i, "ttl"),
                    flags=_uint(i, "flags", 16),
                    proto=_uint(i, "proto", 8),
                    algo=_uint(i, "algo", 8),
                    public_key=_text(i, "publickey"),
                )
                for i in _items(data)
            ]
        )

    def encode(self) -> list[Answer]:
        return [
            Answer(
                rtype=48,
                ttl=rec.ttl,
                data=struct.pack(">HBB", rec.flags, rec.proto, rec.algo)
                + _decode_base64(rec.public_key),
            )
            for rec in self.records
        ]


@dataclass
class DSRecord:
    ttl: int = 0
    key_tag: int = 0
    algo: int = 0
    digest_type: int = 0
    digest: str = ""


@dataclass
class DS:
    """Delegation signer records; the digest is given in hex."""

    records: list[DSRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> DS:
        return cls(
            [
                DSRecord(
                    ttl=_uint(i, "ttl"),
                    key_tag=_uint(i, "keytag", 16),
                    algo=_uint(i, "algo", 8),
                    digest_type=_uint(i, "digesttype", 8),
                    digest=_text(i, "digest"),
                )
                for i in _items(data)
            ]
        )

    def encode(self) -> list[Answer]:
        return [
            Answer(
                rtype=43,
                ttl=rec.ttl,
                data=struct.pack(">HBB", rec.key_tag, rec.algo, rec.digest_type)
                + _decode_hex(rec.digest),
            )
            for rec in self.records
        ]


@dataclass
class CertAssociation:
    """One certificate association: usage, selector, matching type and hex data."""

    ttl: int = 0
    usage: int = 0
    selector: int = 0
    match: int = 0
    cert: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> CertAssociation:
        return cls(
            ttl=_uint(data, "ttl"),
            usage=_uint(data, "usage", 8),
            selector=_uint(data, "selector", 8),
            match=_uint(data, "matchtype", 8),
            cert=_text(data, "cert"),
        )

    def rdata(self) -> bytes:
        return bytes((self.usage, self.selector, self.match)) + _decode_hex(self.cert)


def _associations(data: Any) -> list[CertAssociation]:
    return [CertAssociation.from_dict(i) for i in _items(data)]


def _association_answers(rtype: int, records: list[CertAssociation]) -> list[Answer]:
    return [Answer(rtype=rtype, ttl=rec.ttl, data=rec.rdata()) for rec in records]


@dataclass
class SMIMEA:
    """S/MIME certificate association records."""

    records: list[CertAssociation] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> SMIMEA:
        return cls(_associations(data))

    def encode(self) -> list[Answer]:
        return _association_answers(53, self.records)


@dataclass
class TLSA:
    """TLS certificate association records."""

    records: list[CertAssociation] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> TLSA:
        return cls(_associations(data))

    def encode(self) -> list[Answer]:
        return _association_answers(52, self.records)


@dataclass
class SSHFPRecord:
    ttl: int = 0
    algo: int = 0
    fingerprint_type: int = 0
    fingerprint: str = ""


@dataclass
class SSHFP:
    """SSH key fingerprint records; the fingerprint is given in hex."""

    records: list[SSHFPRecord] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> SSHFP:
        return cls(
            [
                SSHFPRecord(
                    ttl=_uint(i, "ttl"),
                    algo=_uint(i, "algo", 8),
                    fingerprint_type=_uint(i, "type", 8),
                    fingerprint=_text(i, "fingerprint"),
                )
                for i in _items(data)
            ]
        )

    def encode(self) -> list[Answer]:
        return [
            Answer(
                rtype=44,
                ttl=rec.ttl,
                data=bytes((rec.algo, rec.fingerprint_type)) + _decode_hex(rec.fingerprint),
            )
            for rec in self.records
        ]