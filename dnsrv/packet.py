"""Query parsing and response building."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, Iterable

from .encoding import Answer
from .zone import ZoneRegistry

HEADER_SIZE = 12
RESPONSE_FLAGS = 0x8180


@dataclass
class Header:
    """The fixed twelve-byte message header."""

    id: int
    flags: int = RESPONSE_FLAGS
    qdcount: int = 1
    ancount: int = 0
    nscount: int = 0
    arcount: int = 0

    def to_bytes(self) -> bytes:
        return struct.pack(
            ">6H", self.id, self.flags, self.qdcount, self.ancount, self.nscount, self.arcount
        )


@dataclass
class Question:
    """A question section: encoded name, type and class."""

    qname: bytes
    qtype: int
    qclass: int

    def to_bytes(self) -> bytes:
        return self.qname + struct.pack(">HH", self.qtype, self.qclass)


@dataclass(frozen=True)
class ParsedQuery:
    """The queried host, its type, and the offset where the question ends."""

    host: str
    rectype: int
    length: int


def parse_query(packet: bytes) -> ParsedQuery:
    """Read the first question of a query packet."""
    labels = []
    offset = HEADER_SIZE
    while True:
        if offset >= len(packet):
            raise ValueError("query name runs past the end of the packet")
        size = packet[offset]
        if size == 0:
            break
        end = offset + 1 + size
        if end > len(packet):
            raise ValueError("query label runs past the end of the packet")
        labels.append(bytes(packet[offset + 1:end]).decode("utf-8", "surrogateescape"))
        offset = end
    if offset + 3 > len(packet):
        raise ValueError("query type is missing")
    rectype = int.from_bytes(packet[offset + 1:offset + 3], "big")
    return ParsedQuery(host=".".join(labels), rectype=rectype, length=offset + 5)


def build_response(header: Header, question: Question, answers: Iterable[Answer]) -> bytes:
    """Serialise a response: header, question, then each answer."""
    return header.to_bytes() + question.to_bytes() + b"".join(a.to_bytes() for a in answers)


def answer_query(packet: bytes, ip: Any, registry: ZoneRegistry) -> bytes:
    """Build the response to a query packet received from a client address."""
    query = parse_query(packet)
    if query.length > len(packet):
        raise ValueError("query class is missing")
    entry = registry.resolve(ip, query.host, query.rectype)
    answers = entry.encode() if entry is not None else []
    header = Header(id=int.from_bytes(packet[0:2], "big"), ancount=len(answers) & 0xFFFF)
    qtype, qclass = struct.unpack(">HH", packet[query.length - 4:query.length])
    question = Question(
        qname=bytes(packet[HEADER_SIZE:query.length - 4]), qtype=qtype, qclass=qclass
    )
    return build_response(header, question, answers)