import struct

import pytest

from dnsrv.encoding import Answer
from dnsrv.packet import Header, Question, answer_query, build_response, parse_query
from dnsrv.zone import Zone, ZoneRegistry

QNAME = b"\x03www\x07example\x03com\x00"


def make_query(qid=0x1234, qname=QNAME, qtype=1, qclass=1):
    return struct.pack(">6H", qid, 0x0100, 1, 0, 0, 0) + qname + struct.pack(">HH", qtype, qclass)


@pytest.fixture
def registry():
    reg = ZoneRegistry()
    reg.add(
        Zone.from_dict(
            {
                "zone": "example.com",
                "records": {
                    "A": {"www": {"default": {"records": [{"ttl": 300, "ipv4": "192.0.2.1"}]}}}
                },
            }
        )
    )
    return reg


def test_parse_query():
    packet = make_query(qtype=28)
    query = parse_query(packet)
    assert query.host == "www.example.com"
    assert query.rectype == 28
    assert query.length == len(packet)


def test_parse_root_query():
    packet = make_query(qname=b"\x00", qtype=2)
    query = parse_query(packet)
    assert query.host == ""
    assert query.rectype == 2
    assert query.length == len(packet)


@pytest.mark.parametrize("cut", [5, 12, 16, len(QNAME) + 12, len(QNAME) + 13])
def test_parse_truncated(cut):
    with pytest.raises(ValueError):
        parse_query(make_query()[:cut])


def test_header_bytes():
    assert Header(id=0x1234, ancount=1).to_bytes() == bytes.fromhex("123481800001000100000000")


def test_question_bytes():
    question = Question(qname=QNAME, qtype=16, qclass=1)
    assert question.to_bytes() == QNAME + b"\x00\x10\x00\x01"


def test_build_response_round_trip():
    header = Header(id=7)
    question = Question(qname=QNAME, qtype=1, qclass=1)
    answer = Answer(rtype=1, ttl=60, data=b"\xc0\x00\x02\x01")
    response = build_response(header, question, [answer])
    assert parse_query(response).host == "www.example.com"
    assert response.endswith(answer.to_bytes())
    assert len(response) == 12 + len(QNAME) + 4 + len(answer.to_bytes())


def test_answer_query_with_record(registry):
    packet = make_query()
    response = answer_query(packet, "203.0.113.5", registry)
    qid, flags, qd, an, ns, ar = struct.unpack(">6H", response[:12])
    assert (qid, flags, qd, an, ns, ar) == (0x1234, 0x8180, 1, 1, 0, 0)
    assert response[12:len(packet)] == packet[12:]
    name, rtype, rclass, ttl, length = struct.unpack(">HHHIH", response[len(packet):len(packet) + 12])
    assert (name, rtype, rclass, ttl, length) == (0xC00C, 1, 1, 300, 4)
    assert response[len(packet) + 12:] == bytes([192, 0, 2, 1])


def test_answer_query_without_record(registry):
    packet = make_query(qtype=16)
    response = answer_query(packet, "203.0.113.5", registry)
    assert struct.unpack(">H", response[6:8])[0] == 0
    assert response[12:] == packet[12:]
    assert len(response) == len(packet)


def test_answer_query_missing_class(registry):
    with pytest.raises(ValueError):
        answer_query(make_query()[:-2], "203.0.113.5", registry)