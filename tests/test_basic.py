import ipaddress
import struct

import pytest

from dnsrv.basic import AAAA, CAA, CNAME, MX, NAPTR, NS, PTR, SOA, SRV, TXT, URI, A
from dnsrv.encoding import encode_dns_name, uint16_bytes


def test_a_encodes_address():
    answers = A.from_dict({"records": [{"ttl": 300, "ipv4": "10.0.0.1"}]}).encode()
    assert len(answers) == 1
    answer = answers[0]
    assert (answer.rtype, answer.rclass, answer.ttl, answer.length) == (1, 1, 300, 4)
    assert answer.data == ipaddress.IPv4Address("10.0.0.1").packed


def test_a_multiple_records_keep_order():
    data = {"records": [{"ipv4": "1.1.1.1"}, {"ipv4": "2.2.2.2"}]}
    answers = A.from_dict(data).encode()
    assert [a.data for a in answers] == [
        ipaddress.IPv4Address("1.1.1.1").packed,
        ipaddress.IPv4Address("2.2.2.2").packed,
    ]


def test_empty_records_encode_nothing():
    assert A.from_dict({}).encode() == []
    assert MX.from_dict(None).encode() == []


def test_aaaa_encodes_ipv6():
    answer = AAAA.from_dict({"records": [{"ttl": 60, "ipv6": "2001:db8::1"}]}).encode()[0]
    assert answer.rtype == 28
    assert answer.data == ipaddress.IPv6Address("2001:db8::1").packed


def test_aaaa_maps_ipv4():
    answer = AAAA.from_dict({"records": [{"ipv6": "1.2.3.4"}]}).encode()[0]
    assert answer.data == ipaddress.IPv6Address("::ffff:1.2.3.4").packed


def test_aaaa_invalid_address_keeps_declared_length():
    answer = AAAA.from_dict({"records": [{"ipv6": "nonsense"}]}).encode()[0]
    assert answer.data == b""
    assert answer.length == 16


def test_txt_is_length_prefixed():
    answer = TXT.from_dict({"records": [{"ttl": 10, "value": "hello world"}]}).encode()[0]
    assert answer.rtype == 16
    assert answer.data[0] == len("hello world")
    assert answer.data[1:] == b"hello world"
    assert answer.length == len(answer.data)


def test_cname_single_answer():
    answers = CNAME.from_dict({"ttl": 120, "target": "www.example.com"}).encode()
    assert len(answers) == 1
    assert answers[0].rtype == 5
    assert answers[0].ttl == 120
    assert answers[0].data == encode_dns_name("www.example.com")


def test_mx_priority_then_name():
    data = {"records": [{"ttl": 3600, "priority": 10, "server": "mail.example.com"}]}
    answer = MX.from_dict(data).encode()[0]
    assert answer.rtype == 15
    assert answer.data[:2] == uint16_bytes(10)
    assert answer.data[2:] == encode_dns_name("mail.example.com")
    assert answer.length == len(answer.data)


def test_ns_encodes_server():
    answer = NS.from_dict({"records": [{"server": "ns1.example.com"}]}).encode()[0]
    assert answer.rtype == 2
    assert answer.data == encode_dns_name("ns1.example.com")


def test_ptr_answers_carry_ns_type():
    answer = PTR.from_dict({"records": [{"domain": "host.example.com"}]}).encode()[0]
    assert answer.rtype == 2
    assert answer.data == encode_dns_name("host.example.com")


def test_srv_layout():
    data = {"records": [{"priority": 1, "weight": 2, "port": 5060, "target": "sip.example.com"}]}
    answer = SRV.from_dict(data).encode()[0]
    assert answer.rtype == 33
    assert struct.unpack(">HHH", answer.data[:6]) == (1, 2, 5060)
    assert answer.data[6:] == encode_dns_name("sip.example.com")
    assert answer.length == len(answer.data)


def test_caa_layout():
    data = {"records": [{"flag": 0, "tag": "issue", "value": "ca.example.com"}]}
    answer = CAA.from_dict(data).encode()[0]
    assert answer.rtype == 257
    assert answer.data[0] == 0
    assert answer.data[1] == len("issue")
    assert answer.data[2:7] == b"issue"
    assert answer.data[7:] == b"ca.example.com"


def test_uri_layout():
    data = {"records": [{"priority": 10, "weight": 1, "target": "ftp://ftp.example.com/"}]}
    answer = URI.from_dict(data).encode()[0]
    assert answer.rtype == 256
    assert struct.unpack(">HH", answer.data[:4]) == (10, 1)
    assert answer.data[4:] == b"ftp://ftp.example.com/"


def test_soa_layout():
    soa = SOA.from_dict(
        {
            "name": "ns1.example.com",
            "admin": "admin.example.com",
            "serial": 2024010101,
            "refresh": 7200,
            "retry": 3600,
            "expire": 1209600,
            "minimum": 300,
            "ttl": 86400,
        }
    )
    answers = soa.encode()
    assert len(answers) == 1
    answer = answers[0]
    assert answer.rtype == 6
    assert answer.ttl == 86400
    name = encode_dns_name("ns1.example.com")
    admin = encode_dns_name("admin.example.com")
    assert answer.data[: len(name)] == name
    assert answer.data[len(name) : len(name) + len(admin)] == admin
    tail = answer.data[len(name) + len(admin) :]
    assert struct.unpack(">5I", tail) == (2024010101, 7200, 3600, 1209600, 300)


def test_naptr_layout():
    data = {
        "records": [
            {
                "order": 100,
                "pref": 10,
                "flags": "u",
                "service": "E2U+sip",
                "regex": "!^.*$!sip:info@example.com!",
                "replace": ".",
            }
        ]
    }
    answer = NAPTR.from_dict(data).encode()[0]
    assert answer.rtype == 35
    assert struct.unpack(">HH", answer.data[:4]) == (100, 10)
    rest = answer.data[4:]
    strings = []
    for _ in range(3):
        size = rest[0]
        strings.append(rest[1 : 1 + size].decode())
        rest = rest[1 + size :]
    assert strings == ["u", "E2U+sip", "!^.*$!sip:info@example.com!"]
    assert rest == encode_dns_name(".")


@pytest.mark.parametrize(
    "data",
    [
        {"records": [{"ttl": "abc"}]},
        {"records": [{"ttl": -1}]},
        {"records": [{"ttl": 1 << 32}]},
        {"records": "not a list"},
        {"records": [["nested"]]},
    ],
)
def test_a_rejects_bad_input(data):
    with pytest.raises(ValueError):
        A.from_dict(data)


def test_mx_priority_must_fit_sixteen_bits():
    with pytest.raises(ValueError):
        MX.from_dict({"records": [{"priority": 1 << 16, "server": "mail.example.com"}]})


def test_caa_flag_must_fit_a_byte():
    with pytest.raises(ValueError):
        CAA.from_dict({"records": [{"flag": 256, "tag": "issue", "value": "x"}]})


def test_soa_rejects_non_mapping():
    with pytest.raises(ValueError):
        SOA.from_dict(["ns1.example.com"])


def test_answers_serialise_with_rdata_length():
    answer = SRV.from_dict({"records": [{"target": "a.example.com"}]}).encode()[0]
    wire = answer.to_bytes()
    assert struct.unpack(">H", wire[8:10]) == (len(answer.data),)
    assert wire[10:] == answer.data