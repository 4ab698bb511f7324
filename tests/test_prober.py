# tests/test_prober.py
import pytest

from pingshell.prober.base import build_payload
from pingshell.prober.fake import FakeProber
from pingshell.schemas import failure, success


@pytest.mark.parametrize("size", [1, 26, 27, 32, 1000, 65500])
def test_payload_pattern(size):
    payload = build_payload(size)
    assert len(payload) == size
    assert all(b == ord("a") + i % 26 for i, b in enumerate(payload))


def test_payload_wraps_alphabet():
    assert build_payload(28) == b"abcdefghijklmnopqrstuvwxyzab"


def test_fake_prober_script_then_timeout():
    fake = FakeProber(script=[success("9.9.9.9", 12, 50)])
    first = fake.probe_once("9.9.9.9", 1000, 64, b"a")
    second = fake.probe_once("9.9.9.9", 1000, 64, b"a")
    assert first["status"] == "success" and first["rtt_ms"] == 12
    assert second == failure("TimedOut")
    assert len(fake.calls) == 2


def test_fake_prober_answers_from_destination():
    fake = FakeProber.always(rtt_ms=2)
    assert fake.probe_once("192.0.2.7", 1000, 64, b"")["address"] == "192.0.2.7"


# --- scapy prober: packets are built and classified locally, nothing is sent ---

scapy_all = pytest.importorskip("scapy.all")

from pingshell.prober import scapy_icmp  # noqa: E402
from pingshell.prober.scapy_icmp import ScapyProber  # noqa: E402


def test_builds_ipv4_echo_request():
    pkt = ScapyProber()._build_packet("192.0.2.1", 9, b"abc", seq=3)
    assert pkt[scapy_all.IP].dst == "192.0.2.1"
    assert pkt[scapy_all.IP].ttl == 9
    assert pkt[scapy_all.ICMP].type == 8
    assert bytes(pkt[scapy_all.Raw].load) == b"abc"


def test_builds_ipv6_echo_request():
    pkt = ScapyProber()._build_packet("2001:db8::1", 9, b"abc", seq=3)
    assert pkt[scapy_all.IPv6].hlim == 9
    assert pkt[scapy_all.ICMPv6EchoRequest].data == b"abc"


@pytest.mark.parametrize("icmp_type,code,expected", [
    (11, 0, "TtlExpired"),
    (3, 1, "DestinationHostUnreachable"),
    (3, 0, "DestinationNetworkUnreachable"),
    (3, 9, "DestinationUnreachable"),
])
def test_classifies_ipv4_errors(icmp_type, code, expected):
    reply = scapy_all.IP(src="10.0.0.1") / scapy_all.ICMP(type=icmp_type, code=code)
    assert ScapyProber()._classify(reply, 5) == failure(expected)


def test_classifies_ipv4_echo_reply():
    reply = scapy_all.IP(src="192.0.2.1", ttl=57) / scapy_all.ICMP(type=0)
    assert ScapyProber()._classify(reply, 14) == success("192.0.2.1", 14, 57)


def test_classifies_ipv6_echo_reply():
    reply = scapy_all.IPv6(src="2001:db8::1", hlim=60) / scapy_all.ICMPv6EchoReply()
    assert ScapyProber()._classify(reply, 3) == success("2001:db8::1", 3, 60)


def test_no_answer_is_timed_out(monkeypatch):
    monkeypatch.setattr(scapy_icmp, "sr1", lambda pkt, timeout, verbose: None)
    assert ScapyProber().probe_once("192.0.2.1", 10, 64, b"a") == failure("TimedOut")


def test_local_errors_become_failures(monkeypatch):
    def boom(pkt, timeout, verbose):
        raise PermissionError(1, "Operation not permitted")

    monkeypatch.setattr(scapy_icmp, "sr1", boom)
    outcome = ScapyProber().probe_once("192.0.2.1", 10, 64, b"a")
    assert outcome["status"] == "failure"
    assert outcome["reason"].startswith("PermissionError")


def test_negative_timeout_is_clamped(monkeypatch):
    seen = {}

    def fake_sr1(pkt, timeout, verbose):
        seen["timeout"] = timeout
        return None

    monkeypatch.setattr(scapy_icmp, "sr1", fake_sr1)
    ScapyProber().probe_once("192.0.2.1", -50, 64, b"a")
    assert seen["timeout"] == 0.001
