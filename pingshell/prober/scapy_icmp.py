# pingshell/prober/scapy_icmp.py
import ipaddress
import itertools
import logging
import os
import time

from scapy.all import (
    ICMP,
    IP,
    ICMPv6DestUnreach,
    ICMPv6EchoReply,
    ICMPv6EchoRequest,
    ICMPv6TimeExceeded,
    IPv6,
    Raw,
    conf,
    sr1,
)

from pingshell.prober.base import Prober
from pingshell.resolver import resolve_address
from pingshell.schemas import ProbeOutcome, failure, success

logger = logging.getLogger(__name__)

# ICMP destination-unreachable codes -> status names shown in "Request timed out: ..."
UNREACHABLE_V4 = {
    0: "DestinationNetworkUnreachable",
    1: "DestinationHostUnreachable",
    2: "DestinationProtocolUnreachable",
    3: "DestinationPortUnreachable",
    13: "DestinationProhibited",
}
UNREACHABLE_V6 = {
    0: "DestinationNetworkUnreachable",
    1: "DestinationProhibited",
    3: "DestinationHostUnreachable",
    4: "DestinationPortUnreachable",
}


class ScapyProber(Prober):
    """
    Sends one ICMP echo request per call with scapy's sr1 and normalizes the
    answer into a ProbeOutcome. Raw sockets need root (or CAP_NET_RAW); without
    them every probe comes back as a failure carrying the OS error.
    """

    def __init__(self, dont_fragment: bool = True):
        self.dont_fragment = dont_fragment
        self.ident = os.getpid() & 0xFFFF
        self._seq = itertools.count(1)
        conf.verb = 0

    def _build_packet(self, address: str, ttl: int, payload: bytes, seq: int):
        if ipaddress.ip_address(address).version == 6:
            return IPv6(dst=address, hlim=ttl) / ICMPv6EchoRequest(id=self.ident, seq=seq, data=payload)
        flags = "DF" if self.dont_fragment else 0
        return IP(dst=address, ttl=ttl, flags=flags) / ICMP(id=self.ident, seq=seq) / Raw(load=payload)

    def _classify(self, reply, rtt_ms: int) -> ProbeOutcome:
        if reply.haslayer(ICMPv6EchoReply):
            return success(reply[IPv6].src, rtt_ms, reply[IPv6].hlim)
        if reply.haslayer(ICMPv6TimeExceeded):
            return failure("TtlExpired")
        if reply.haslayer(ICMPv6DestUnreach):
            return failure(UNREACHABLE_V6.get(reply[ICMPv6DestUnreach].code, "DestinationUnreachable"))

        if reply.haslayer(ICMP):
            icmp_type = reply[ICMP].type
            if icmp_type == 0:
                return success(reply[IP].src, rtt_ms, reply[IP].ttl)
            if icmp_type == 11:
                return failure("TtlExpired")
            if icmp_type == 3:
                return failure(UNREACHABLE_V4.get(reply[ICMP].code, "DestinationUnreachable"))
            return failure(f"IcmpType{icmp_type}")

        return failure("Unknown")

    def probe_once(self, dest: str, timeout_ms: int, ttl: int, payload: bytes) -> ProbeOutcome:
        address = resolve_address(dest)
        if address is None:
            return failure("BadDestination")

        seq = next(self._seq)
        # scapy treats a negative timeout as "wait forever"
        timeout_s = max(timeout_ms, 1) / 1000.0

        try:
            pkt = self._build_packet(address, ttl, payload, seq)
            t0 = time.monotonic_ns()
            reply = sr1(pkt, timeout=timeout_s, verbose=0)
            t1 = time.monotonic_ns()
        except Exception as e:
            logger.debug("probe to %s (seq=%d) failed locally", address, seq, exc_info=True)
            return failure(f"{type(e).__name__}: {e}")

        if reply is None:
            logger.debug("probe to %s (seq=%d) got no answer within %.3fs", address, seq, timeout_s)
            return failure("TimedOut")

        rtt_ms = int(round((t1 - t0) / 1e6))
        outcome = self._classify(reply, rtt_ms)
        logger.debug("probe to %s (seq=%d ttl=%d) -> %s", address, seq, ttl, outcome)
        return outcome
