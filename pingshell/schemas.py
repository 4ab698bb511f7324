from dataclasses import dataclass
from typing import Literal, Optional, TypedDict

OutcomeStatus = Literal["success", "failure"]

class ProbeOutcome(TypedDict, total=False):
    status: OutcomeStatus
    address: Optional[str]   # responding address, success only
    rtt_ms: Optional[int]
    ttl: Optional[int]       # TTL / hop limit observed on the reply
    reason: Optional[str]    # "TimedOut", "TtlExpired", ... on failure


def success(address: str, rtt_ms: int, ttl: int) -> ProbeOutcome:
    return {"status": "success", "address": address, "rtt_ms": rtt_ms, "ttl": ttl, "reason": None}


def failure(reason: str) -> ProbeOutcome:
    return {"status": "failure", "address": None, "rtt_ms": None, "ttl": None, "reason": reason}


@dataclass(frozen=True)
class PingOptions:
    host: str
    continuous: bool = False
    count: int = 4
    ttl: int = 128
    timeout_ms: int = 5000
    buffer_size: int = 32
    output_path: Optional[str] = None
