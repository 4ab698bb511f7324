# pingshell/prober/fake.py
from collections import deque
from typing import Optional

from pingshell.prober.base import Prober
from pingshell.schemas import ProbeOutcome, failure, success


class FakeProber(Prober):
    """
    script: list of ProbeOutcome dicts returned one per call, in order.
    default: outcome returned once the script runs dry (a TimedOut failure if None).
    A success outcome without an address answers from the probed destination.
    Every call is recorded in self.calls as (dest, timeout_ms, ttl, payload).
    """
    def __init__(self, script=None, default=None):
        self.script = deque(script or [])
        self.default = default
        self.calls = []

    @classmethod
    def always(cls, rtt_ms: int, address: Optional[str] = None, ttl: int = 64) -> "FakeProber":
        return cls(default=success(address, rtt_ms, ttl))

    def probe_once(self, dest: str, timeout_ms: int, ttl: int, payload: bytes) -> ProbeOutcome:
        self.calls.append((dest, timeout_ms, ttl, payload))
        if self.script:
            outcome = dict(self.script.popleft())
        elif self.default is not None:
            outcome = dict(self.default)
        else:
            return failure("TimedOut")
        if outcome.get("status") == "success" and not outcome.get("address"):
            outcome["address"] = dest
        return outcome
