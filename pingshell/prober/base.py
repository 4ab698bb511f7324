# pingshell/prober/base.py
from abc import ABC, abstractmethod

from pingshell.schemas import ProbeOutcome


def build_payload(size: int) -> bytes:
    """Echo payload of `size` bytes cycling through 'a'..'z'."""
    return bytes(ord("a") + (i % 26) for i in range(size))


class Prober(ABC):
    @abstractmethod
    def probe_once(self, dest: str, timeout_ms: int, ttl: int, payload: bytes) -> ProbeOutcome:
        """Send exactly one echo request to dest and return a ProbeOutcome.

        Failures (timeout, TTL exceeded, unreachable, local errors) are returned
        as failure outcomes, never raised.
        """
        raise NotImplementedError
