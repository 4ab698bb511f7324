# pingshell/session/state.py
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pingshell.schemas import ProbeOutcome


class SessionState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class StatisticsSnapshot:
    sent: int
    received: int
    total_rtt_ms: int
    min_rtt_ms: Optional[int]
    max_rtt_ms: Optional[int]

    @property
    def lost(self) -> int:
        return self.sent - self.received

    @property
    def loss_percent(self) -> Optional[int]:
        if self.sent == 0:
            return None
        return self.lost * 100 // self.sent

    @property
    def average_rtt_ms(self) -> Optional[int]:
        if self.received == 0:
            return None
        return self.total_rtt_ms // self.received


@dataclass
class PingStatistics:
    sent: int = 0
    received: int = 0
    total_rtt_ms: int = 0
    # None until the first reply arrives
    min_rtt_ms: Optional[int] = None
    max_rtt_ms: Optional[int] = None

    def record(self, outcome: ProbeOutcome) -> None:
        self.sent += 1
        if outcome.get("status") != "success":
            return
        rtt = outcome["rtt_ms"]
        self.received += 1
        self.total_rtt_ms += rtt
        self.min_rtt_ms = rtt if self.min_rtt_ms is None else min(self.min_rtt_ms, rtt)
        self.max_rtt_ms = rtt if self.max_rtt_ms is None else max(self.max_rtt_ms, rtt)

    def snapshot(self) -> StatisticsSnapshot:
        return StatisticsSnapshot(
            sent=self.sent,
            received=self.received,
            total_rtt_ms=self.total_rtt_ms,
            min_rtt_ms=self.min_rtt_ms,
            max_rtt_ms=self.max_rtt_ms,
        )


@dataclass
class SessionResult:
    state: SessionState
    stats: StatisticsSnapshot
    lines: List[str]
    saved_path: Optional[str] = None
