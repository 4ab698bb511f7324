# pingshell/session/controller.py

import logging
import queue
import threading
from typing import Optional

from pingshell.cancel import CancellationToken
from pingshell.config import Settings
from pingshell.prober.base import build_payload
from pingshell.schemas import PingOptions, ProbeOutcome, failure
from pingshell.session.report import header_line, outcome_line, statistics_lines
from pingshell.session.state import PingStatistics, SessionResult, SessionState
from pingshell.sink import OutputSink

logger = logging.getLogger(__name__)


class PingSession:
    """
    Runs one ping command: header, one probe per iteration (fixed count or
    until cancelled), the statistics block, then the optional file copy.

    console needs .line(text) and .error(text). Probes run on a worker thread
    so a pending reply can be abandoned when the token is cancelled; the
    inter-probe pause sleeps on the token for the same reason.
    """

    def __init__(self, prober, options: PingOptions, console,
                 token: Optional[CancellationToken] = None,
                 settings: Optional[Settings] = None):
        self.prober = prober
        self.opts = options
        self.console = console
        self.token = token or CancellationToken()
        self.s = settings or Settings()
        self.state = SessionState.IDLE
        self.stats = PingStatistics()
        self.sink = OutputSink(echo=console.line)

    def _enter(self, state: SessionState) -> None:
        logger.debug("session %s: %s -> %s", self.opts.host, self.state.value, state.value)
        self.state = state

    def _probe(self, payload: bytes) -> Optional[ProbeOutcome]:
        # None means cancellation arrived before the reply did
        results = queue.Queue(maxsize=1)

        def _worker():
            try:
                results.put((self.prober.probe_once(
                    self.opts.host, self.opts.timeout_ms, self.opts.ttl, payload), None))
            except Exception as e:
                results.put((None, e))

        # daemon: an abandoned probe must not keep the interpreter alive on exit
        threading.Thread(target=_worker, name="ping-probe", daemon=True).start()

        poll_s = self.s.probe_poll_ms / 1000.0
        while True:
            try:
                outcome, error = results.get(timeout=poll_s)
            except queue.Empty:
                if self.token.cancelled:
                    logger.debug("abandoning in-flight probe to %s", self.opts.host)
                    return None
                continue
            if error is not None:
                raise error
            return outcome

    def _save(self) -> Optional[str]:
        try:
            saved = self.sink.write_to(self.opts.output_path)
        except OSError as e:
            self.console.error(f"Error writing to file: {e.strerror or e}")
            return None
        self.console.line("")
        self.console.line(f"Output saved to {saved}")
        return saved

    def run(self) -> SessionResult:
        payload = build_payload(self.opts.buffer_size)

        self._enter(SessionState.RUNNING)
        self.sink.emit(header_line(self.opts.host, self.opts.buffer_size))

        completed = 0
        while True:
            if self.token.cancelled:
                self._enter(SessionState.CANCELLED)
                break

            outcome = self._probe(payload)
            if outcome is None:
                # counted as sent and lost, no reply line
                self.stats.record(failure("Cancelled"))
                self._enter(SessionState.CANCELLED)
                break

            self.stats.record(outcome)
            self.sink.emit(outcome_line(outcome, self.opts.buffer_size))
            completed += 1

            if not self.opts.continuous and completed >= self.opts.count:
                self._enter(SessionState.COMPLETED)
                break

            if self.token.wait(self.s.interval_ms / 1000.0):
                self._enter(SessionState.CANCELLED)
                break

        stats = self.stats.snapshot()
        for line in statistics_lines(self.opts.host, stats):
            self.sink.emit(line)

        saved_path = None
        if self.opts.output_path:
            saved_path = self._save()

        return SessionResult(state=self.state, stats=stats, lines=list(self.sink.lines),
                             saved_path=saved_path)
