# pingshell/cancel.py
import threading


class CancellationToken:
    """
    Cooperative cancellation flag shared between the shell (which sets it from
    the SIGINT handler) and a running command (which checks it between probes
    and sleeps on it instead of time.sleep).
    """

    def __init__(self):
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    def reset(self) -> None:
        self._event.clear()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """Sleep up to `seconds`; returns True as soon as cancellation is requested."""
        if seconds <= 0:
            return self._event.is_set()
        return self._event.wait(seconds)
