# tests/conftest.py
import pytest

from pingshell.config import Settings


class RecordingConsole:
    """Console stand-in that keeps plain lines and error lines apart."""

    def __init__(self, on_line=None):
        self.lines = []
        self.errors = []
        self.cleared = 0
        self.on_line = on_line

    def line(self, text=""):
        self.lines.append(text)
        if self.on_line:
            self.on_line(text)

    def colored(self, text, color):
        self.lines.append(text)

    def error(self, text):
        self.errors.append(text)

    def clear(self):
        self.cleared += 1


@pytest.fixture
def console():
    return RecordingConsole()


@pytest.fixture
def fast_settings():
    # no real pauses between probes in tests
    return Settings(interval_ms=0, probe_poll_ms=5)


def always_resolves(host):
    return True


def never_resolves(host):
    return False
