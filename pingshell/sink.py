# pingshell/sink.py
import os
import stat
import tempfile
from typing import Callable, List, Optional


def _target_mode(path: str) -> int:
    """Mode of the file being replaced, or 0o666 minus the umask for a new one."""
    try:
        return stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


class OutputSink:
    """
    Collects every line a session produces, forwarding each one to `echo`
    (normally the console) as it is emitted. The buffered transcript can be
    written to a file once, at the end.
    """

    def __init__(self, echo: Optional[Callable[[str], None]] = None):
        self.echo = echo
        self.lines: List[str] = []

    def emit(self, line: str) -> None:
        self.lines.append(line)
        if self.echo is not None:
            self.echo(line)

    def text(self) -> str:
        return "".join(line + "\n" for line in self.lines)

    def write_to(self, path: str) -> str:
        """Write the transcript to path atomically and return its absolute path.

        The data goes to a temp file in the same directory which then replaces
        path; on any OSError the temp file is removed and the error re-raised.
        """
        target = os.path.abspath(path)
        fd, tmp = tempfile.mkstemp(dir=os.path.dirname(target), prefix=".pingshell-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
                fh.write(self.text())
            # mkstemp makes the file 0600; give it the mode a plain open() would
            os.chmod(tmp, _target_mode(target))
            os.replace(tmp, target)
        except OSError:
            if os.path.exists(tmp):
                os.remove(tmp)
            raise
        return target
