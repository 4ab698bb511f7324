# pingshell/options.py
import os
import re
from typing import Callable, List, Optional

from pingshell.config import Settings
from pingshell.errors import HostResolutionError, PingArgumentError
from pingshell.resolver import is_valid_host
from pingshell.schemas import PingOptions

LOOPBACK_ALIASES = ("localhost", "local")
REDIRECT = "|"
MIN_TTL, MAX_TTL = 1, 255

_INT_RE = re.compile(r"^[+-]?\d+$")


def _parse_int(value: str) -> Optional[int]:
    value = value.strip()
    if not _INT_RE.match(value):
        return None
    return int(value)


def has_extension(path: str) -> bool:
    # ".results" has an extension, "out." does not
    name = os.path.basename(path)
    dot = name.rfind(".")
    return dot != -1 and dot < len(name) - 1


def prepare_output_path(raw: str, default_extension: str = ".txt") -> str:
    """
    Validate a "| target" path and return the path that will be written.
    Adds default_extension when the name has none, checks the parent directory
    exists and that the file can be created or overwritten. An existing file is
    left untouched; a probe file created here is removed again.
    """
    path = raw
    directory = os.path.dirname(path)
    if directory and not os.path.isdir(directory):
        raise PingArgumentError(f"directory does not exist: {directory}")

    if not has_extension(path):
        path += default_extension

    if os.path.isdir(path):
        raise PingArgumentError(f"invalid file path: {path} is a directory")
    if os.path.exists(path):
        if not os.access(path, os.W_OK):
            raise PingArgumentError(f"invalid file path: {path} is not writable")
        return path

    try:
        with open(path, "x"):
            pass
        os.remove(path)
    except OSError as e:
        raise PingArgumentError(f"invalid file path: {e.strerror or e}") from e
    return path


def parse_ping_args(tokens: List[str],
                    resolver: Callable[[str], bool] = is_valid_host,
                    settings: Optional[Settings] = None) -> PingOptions:
    """
    Turn the tokens following "ping" into PingOptions.

    tokens[0] is the host; the rest are flags in any order. Raises
    PingArgumentError for bad input and HostResolutionError when the host is
    neither an IP literal nor resolvable. Flags are checked before the host.
    """
    s = settings or Settings()
    if not tokens or not tokens[0].strip():
        raise PingArgumentError("missing host")

    host = tokens[0]
    if host.lower() in LOOPBACK_ALIASES:
        host = s.loopback

    continuous = False
    count = s.count
    ttl = s.ttl
    timeout_ms = s.timeout_ms
    buffer_size = s.buffer_size
    output_path = None

    i = 1
    while i < len(tokens):
        arg = tokens[i].lower()

        if arg == "-t":
            continuous = True
            i += 1
            continue

        if arg in ("-n", "-i", "-w", "-l", REDIRECT):
            if i + 1 >= len(tokens):
                raise PingArgumentError(f"missing value for {arg}")
            value = tokens[i + 1]
            i += 2

            if arg == REDIRECT:
                output_path = prepare_output_path(value, s.default_extension)
                continue

            number = _parse_int(value)
            if arg == "-n":
                if number is None or number <= 0:
                    raise PingArgumentError(f"invalid count: {value} (must be a positive number)")
                count = number
            elif arg == "-i":
                if number is None or not MIN_TTL <= number <= MAX_TTL:
                    raise PingArgumentError(f"invalid TTL: {value} (must be between {MIN_TTL} and {MAX_TTL})")
                ttl = number
            elif arg == "-w":
                if number is None:
                    raise PingArgumentError(f"invalid timeout: {value}")
                timeout_ms = number
            elif arg == "-l":
                if number is None or not 1 <= number <= s.max_buffer_size:
                    raise PingArgumentError(
                        f"invalid buffer size: {value} (must be between 1 and {s.max_buffer_size})")
                buffer_size = number
            continue

        if arg.startswith("-"):
            raise PingArgumentError(f"unknown argument: {tokens[i]}")

        # stray non-flag words are ignored
        i += 1

    if not resolver(host):
        raise HostResolutionError(host)

    return PingOptions(
        host=host,
        continuous=continuous,
        count=count,
        ttl=ttl,
        timeout_ms=timeout_ms,
        buffer_size=buffer_size,
        output_path=output_path,
    )
