# pingshell/errors.py

class PingError(Exception):
    """Base class for errors that abort a ping command before probing starts."""

    show_help = False


class PingArgumentError(PingError):
    # bad flag, bad value, unwritable output path
    show_help = True


class HostResolutionError(PingError):
    def __init__(self, host: str):
        super().__init__(f"Could not resolve host: {host}")
        self.host = host
