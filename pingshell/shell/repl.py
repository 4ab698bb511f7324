# pingshell/shell/repl.py
# Usage:
#   pingshell                 # real ICMP via scapy (needs root / CAP_NET_RAW)
#   pingshell --fake          # scripted replies, no privileges needed
#   pingshell --log-level DEBUG

import argparse
import logging
import signal
import sys
import threading
from contextlib import contextmanager
from typing import Dict, List, Optional

import colorama

from pingshell.cancel import CancellationToken
from pingshell.config import Settings
from pingshell.shell.commands import Command, HelpCommand, build_commands
from pingshell.shell.console import Console

logger = logging.getLogger(__name__)


def split_command_line(line: str) -> List[str]:
    """Split on whitespace; double quotes group words and are dropped."""
    args = []
    current = []
    in_quotes = False
    for ch in line:
        if ch == '"':
            in_quotes = not in_quotes
            continue
        if ch.isspace() and not in_quotes:
            if current:
                args.append("".join(current))
                current = []
        else:
            current.append(ch)
    if current:
        args.append("".join(current))
    return args


@contextmanager
def interrupt_cancels(token: CancellationToken):
    """While active, Ctrl+C cancels `token` instead of raising KeyboardInterrupt."""
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def _handler(signum, frame):
        logger.debug("SIGINT received, cancelling current command")
        token.cancel()

    previous = signal.signal(signal.SIGINT, _handler)
    try:
        yield
    finally:
        signal.signal(signal.SIGINT, previous)


class Shell:
    def __init__(self, console, commands: Dict[str, Command],
                 token: Optional[CancellationToken] = None):
        self.console = console
        self.commands = commands
        self.token = token or CancellationToken()

    def _help(self) -> Optional[HelpCommand]:
        for command in self.commands.values():
            if isinstance(command, HelpCommand):
                return command
        return None

    def dispatch(self, line: str) -> None:
        args = split_command_line(line)
        if not args:
            return

        name = args[0].lower()
        help_cmd = self._help()
        if len(args) > 1 and args[1] == "?" and help_cmd is not None:
            help_cmd.show(name)
            return

        command = self.commands.get(name)
        if command is None:
            self.console.line(f"Unknown command: {name}")
            self.console.line("Type '?' for a list of commands")
            return

        logger.debug("dispatch %s %s", name, args[1:])
        # a Ctrl+C from an earlier command must not stop this one
        self.token.reset()
        with interrupt_cancels(self.token):
            try:
                command.execute(args[1:], self.token)
            except Exception as e:
                logger.debug("command %s failed", name, exc_info=True)
                self.console.error(f"Error: {e}")

    def run(self) -> None:
        while True:
            try:
                line = self.console.prompt()
            except EOFError:
                self.console.line("")
                return
            except KeyboardInterrupt:
                self.console.line("")
                continue
            if not line.strip():
                continue
            self.dispatch(line)


def _scapy_prober():
    from pingshell.prober.scapy_icmp import ScapyProber
    return ScapyProber()


def _fake_prober():
    from pingshell.prober.fake import FakeProber
    return FakeProber.always(rtt_ms=1)


def build_argparser():
    ap = argparse.ArgumentParser(description="Interactive shell with ping, cat and ls")
    ap.add_argument("--fake", action="store_true", help="Answer every ping from a scripted prober")
    ap.add_argument("--log-level", default=Settings.log_level,
                    choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging level (stderr)")
    ap.add_argument("--interval-ms", type=int, default=Settings.interval_ms,
                    help="Pause between echo requests (milliseconds)")
    return ap


def main(argv=None):
    args = build_argparser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="[%(asctime)s] %(levelname)s %(name)s: %(message)s")
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")
    colorama.init()

    s = Settings(log_level=args.log_level, interval_ms=args.interval_ms)
    console = Console()
    commands = build_commands(console, _fake_prober if args.fake else _scapy_prober, settings=s)
    Shell(console, commands).run()


if __name__ == "__main__":
    main()
