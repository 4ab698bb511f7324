# pingshell/shell/commands.py
import logging
import os
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from colorama import Fore

from pingshell.cancel import CancellationToken
from pingshell.config import Settings
from pingshell.errors import PingError
from pingshell.options import parse_ping_args
from pingshell.prober.base import Prober
from pingshell.resolver import is_valid_host
from pingshell.session.controller import PingSession

logger = logging.getLogger(__name__)


class Command(ABC):
    aliases: Tuple[str, ...] = ()
    summary: str = ""  # line shown in the general help listing

    def __init__(self, console):
        self.console = console

    @abstractmethod
    def describe(self) -> List[str]:
        """Detailed help lines for '<command> ?'."""

    @abstractmethod
    def execute(self, args: List[str], token: CancellationToken) -> None:
        raise NotImplementedError


class PingCommand(Command):
    aliases = ("ping",)
    summary = "ping - Send ICMP echo request to network hosts (type 'ping ?' for more details)"

    def __init__(self, console, prober_factory: Callable[[], Prober],
                 resolver: Callable[[str], bool] = is_valid_host,
                 settings: Optional[Settings] = None):
        super().__init__(console)
        self.prober_factory = prober_factory
        self.resolver = resolver
        self.s = settings or Settings()
        self._prober: Optional[Prober] = None

    @property
    def prober(self) -> Prober:
        # built on first use so scapy is only loaded when someone actually pings
        if self._prober is None:
            self._prober = self.prober_factory()
        return self._prober

    def describe(self) -> List[str]:
        return [
            "ping - Send ICMP echo request to network hosts",
            "-t: Continuous ping (break with Ctrl+C)",
            f"-n count: Number of echo requests to send (default is {self.s.count})",
            "-i ttl: Set the Time To Live (TTL) value",
            "-w timeout: Set the timeout in milliseconds",
            "-l size: Set the buffer size in bytes",
            "| filename: Pipe output to a file (adds .txt extension if none provided)",
            "Usage: ping <host> [-t] [-n count] [-i ttl] [-w timeout] [-l size] [| filename]",
        ]

    def execute(self, args: List[str], token: CancellationToken) -> None:
        try:
            options = parse_ping_args(args, resolver=self.resolver, settings=self.s)
        except PingError as e:
            self.console.error(str(e))
            if e.show_help:
                for line in self.describe():
                    self.console.line(line)
            return

        logger.debug("ping options: %s", options)
        PingSession(self.prober, options, self.console, token=token, settings=self.s).run()


class CatCommand(Command):
    aliases = ("cat",)
    summary = "cat - Display the contents of a file (type 'cat ?' for more details)"

    def describe(self) -> List[str]:
        return [
            "cat - Display the contents of a file",
            "Automatically tries .txt extension if file not found",
            "Can display multiple files in sequence",
            "Usage: cat <filename> [filename2] [filename3] ...",
        ]

    def _show(self, path: str) -> None:
        try:
            with open(path, encoding="utf-8", errors="replace") as fh:
                content = fh.read()
        except OSError as e:
            self.console.error(f"Error reading file '{path}': {e.strerror or e}")
            return
        self.console.colored(f"Contents of {path}:", Fore.GREEN)
        self.console.line(content)

    def execute(self, args: List[str], token: CancellationToken) -> None:
        if not args:
            for line in self.describe():
                self.console.line(line)
            return

        for raw in args:
            path = raw.strip('"')
            if os.path.isfile(path):
                self._show(path)
            elif os.path.isfile(path + ".txt"):
                self._show(path + ".txt")
            else:
                self.console.error(f"File not found: {path}")


class ListCommand(Command):
    aliases = ("ls", "dir")
    summary = "ls/dir - List files and directories (type 'ls ?' for more details)"

    def describe(self) -> List[str]:
        return [
            "ls/dir - List files and directories",
            "Shows all files and subdirectories in the specified path",
            "Uses current directory if no path is provided",
            "Usage: ls [path] or dir [path]",
        ]

    def execute(self, args: List[str], token: CancellationToken) -> None:
        path = args[0].strip('"') if args else os.getcwd()
        if not os.path.isdir(path):
            self.console.error(f"Directory not found: {path}")
            return

        self.console.colored(f"Listing for {path}:", Fore.YELLOW)
        try:
            entries = sorted(os.listdir(path))
        except OSError as e:
            self.console.error(f"Error listing directory: {e.strerror or e}")
            return
        for name in entries:
            self.console.line(os.path.join(path, name))


class ClearCommand(Command):
    aliases = ("cls", "clear")
    summary = "cls/clear - Clear the console screen"

    def describe(self) -> List[str]:
        return ["cls/clear - Clear the console screen", "Usage: cls or clear"]

    def execute(self, args: List[str], token: CancellationToken) -> None:
        self.console.clear()


class ExitCommand(Command):
    aliases = ("exit", "quit", "q")
    summary = "exit/quit/q - Exit the shell"

    def describe(self) -> List[str]:
        return [
            "exit/quit/q - Exit the shell",
            "Terminates the application immediately",
            "Usage: exit or quit or q",
        ]

    def execute(self, args: List[str], token: CancellationToken) -> None:
        raise SystemExit(0)


class HelpCommand(Command):
    aliases = ("help", "?", "command", "commands")
    summary = "? - Display this help message"

    def __init__(self, console, commands: Sequence[Command] = ()):
        super().__init__(console)
        self.commands = list(commands)

    def describe(self) -> List[str]:
        return [
            "help or ? - Display help information",
            "Shows general help or specific command details",
            "Usage: help [command] or ? [command]",
            "Alternative syntax: <command> ?",
        ]

    def lookup(self, name: str) -> Optional[Command]:
        for command in self.commands:
            if name in command.aliases:
                return command
        return None

    def show(self, name: Optional[str] = None) -> None:
        if not name:
            self.console.line("Available commands:")
            for command in self.commands:
                self.console.line(command.summary)
            self.console.line("Type '<command> ?' for detailed help on a specific command")
            return

        command = self.lookup(name.lower())
        if command is None:
            self.console.line(f"No help available for '{name}'")
            self.console.line("Type '?' to see all available commands")
            return
        for line in command.describe():
            self.console.line(line)

    def execute(self, args: List[str], token: CancellationToken) -> None:
        self.show(args[0] if args else None)


def build_commands(console, prober_factory: Callable[[], Prober],
                   resolver: Callable[[str], bool] = is_valid_host,
                   settings: Optional[Settings] = None) -> Dict[str, Command]:
    """Alias -> command table for the shell; help lists commands in this order."""
    help_cmd = HelpCommand(console)
    commands = [
        help_cmd,
        PingCommand(console, prober_factory, resolver=resolver, settings=settings),
        CatCommand(console),
        ListCommand(console),
        ClearCommand(console),
        ExitCommand(console),
    ]
    help_cmd.commands = commands

    table: Dict[str, Command] = {}
    for command in commands:
        for alias in command.aliases:
            table[alias] = command
    return table
