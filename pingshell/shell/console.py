# pingshell/shell/console.py
import sys

from colorama import Cursor, Fore, Style, ansi

PROMPT = Fore.CYAN + "▶" + Fore.MAGENTA + "> " + Style.RESET_ALL


class Console:
    """Terminal output with colorama colours; the only place that writes to stdout."""

    def __init__(self, stream=None):
        self.stream = stream or sys.stdout

    def line(self, text: str = "") -> None:
        print(text, file=self.stream, flush=True)

    def colored(self, text: str, color: str) -> None:
        print(color + text + Style.RESET_ALL, file=self.stream, flush=True)

    def error(self, text: str) -> None:
        self.colored(text, Fore.RED)

    def clear(self) -> None:
        self.stream.write(ansi.clear_screen() + Cursor.POS(1, 1))
        self.stream.flush()

    def prompt(self) -> str:
        return input(PROMPT)
