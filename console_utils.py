import logging
import sys
from typing import Optional, TextIO
from colorama import Fore, Style

from services.interfaces import IMessenger

# kind -> (prefix, color, log level)
STYLES = {
    "info": ("", Fore.CYAN, logging.INFO),
    "success": ("✓ ", Fore.GREEN, logging.INFO),
    "warning": ("[WARNING] ", Fore.YELLOW, logging.WARNING),
    "error": ("✗ ", Fore.RED, logging.ERROR),
    "critical": ("[CRITICAL ERROR] ", Fore.RED + Style.BRIGHT, logging.CRITICAL),
}


class ConsoleMessenger(IMessenger):
    """Prints operator-facing lines and mirrors them into the recovery log."""

    def __init__(self, logger: Optional[logging.Logger] = None, enable_colors: bool = True,
                 stream: Optional[TextIO] = None):
        self.logger = logger
        self.enable_colors = enable_colors
        self.stream = stream

    def _paint(self, text: str, color: str) -> str:
        return f"{color}{text}{Style.RESET_ALL}" if self.enable_colors else text

    def _emit(self, kind: str, message: str) -> None:
        prefix, color, level = STYLES[kind]
        print(self._paint(prefix + message, color), file=self.stream or sys.stdout)
        if self.logger:
            self.logger.log(level, prefix + message)

    def info(self, message: str) -> None:
        self._emit("info", message)

    def success(self, message: str) -> None:
        self._emit("success", message)

    def warning(self, message: str) -> None:
        self._emit("warning", message)

    def error(self, message: str) -> None:
        self._emit("error", message)

    def critical(self, message: str) -> None:
        self._emit("critical", message)

    def section_header(self, title: str) -> None:
        rule = "=" * len(title)
        for line in (f"\n{rule}", title, rule):
            self._emit("info", line)

    def config_item(self, key: str, value, mask_value: bool = False) -> None:
        """One "key: value" line; masked values show as *** and empty ones as (not set)."""
        if not value:
            shown = "(not set)"
        else:
            shown = "***" if mask_value else str(value)
        print(f"  {key}: {self._paint(shown, Fore.GREEN)}", file=self.stream or sys.stdout)
        if self.logger:
            self.logger.info(f"  {key}: {shown}")


_messenger: Optional[ConsoleMessenger] = None


def get_messenger() -> ConsoleMessenger:
    global _messenger
    if _messenger is None:
        _messenger = ConsoleMessenger()
    return _messenger


def configure_messenger(logger: Optional[logging.Logger] = None, enable_colors: bool = True) -> None:
    """Replace the shared messenger once the recovery logger exists."""
    global _messenger
    _messenger = ConsoleMessenger(logger=logger, enable_colors=enable_colors)
