import logging
import shlex
from typing import Iterable, Optional

PASSWORD_FLAG = "-p"
MASK = "***"


def redact_command(argv: Iterable[str]) -> str:
    """Join argv for display, masking the glued -p<password> token."""
    shown = [
        PASSWORD_FLAG + MASK if arg.startswith(PASSWORD_FLAG) and len(arg) > len(PASSWORD_FLAG) else arg
        for arg in argv
    ]
    return shlex.join(shown)


class SecretRedactingFilter(logging.Filter):
    """Replaces every known secret in a record's message with ***."""

    def __init__(self, secrets: Optional[Iterable[str]] = None):
        super().__init__()
        self._secrets = {s for s in (secrets or []) if s}

    def add_secret(self, secret: str) -> None:
        if secret:
            self._secrets.add(secret)

    def filter(self, record: logging.LogRecord) -> bool:
        if not self._secrets:
            return True
        message = record.getMessage()
        for secret in self._secrets:
            message = message.replace(secret, MASK)
        record.msg = message
        record.args = None
        return True


class RecoveryLogger:
    def __init__(self, name: str = "recovery", log_file: Optional[str] = "recovery.log",
                 level: int = logging.INFO, secrets: Optional[Iterable[str]] = None):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(level)
        self.logger.handlers.clear()

        self._redactor = SecretRedactingFilter(secrets)

        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        handlers: list[logging.Handler] = [logging.StreamHandler()]
        if log_file:
            handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

        for handler in handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
            handler.addFilter(self._redactor)
            self.logger.addHandler(handler)

    def add_secret(self, secret: str) -> None:
        self._redactor.add_secret(secret)

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)
