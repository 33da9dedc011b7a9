"""Exceptions raised by the recovery utility.

Every failure leaves the core as one of these types so callers can map them
to exit codes or ignore a specific case (e.g. dropping a missing schema).
"""

from typing import Optional


class RecoveryError(RuntimeError):
    """Base exception for all recovery failures."""


class ConfigError(RecoveryError):
    """Raised when a configuration field is missing or invalid."""

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class ExecutionError(RecoveryError):
    """Raised when an external command could not be launched."""

    def __init__(self, message: str, command: Optional[str] = None):
        super().__init__(message)
        self.command = command


class BackupError(RecoveryError):
    """Raised when the dump process exits with a non-zero code."""

    def __init__(self, exit_code: int, target: str):
        super().__init__(f"Failed to backup to file with exit code [{exit_code}]: {target}")
        self.exit_code = exit_code
        self.target = target


class RestoreError(RecoveryError):
    """Raised when the restore process exits with a non-zero code."""

    def __init__(self, exit_code: int, source: str):
        super().__init__(f"Failed to restore from file with exit code [{exit_code}]: {source}")
        self.exit_code = exit_code
        self.source = source


class SchemaError(RecoveryError):
    """Raised when a connection or DDL statement fails."""

    def __init__(self, message: str, sql: Optional[str] = None):
        super().__init__(message)
        self.sql = sql

    @property
    def driver_error_code(self) -> Optional[int]:
        """MySQL error number of the wrapped driver error, if there is one."""
        cause = self.__cause__
        if cause is not None and getattr(cause, "args", None):
            code = cause.args[0]
            if isinstance(code, int):
                return code
        return None
