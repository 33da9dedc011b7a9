import os
from pathlib import Path

from config import (
    DEFAULT_BACKUP_COMMAND,
    DEFAULT_PORT,
    DEFAULT_RESTORE_COMMAND,
    RecoveryConfig,
    RecoveryProperties,
)
from errors import ConfigError

MAX_PORT = 65535

REQUIRED_FIELDS = (
    ("username", "username"),
    ("password", "password"),
    ("hostname", "hostname"),
    ("schema", "schema"),
    ("backup_path", "backup path"),
)


def is_blank(value) -> bool:
    return value is None or not str(value).strip()


def _check_backup_path(backup_path: str) -> None:
    path = Path(backup_path)
    if not path.exists():
        raise ConfigError(f"Backup path does not exist: {backup_path}", field="backup_path")
    if not path.is_dir():
        raise ConfigError(f"Backup path is not a directory: {backup_path}", field="backup_path")
    if not os.access(path, os.R_OK | os.W_OK):
        raise ConfigError(
            f"Backup path read / write permissions not valid: {backup_path}",
            field="backup_path",
        )


def _resolve_port(port) -> int:
    if port is None or port == 0:
        return DEFAULT_PORT
    if isinstance(port, bool) or not isinstance(port, int):
        raise ConfigError(f"Port must be an integer: {port!r}", field="port")
    if port < 0 or port > MAX_PORT:
        raise ConfigError(f"Port out of range: {port}", field="port")
    return port


def _resolve_command(value, default: str, field_name: str) -> str:
    if value is None:
        return default
    if is_blank(value):
        raise ConfigError(f"No {field_name.replace('_', ' ')} provided", field=field_name)
    return value


def validate_properties(properties: RecoveryProperties) -> None:
    """
    Check the caller's properties, stopping at the first problem.

    Required fields are checked in a fixed order (username, password,
    hostname, schema, backup path); the backup path must then exist, be a
    directory and be readable and writable.

    Raises:
        ConfigError: naming the first missing or invalid field
    """
    for attr, label in REQUIRED_FIELDS:
        if is_blank(getattr(properties, attr)):
            raise ConfigError(f"No {label} provided", field=attr)

    _check_backup_path(properties.backup_path)
    _resolve_port(properties.port)
    _resolve_command(properties.backup_command, DEFAULT_BACKUP_COMMAND, "backup_command")
    _resolve_command(properties.restore_command, DEFAULT_RESTORE_COMMAND, "restore_command")


def build_config(properties: RecoveryProperties) -> RecoveryConfig:
    """Validate properties and turn them into an immutable RecoveryConfig."""
    validate_properties(properties)
    return RecoveryConfig(
        username=properties.username,
        password=properties.password,
        hostname=properties.hostname,
        port=_resolve_port(properties.port),
        schema=properties.schema,
        backup_path=Path(properties.backup_path).absolute(),
        backup_command=_resolve_command(
            properties.backup_command, DEFAULT_BACKUP_COMMAND, "backup_command"),
        restore_command=_resolve_command(
            properties.restore_command, DEFAULT_RESTORE_COMMAND, "restore_command"),
    )
