import os

from config import RecoveryProperties
from console_utils import get_messenger

ENV_VARS = {
    'hostname': "DB_HOST",
    'port': "DB_PORT",
    'username': "DB_USER",
    'password': "DB_PASSWORD",
    'schema': "DB_SCHEMA",
    'backup_path': "BACKUP_PATH",
    'backup_command': "BACKUP_COMMAND",
    'restore_command': "RESTORE_COMMAND",
}


def parse_port(value, parser=None) -> int:
    if value in (None, ""):
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        message = f"Port must be a number, got {value!r}"
        if parser is not None:
            parser.error(message)
        raise ValueError(message)


def validate_manual_config(args, parser) -> RecoveryProperties:
    """
    Build properties from command line arguments.

    Args:
        args: Parsed command line arguments
        parser: ArgumentParser instance for error reporting

    Returns:
        RecoveryProperties with whatever the flags provided
    """
    messenger = get_messenger()

    if not all([args.host, args.user, args.schema, args.backup_path]):
        parser.error("--config manual requires --host, --user, --schema and --backup-path")

    if not args.password:
        messenger.warning("No password provided. Connection may fail.")

    return RecoveryProperties(
        username=args.user,
        password=args.password or "",
        hostname=args.host,
        port=parse_port(args.port, parser),
        schema=args.schema,
        backup_path=args.backup_path,
        backup_command=args.backup_command,
        restore_command=args.restore_command,
    )


def validate_file_config(args, parser=None) -> RecoveryProperties:
    """
    Build properties from environment variables (.env already loaded).

    Command line flags, when given, win over the environment.
    """
    messenger = get_messenger()

    def pick(field: str, flag_value):
        return flag_value if flag_value else os.getenv(ENV_VARS[field])

    properties = RecoveryProperties(
        username=pick('username', args.user),
        password=pick('password', args.password),
        hostname=pick('hostname', args.host),
        port=parse_port(pick('port', args.port), parser),
        schema=pick('schema', args.schema),
        backup_path=pick('backup_path', args.backup_path),
        backup_command=pick('backup_command', args.backup_command),
        restore_command=pick('restore_command', args.restore_command),
    )

    missing_vars = [
        ENV_VARS[field] for field in ('hostname', 'username', 'schema', 'backup_path')
        if not getattr(properties, field)
    ]
    if missing_vars:
        messenger.error("Missing required environment variables in .env file:")
        for var in missing_vars:
            messenger.error(f"  - {var}")

    if not properties.password:
        messenger.warning("DB_PASSWORD not set in .env. Connection may fail.")

    return properties


def validate_config(args, parser) -> RecoveryProperties:
    if args.config == "manual":
        return validate_manual_config(args, parser)
    elif args.config == "file":
        return validate_file_config(args, parser)
    else:
        parser.error(f"Unsupported config type: {args.config}")
