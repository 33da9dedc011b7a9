import argparse
import logging
import sys
from dotenv import load_dotenv
from colorama import init

from clients.mysql_client import MysqlRecoveryManager
from cli.validateconfig import validate_config
from commands.registry import build_dispatcher
from console_utils import get_messenger, configure_messenger
from custom_logging import RecoveryLogger
from errors import BackupError, ConfigError, ExecutionError, RestoreError, SchemaError

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_EXECUTION_ERROR = 3
EXIT_BACKUP_ERROR = 4
EXIT_RESTORE_ERROR = 5
EXIT_SCHEMA_ERROR = 6

EXIT_CODES = (
    (ConfigError, EXIT_CONFIG_ERROR),
    (ExecutionError, EXIT_EXECUTION_ERROR),
    (BackupError, EXIT_BACKUP_ERROR),
    (RestoreError, EXIT_RESTORE_ERROR),
    (SchemaError, EXIT_SCHEMA_ERROR),
)


def exit_code_for(error: Exception) -> int:
    for error_type, code in EXIT_CODES:
        if isinstance(error, error_type):
            return code
    return EXIT_FAILURE


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="MySQL Schema Recovery Utility - create, drop, back up and restore a schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Nightly dump using .env file configuration
  python -m cli.dbtool backup --tag nightly --config file

  # Restore a dump with manual configuration
  python -m cli.dbtool restore --artifact test_2024-01-01_00-00-00_nightly.sql --config manual \\
    --host localhost --user root --password secret --schema test --backup-path /backups

  # Drop the schema, tolerating that it is already gone
  python -m cli.dbtool drop --config file --ignore-missing
    """
    )

    parser.add_argument(
        "command",
        choices=["create", "drop", "backup", "restore", "list"],
        help="Command to execute"
    )

    parser.add_argument(
        "--config",
        default="file",
        choices=["manual", "file"],
        help="Configuration source: 'manual' for CLI args or 'file' for .env"
    )

    parser.add_argument("--tag", help="Label embedded in the backup file name")
    parser.add_argument("--artifact", help="Backup file name to restore from")
    parser.add_argument("--ignore-missing", action="store_true",
                        help="drop: succeed when the schema does not exist")

    parser.add_argument("--host", help="Database host address")
    parser.add_argument("--port", help="Database port (default: 3306)")
    parser.add_argument("--user", help="Database username")
    parser.add_argument("--password", help="Database password")
    parser.add_argument("--schema", help="Schema to manage")
    parser.add_argument("--backup-path", help="Existing directory holding the .sql dumps")
    parser.add_argument("--backup-command", help="Dump executable (default: mysqldump)")
    parser.add_argument("--restore-command", help="Restore executable (default: mysql)")
    parser.add_argument("--log-file", default=None, help="Also write the log to this file")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--verbose", action="store_true", help="Log tool output and commands at debug level")

    return parser


def main(argv=None) -> int:
    init(autoreset=True)
    load_dotenv()

    parser = build_parser()
    args = parser.parse_args(argv)

    messenger = get_messenger()

    try:
        properties = validate_config(args, parser)

        logger = RecoveryLogger(
            name="recovery",
            log_file=args.log_file,
            level=logging.DEBUG if args.verbose else logging.INFO,
            secrets=[properties.password],
        )
        configure_messenger(logger=logger.logger, enable_colors=not args.no_color)
        messenger = get_messenger()

        manager = MysqlRecoveryManager.create(properties, logger=logger, messenger=messenger)

        messenger.section_header("Configuration")
        messenger.config_item("Host", manager.config.hostname)
        messenger.config_item("Port", manager.config.port)
        messenger.config_item("User", manager.config.username)
        messenger.config_item("Password", manager.config.password, mask_value=True)
        messenger.config_item("Schema", manager.config.schema)
        messenger.config_item("Backup Path", manager.backup_path)

        dispatcher = build_dispatcher(manager, messenger)
        dispatcher.dispatch(args.command, args)
        return EXIT_SUCCESS

    except KeyboardInterrupt:
        messenger.info("\n\nInterrupted by user. Exiting...")
        return EXIT_FAILURE

    except Exception as e:
        messenger.critical(str(e))
        return exit_code_for(e)


if __name__ == "__main__":
    sys.exit(main())
