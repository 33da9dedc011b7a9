from .command_dispatcher import CommandDispatcher
from errors import SchemaError
from factory import RecoveryManager

# ER_DB_DROP_EXISTS, ER_BAD_DB_ERROR
MISSING_SCHEMA_ERROR_CODES = {1008, 1049}


def is_missing_schema(error: SchemaError) -> bool:
    return error.driver_error_code in MISSING_SCHEMA_ERROR_CODES


def build_dispatcher(manager: RecoveryManager, messenger):
    dispatcher = CommandDispatcher()

    def create_command(parsed_args):
        manager.create_database()

    def drop_command(parsed_args):
        try:
            manager.drop_database()
        except SchemaError as e:
            if getattr(parsed_args, 'ignore_missing', False) and is_missing_schema(e):
                messenger.warning(f"Schema does not exist, nothing to drop: {e.sql}")
                return
            raise

    def backup_command(parsed_args):
        if not parsed_args.tag:
            raise ValueError("Tag is required. Use: backup --tag <tag>")
        artifact_name = manager.backup(parsed_args.tag)
        print(artifact_name)
        return artifact_name

    def restore_command(parsed_args):
        if not parsed_args.artifact:
            raise ValueError("Artifact is required. Use: restore --artifact <file.sql>")
        manager.restore(parsed_args.artifact)

    def list_command(parsed_args):
        artifacts = sorted(manager.list_backups())
        if not artifacts:
            messenger.warning(f"No backups found in {manager.backup_path}")
        for name in artifacts:
            print(name)
        return artifacts

    dispatcher.register_command("create", create_command)
    dispatcher.register_command("drop", drop_command)
    dispatcher.register_command("backup", backup_command)
    dispatcher.register_command("restore", restore_command)
    dispatcher.register_command("list", list_command)

    return dispatcher
