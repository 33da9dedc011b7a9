from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from config import RecoveryConfig, RecoveryProperties
from console_utils import get_messenger
from custom_logging import RecoveryLogger
from decorators.types_decorators import not_blank
from decorators.utility_available import check_utility_available
from errors import BackupError, RestoreError
from factory import RecoveryManager
from services.backup.file_management import BackupFileManager, generate_artifact_name
from services.execution.process_runner import ProcessRunner
from services.interfaces import IConnectionFactory, ILogger, IMessenger, IProcessRunner
from services.recovery.schema_admin import SchemaAdministrator
from services.recovery.templates import build_templates
from services.validation.config_check import build_config


class MysqlRecoveryManager(RecoveryManager):
    """
    Backup, restore and schema lifecycle for one MySQL schema.

    Everything that does not vary between calls (command templates, DDL,
    connection endpoints) is derived once here; backup and restore only fill
    in the artifact path. Calls block until the child process or statement
    is done and are not safe to overlap on the same schema.
    """

    def __init__(self, config: RecoveryConfig,
                 logger: Optional[ILogger] = None,
                 messenger: Optional[IMessenger] = None,
                 process_runner: Optional[IProcessRunner] = None,
                 connection_factory: Optional[IConnectionFactory] = None,
                 clock: Callable[[], datetime] = datetime.now):
        self._config = config
        self._schema = config.schema
        self._logger = logger if logger is not None else RecoveryLogger(
            name=f"recovery_{config.schema}",
            log_file=f"recovery_{config.schema}.log")
        if isinstance(self._logger, RecoveryLogger):
            self._logger.add_secret(config.password)
        self._messenger = messenger if messenger is not None else get_messenger()
        self._clock = clock

        self._templates = build_templates(config)
        self._backup_command = self._templates.backup.executable
        self._restore_command = self._templates.restore.executable

        self._files = BackupFileManager(config.backup_path)
        self._runner = process_runner if process_runner is not None else ProcessRunner(self._logger)
        self._schema_admin = SchemaAdministrator(config, self._logger, connection_factory)

    @classmethod
    def create(cls, properties: RecoveryProperties, **kwargs) -> "MysqlRecoveryManager":
        return cls(build_config(properties), **kwargs)

    @property
    def config(self) -> RecoveryConfig:
        return self._config

    @property
    def backup_path(self) -> Path:
        return self._files.backup_path

    @property
    def templates(self):
        return self._templates

    def create_database(self) -> None:
        self._schema_admin.create_database()
        self._messenger.success(f"Database '{self._schema}' created")

    def drop_database(self) -> None:
        self._schema_admin.drop_database()
        self._messenger.success(f"Database '{self._schema}' dropped")

    def list_backups(self) -> list[str]:
        return self._files.list_artifacts()

    @not_blank("tag")
    @check_utility_available("_backup_command")
    def backup(self, tag: str) -> str:
        artifact_name = generate_artifact_name(self._schema, tag, self._clock())
        target = str(self._files.resolve(artifact_name))
        template = self._templates.backup

        self._messenger.info(f"Starting backup of '{self._schema}' → {target}")
        self._logger.info(f"Backup command: {template.redacted(target)}")

        argv = template.render(target)
        exit_code = self._runner.run(argv[0], argv[1:])
        if exit_code != 0:
            self._messenger.error(f"Backup failed with exit code {exit_code}")
            self._logger.error(f"Backup to {target} failed with exit code {exit_code}")
            raise BackupError(exit_code, target)

        self._messenger.success(f"Backup created: {artifact_name}")
        return artifact_name

    @not_blank("artifact_name")
    @check_utility_available("_restore_command")
    def restore(self, artifact_name: str) -> None:
        source = str(self._files.resolve(artifact_name))
        template = self._templates.restore

        self._messenger.info(f"Restoring '{self._schema}' from {artifact_name}")
        self._logger.info(f"Restore command: {template.redacted(source)}")

        argv = template.render(source)
        exit_code = self._runner.run(argv[0], argv[1:])
        if exit_code != 0:
            self._messenger.error(f"Restore failed with exit code {exit_code}")
            self._logger.error(f"Restore from {source} failed with exit code {exit_code}")
            raise RestoreError(exit_code, artifact_name)

        self._messenger.success(f"Restored '{self._schema}' from {artifact_name}")
