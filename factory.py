from abc import ABC, abstractmethod
from pathlib import Path

from config import RecoveryProperties


class RecoveryManager(ABC):
    @abstractmethod
    def create_database(self) -> None:
        pass

    @abstractmethod
    def drop_database(self) -> None:
        pass

    @abstractmethod
    def backup(self, tag: str) -> str:
        """Dump the schema into a new artifact and return the artifact name"""
        pass

    @abstractmethod
    def restore(self, artifact_name: str) -> None:
        pass

    @abstractmethod
    def list_backups(self) -> list[str]:
        pass

    @property
    @abstractmethod
    def backup_path(self) -> Path:
        pass


def create_recovery_manager(properties: RecoveryProperties, **kwargs) -> RecoveryManager:
    """Validate properties and build the MySQL recovery manager for them."""
    from clients.mysql_client import MysqlRecoveryManager
    return MysqlRecoveryManager.create(properties, **kwargs)
