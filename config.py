from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

DEFAULT_PORT = 3306
DEFAULT_BACKUP_COMMAND = "mysqldump"
DEFAULT_RESTORE_COMMAND = "mysql"
URL_SCHEME = "mysql"


@dataclass
class RecoveryProperties:
    """Connection and backup settings as handed over by the caller."""
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)
    hostname: Optional[str] = None
    port: Optional[int] = 0
    schema: Optional[str] = None
    backup_path: Optional[str] = None
    backup_command: Optional[str] = None
    restore_command: Optional[str] = None


@dataclass(frozen=True)
class RecoveryConfig:
    """Validated configuration. Built once by build_config and never mutated."""
    username: str
    password: str = field(repr=False)
    hostname: str
    port: int
    schema: str
    backup_path: Path
    backup_command: str = DEFAULT_BACKUP_COMMAND
    restore_command: str = DEFAULT_RESTORE_COMMAND

    @property
    def root_url(self) -> str:
        return f"{URL_SCHEME}://{self.hostname}:{self.port}"

    @property
    def schema_url(self) -> str:
        return f"{self.root_url}/{self.schema}"

    @property
    def uses_default_port(self) -> bool:
        return self.port == DEFAULT_PORT

    def connection_params(self, schema_scoped: bool = True) -> dict:
        """Keyword arguments for pymysql.connect"""
        params = {
            'host': self.hostname,
            'port': self.port,
            'user': self.username,
            'password': self.password,
        }
        if schema_scoped:
            params['database'] = self.schema
        return params
