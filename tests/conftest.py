"""Shared fixtures: a real backup directory, fake process runner and connections."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from clients.mysql_client import MysqlRecoveryManager
from config import RecoveryConfig, RecoveryProperties
from services.interfaces import IConnectionFactory, IProcessRunner


class RecordingRunner(IProcessRunner):
    """Process runner that records argv and returns a canned exit code."""

    def __init__(self, exit_code: int = 0):
        self.exit_code = exit_code
        self.calls: list[list[str]] = []

    def run(self, executable: str, arguments: list[str]) -> int:
        self.calls.append([executable, *arguments])
        return self.exit_code


class FakeConnectionFactory(IConnectionFactory):
    """Hands out MagicMock connections and remembers how they were requested."""

    def __init__(self, connect_error: Exception | None = None):
        self.connect_error = connect_error
        self.requests: list[bool] = []
        self.connections: list[MagicMock] = []
        self.cursor = MagicMock()
        self.cursor.execute.return_value = 1

    def connect(self, schema_scoped: bool):
        self.requests.append(schema_scoped)
        if self.connect_error is not None:
            raise self.connect_error
        connection = MagicMock()
        connection.cursor.return_value.__enter__.return_value = self.cursor
        self.connections.append(connection)
        return connection


@pytest.fixture
def backup_dir(tmp_path: Path) -> Path:
    path = tmp_path / "backups"
    path.mkdir()
    return path


@pytest.fixture
def properties(backup_dir: Path) -> RecoveryProperties:
    return RecoveryProperties(
        username="root",
        password="secret",
        hostname="localhost",
        schema="test",
        backup_path=str(backup_dir),
    )


@pytest.fixture
def config(backup_dir: Path) -> RecoveryConfig:
    return RecoveryConfig(
        username="root",
        password="secret",
        hostname="localhost",
        port=3306,
        schema="test",
        backup_path=backup_dir,
    )


@pytest.fixture
def logger():
    return MagicMock()


@pytest.fixture
def messenger():
    return MagicMock()


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def connections() -> FakeConnectionFactory:
    return FakeConnectionFactory()


@pytest.fixture
def tools_on_path(monkeypatch):
    """Pretend every executable is installed."""
    monkeypatch.setattr("decorators.utility_available.shutil.which", lambda name: f"/usr/bin/{name}")


@pytest.fixture
def manager(config, logger, messenger, runner, connections, tools_on_path) -> MysqlRecoveryManager:
    return MysqlRecoveryManager(
        config,
        logger=logger,
        messenger=messenger,
        process_runner=runner,
        connection_factory=connections,
    )
