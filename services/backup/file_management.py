from datetime import datetime
from pathlib import Path
from typing import Optional

ARTIFACT_SUFFIX = ".sql"
TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"


def generate_artifact_name(schema: str, tag: str, timestamp: Optional[datetime] = None) -> str:
    """{schema}_{yyyy-MM-dd_HH-mm-ss}_{tag}.sql"""
    timestamp = timestamp or datetime.now()
    return f"{schema}_{timestamp.strftime(TIMESTAMP_FORMAT)}_{tag}{ARTIFACT_SUFFIX}"


class BackupFileManager:
    """Resolves and lists dump files in the flat backup directory."""

    def __init__(self, backup_path: Path):
        self._backup_path = Path(backup_path)

    @property
    def backup_path(self) -> Path:
        return self._backup_path

    def resolve(self, artifact_name: str) -> Path:
        """Absolute path of artifact_name, which must be a bare file name."""
        if Path(artifact_name).name != artifact_name or artifact_name in (".", ".."):
            raise ValueError(f"Artifact name must be a plain file name: {artifact_name!r}")
        return self._backup_path / artifact_name

    def list_artifacts(self) -> list[str]:
        """Names of regular .sql files directly under the backup directory, unsorted."""
        return [
            entry.name
            for entry in self._backup_path.iterdir()
            if entry.is_file() and entry.name.endswith(ARTIFACT_SUFFIX)
        ]
