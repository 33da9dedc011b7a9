"""Command line entry point: config sources, dispatch and exit codes."""

import argparse
import logging
import subprocess
from unittest.mock import MagicMock, patch

import pytest
from pymysql import err

from cli.dbtool import (
    EXIT_BACKUP_ERROR,
    EXIT_CONFIG_ERROR,
    EXIT_EXECUTION_ERROR,
    EXIT_FAILURE,
    EXIT_RESTORE_ERROR,
    EXIT_SCHEMA_ERROR,
    EXIT_SUCCESS,
    build_parser,
    exit_code_for,
    main,
)
from cli.validateconfig import parse_port, validate_file_config
from commands.command_dispatcher import CommandDispatcher
from errors import BackupError, ConfigError, ExecutionError, RestoreError, SchemaError


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr("cli.dbtool.load_dotenv", lambda: False)
    for var in ("DB_HOST", "DB_PORT", "DB_USER", "DB_PASSWORD", "DB_SCHEMA",
                "BACKUP_PATH", "BACKUP_COMMAND", "RESTORE_COMMAND"):
        monkeypatch.delenv(var, raising=False)


def _manual(command, backup_dir, *extra):
    return [
        command, "--config", "manual", "--no-color",
        "--host", "localhost", "--user", "root", "--password", "secret",
        "--schema", "test", "--backup-path", str(backup_dir), *extra,
    ]


class TestExitCodes:
    @pytest.mark.parametrize(
        "error, code",
        [
            (ConfigError("x"), EXIT_CONFIG_ERROR),
            (ExecutionError("x"), EXIT_EXECUTION_ERROR),
            (BackupError(2, "/b/x.sql"), EXIT_BACKUP_ERROR),
            (RestoreError(1, "x.sql"), EXIT_RESTORE_ERROR),
            (SchemaError("x", sql="DROP DATABASE test;"), EXIT_SCHEMA_ERROR),
            (RuntimeError("x"), EXIT_FAILURE),
        ],
    )
    def test_mapping(self, error, code):
        assert exit_code_for(error) == code

    def test_bad_backup_path(self, tmp_path):
        assert main(_manual("list", tmp_path / "missing")) == EXIT_CONFIG_ERROR

    def test_manual_config_requires_schema(self, backup_dir):
        argv = ["list", "--config", "manual", "--host", "localhost", "--user", "root",
                "--backup-path", str(backup_dir)]
        with pytest.raises(SystemExit):
            main(argv)


class TestCommands:
    def test_list_prints_sorted_sql_files(self, backup_dir, capsys):
        (backup_dir / "b.sql").write_text("")
        (backup_dir / "a.sql").write_text("")
        (backup_dir / "notes.txt").write_text("")

        assert main(_manual("list", backup_dir)) == EXIT_SUCCESS
        out = capsys.readouterr().out
        assert out.index("a.sql") < out.index("b.sql")
        assert "notes.txt" not in out

    def test_backup_failure_exit_code(self, backup_dir, tools_on_path):
        failed = subprocess.CompletedProcess(args=[], returncode=7, stdout="", stderr="boom")
        with patch("services.execution.process_runner.subprocess.run", return_value=failed):
            assert main(_manual("backup", backup_dir, "--tag", "nightly")) == EXIT_BACKUP_ERROR

    def test_backup_failure_shows_tool_error(self, backup_dir, tools_on_path, capsys):
        failed = subprocess.CompletedProcess(
            args=[], returncode=2, stdout="", stderr="mysqldump: Got error: 1045: Access denied\n")
        with patch("services.execution.process_runner.subprocess.run", return_value=failed):
            assert main(_manual("backup", backup_dir, "--tag", "nightly")) == EXIT_BACKUP_ERROR
        assert "Access denied" in capsys.readouterr().err

    @pytest.mark.parametrize("flag, level", [([], logging.INFO), (["--verbose"], logging.DEBUG)])
    def test_verbose_sets_log_level(self, backup_dir, flag, level):
        assert main(_manual("list", backup_dir, *flag)) == EXIT_SUCCESS
        assert logging.getLogger("recovery").level == level

    def test_backup_prints_artifact_name(self, backup_dir, tools_on_path, capsys):
        done = subprocess.CompletedProcess(args=[], returncode=0, stdout="", stderr="")
        with patch("services.execution.process_runner.subprocess.run", return_value=done) as run:
            assert main(_manual("backup", backup_dir, "--tag", "nightly")) == EXIT_SUCCESS
        argv = run.call_args.args[0]
        assert argv[0] == "mysqldump"
        assert "_nightly.sql" in capsys.readouterr().out

    def test_backup_without_tag(self, backup_dir):
        assert main(_manual("backup", backup_dir)) == EXIT_FAILURE

    def test_restore_failure_exit_code(self, backup_dir, tools_on_path):
        failed = subprocess.CompletedProcess(args=[], returncode=1, stdout="", stderr="")
        with patch("services.execution.process_runner.subprocess.run", return_value=failed):
            argv = _manual("restore", backup_dir, "--artifact", "x.sql")
            assert main(argv) == EXIT_RESTORE_ERROR

    def test_drop_missing_schema(self, backup_dir):
        unknown = err.OperationalError(1049, "Unknown database 'test'")
        with patch("services.recovery.schema_admin.pymysql.connect", side_effect=unknown):
            assert main(_manual("drop", backup_dir)) == EXIT_SCHEMA_ERROR

    def test_drop_missing_schema_ignored(self, backup_dir):
        unknown = err.OperationalError(1049, "Unknown database 'test'")
        with patch("services.recovery.schema_admin.pymysql.connect", side_effect=unknown):
            assert main(_manual("drop", backup_dir, "--ignore-missing")) == EXIT_SUCCESS

    def test_ignore_missing_does_not_hide_other_errors(self, backup_dir):
        denied = err.OperationalError(1045, "Access denied for user 'root'")
        with patch("services.recovery.schema_admin.pymysql.connect", side_effect=denied):
            assert main(_manual("drop", backup_dir, "--ignore-missing")) == EXIT_SCHEMA_ERROR

    def test_create(self, backup_dir):
        connection = MagicMock()
        with patch("services.recovery.schema_admin.pymysql.connect", return_value=connection) as connect:
            assert main(_manual("create", backup_dir)) == EXIT_SUCCESS
        assert "database" not in connect.call_args.kwargs
        connection.close.assert_called_once()


class TestFileConfig:
    def test_reads_environment(self, monkeypatch, backup_dir):
        monkeypatch.setenv("DB_HOST", "db.internal")
        monkeypatch.setenv("DB_PORT", "3307")
        monkeypatch.setenv("DB_USER", "backup")
        monkeypatch.setenv("DB_PASSWORD", "pw")
        monkeypatch.setenv("DB_SCHEMA", "shop")
        monkeypatch.setenv("BACKUP_PATH", str(backup_dir))

        args = build_parser().parse_args(["list"])
        properties = validate_file_config(args)

        assert properties.hostname == "db.internal"
        assert properties.port == 3307
        assert properties.username == "backup"
        assert properties.schema == "shop"
        assert properties.backup_path == str(backup_dir)
        assert properties.backup_command is None

    def test_flags_override_environment(self, monkeypatch):
        monkeypatch.setenv("DB_HOST", "db.internal")
        args = build_parser().parse_args(["list", "--host", "localhost"])
        assert validate_file_config(args).hostname == "localhost"

    def test_missing_values_left_for_validation(self):
        properties = validate_file_config(build_parser().parse_args(["list"]))
        assert properties.username is None
        assert properties.port == 0

    @pytest.mark.parametrize("value, expected", [(None, 0), ("", 0), ("3307", 3307)])
    def test_parse_port(self, value, expected):
        assert parse_port(value) == expected

    def test_parse_port_rejects_text(self):
        with pytest.raises(ValueError):
            parse_port("mysql")


def test_unknown_command():
    with pytest.raises(ValueError, match="not recognized"):
        CommandDispatcher().dispatch("vacuum", argparse.Namespace())
