import subprocess
from typing import Optional

from custom_logging import redact_command
from errors import ExecutionError
from services.interfaces import ILogger, IProcessRunner


class ProcessRunner(IProcessRunner):
    """
    Runs an external command to completion and hands back its exit code.

    Output is captured so the child never blocks on a full pipe; it is only
    logged. A non-zero exit code is returned as data, the caller decides
    whether it is fatal. Only a failure to start the process raises.
    """

    def __init__(self, logger: ILogger):
        self._logger = logger

    def run(self, executable: str, arguments: list[str]) -> int:
        argv = [executable, *arguments]
        shown = redact_command(argv)
        self._logger.debug(f"Executing command: {shown}")

        try:
            process = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            self._logger.error(f"Executable not found: {executable}")
            raise ExecutionError(f"Executable not found: {executable}", command=shown) from e
        except OSError as e:
            self._logger.error(f"Failed to start {executable}: {e}")
            raise ExecutionError(f"Failed to start {executable}: {e}", command=shown) from e

        self._drain(executable, process.stdout, process.stderr, failed=process.returncode != 0)
        self._logger.info(f"{executable} exited with code {process.returncode}")
        return process.returncode

    def _drain(self, executable: str, stdout: Optional[str], stderr: Optional[str],
               failed: bool = False) -> None:
        for line in (stdout or "").splitlines():
            self._logger.debug(f"[{executable}] {line}")
        log_stderr = self._logger.warning if failed else self._logger.debug
        for line in (stderr or "").splitlines():
            log_stderr(f"[{executable} stderr] {line}")
