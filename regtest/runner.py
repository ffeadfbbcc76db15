"""
Runs external commands (the orchestration tool, bitcoin-cli) as argument vectors.
"""

import logging
import subprocess

from regtest.errors import CommandError

logger = logging.getLogger(__name__)


class CommandRunner:
    """
    Executes a command once and returns its CompletedProcess.

    All orchestration and RPC invocations go through here so failures are
    surfaced the same way everywhere.
    """

    def run(self, cmd: list[str], *, check: bool = False) -> subprocess.CompletedProcess:
        """
        Execute `cmd` and wait for it to finish, capturing stdout/stderr as text.

        Args:
            cmd: Command and arguments, never joined into a shell string
            check: Raise CommandError on a non-zero exit status

        Returns:
            The CompletedProcess of the command

        Raises:
            CommandError: If the executable is missing, or exits non-zero while
                `check` is set
        """
        logger.debug(f"running: {cmd}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise CommandError(cmd, 127, stderr=str(e)) from e

        if result.returncode != 0:
            logger.debug(f"exit {result.returncode}: {cmd}")
            if check:
                raise CommandError(cmd, result.returncode, result.stdout, result.stderr)
        return result

    def output(self, cmd: list[str]) -> str:
        """Run a command that must succeed and return its stripped stdout."""
        result = self.run(cmd, check=True)
        return (result.stdout or "").strip()

    def succeeds(self, cmd: list[str]) -> bool:
        """Run a command and report only whether it exited zero."""
        try:
            return self.run(cmd).returncode == 0
        except CommandError:
            return False
