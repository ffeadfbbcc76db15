"""
Error types raised by the harness.

Every failure is fatal: it is raised up to the command dispatcher, which
dumps diagnostics and exits non-zero.
"""


class RegtestError(Exception):
    """Raised when the regtest environment cannot be driven any further."""


class CommandError(RegtestError):
    """Raised when an external command exits non-zero or cannot be executed."""

    def __init__(self, cmd: list[str], returncode: int, stdout: str = "", stderr: str = ""):
        self.cmd = cmd
        self.returncode = returncode
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        super().__init__(
            f"command failed (exit {returncode}): {' '.join(cmd)}"
            + (f"\n  stderr: {self.stderr.strip()}" if self.stderr.strip() else "")
        )
