"""
Checks whether a TCP port already has a listener.

The check is only a pre-flight gate: a port can still be taken between the
check and the moment a container binds it.
"""

import platform
from typing import Protocol

from regtest.errors import RegtestError
from regtest.runner import CommandRunner


class PortChecker(Protocol):
    """Platform capability that reports listening TCP ports."""

    def is_port_bound(self, port: int) -> bool: ...


class LinuxPortChecker:
    """Uses `ss -ltn`."""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def is_port_bound(self, port: int) -> bool:
        out = self.runner.output(["ss", "-ltn"])
        return any(f":{port} " in line for line in out.splitlines())


class DarwinPortChecker:
    """Uses `lsof`, which exits zero only when a listener was found."""

    def __init__(self, runner: CommandRunner):
        self.runner = runner

    def is_port_bound(self, port: int) -> bool:
        result = self.runner.run(["lsof", "-i", f"tcp:{port}", "-sTCP:LISTEN", "-t"])
        return result.returncode == 0


_CHECKERS = {
    "Linux": LinuxPortChecker,
    "Darwin": DarwinPortChecker,
}


def select_port_checker(runner: CommandRunner, system: str | None = None) -> PortChecker:
    """
    Pick the port checker for the running platform.

    Raises:
        RegtestError: If the platform has no port checker
    """
    system = system or platform.system()
    checker = _CHECKERS.get(system)
    if checker is None:
        raise RegtestError(f"Unsupported OS for port check: {system}")
    return checker(runner)
