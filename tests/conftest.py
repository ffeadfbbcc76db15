import subprocess
from dataclasses import dataclass

import pytest

from regtest.config import RegtestConfig
from regtest.errors import CommandError
from regtest.runner import CommandRunner


@dataclass
class Rule:
    needle: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str
    times: int | None


def _contains(cmd: list[str], needle: tuple[str, ...]) -> bool:
    """True if `needle` appears in `cmd` as an in-order subsequence."""
    it = iter(cmd)
    return all(any(part == arg for arg in it) for part in needle)


class FakeRunner(CommandRunner):
    """
    Scripted stand-in for CommandRunner.

    Rules are matched in insertion order; a rule with `times` stops matching
    once used that many times. Unmatched commands succeed with empty output.
    """

    def __init__(self):
        super().__init__()
        self.calls: list[list[str]] = []
        self.rules: list[Rule] = []

    def on(self, *needle: str, returncode: int = 0, stdout: str = "", stderr: str = "", times=None):
        self.rules.append(Rule(needle, returncode, stdout, stderr, times))
        return self

    def run(self, cmd, *, check=False):
        self.calls.append(list(cmd))
        rc, out, err = 0, "", ""
        for rule in self.rules:
            if rule.times == 0 or not _contains(cmd, rule.needle):
                continue
            if rule.times is not None:
                rule.times -= 1
            rc, out, err = rule.returncode, rule.stdout, rule.stderr
            break

        result = subprocess.CompletedProcess(cmd, rc, out, err)
        if rc != 0 and check:
            raise CommandError(list(cmd), rc, out, err)
        return result

    def called(self, *needle: str) -> list[list[str]]:
        return [c for c in self.calls if _contains(c, needle)]

    def index_of(self, *needle: str) -> int:
        for i, c in enumerate(self.calls):
            if _contains(c, needle):
                return i
        raise AssertionError(f"{needle} was never called")


class FakePortChecker:
    def __init__(self, bound: set[int] | None = None):
        self.bound = bound or set()
        self.checked: list[int] = []

    def is_port_bound(self, port: int) -> bool:
        self.checked.append(port)
        return port in self.bound


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def config(tmp_path) -> RegtestConfig:
    return RegtestConfig(workdir=str(tmp_path), max_attempts=3, poll_interval=0)
