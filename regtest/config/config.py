"""
Run configuration for the regtest harness.
"""

import os
import shlex
from dataclasses import dataclass, field

from regtest.config.constants import (
    BITCOIND_READY_MARKER,
    CLI_USER,
    DATA_DIRS,
    DEFAULT_COMPOSE_CMD,
    DEFAULT_COMPOSE_FILE,
    ELECTRS_READY_MARKER,
    EXPOSED_PORTS,
    FUND_AMOUNT,
    INITIAL_BLOCKS,
    MAX_ATTEMPTS,
    MINER_WALLET,
    POLL_INTERVAL,
    ServiceType,
)


@dataclass(frozen=True)
class RegtestConfig:
    """
    Immutable run parameters, resolved once at startup and handed to every component.

    Usage:
        config = RegtestConfig.from_env(compose_file="compose.yaml")
        compose = ComposeClient(config, CommandRunner())
    """

    compose_file: str = field(default=DEFAULT_COMPOSE_FILE)
    compose_cmd: tuple[str, ...] = field(default=DEFAULT_COMPOSE_CMD)
    initial_blocks: int = field(default=INITIAL_BLOCKS)
    core_service: str = field(default=ServiceType.Bitcoind.value)
    indexer_service: str = field(default=ServiceType.Electrs.value)
    services: tuple[str, ...] = field(default=tuple(s.value for s in ServiceType))
    data_dirs: tuple[str, ...] = field(default=DATA_DIRS)
    reserved_ports: tuple[int, ...] = field(default=EXPOSED_PORTS)
    cli_user: str = field(default=CLI_USER)
    wallet_name: str = field(default=MINER_WALLET)
    fund_amount: str = field(default=FUND_AMOUNT)
    core_ready_marker: str = field(default=BITCOIND_READY_MARKER)
    indexer_ready_marker: str = field(default=ELECTRS_READY_MARKER)
    max_attempts: int = field(default=MAX_ATTEMPTS)
    poll_interval: float = field(default=POLL_INTERVAL)
    workdir: str = field(default=".")

    @classmethod
    def from_env(cls, compose_file: str | None = None, **overrides) -> "RegtestConfig":
        """
        Resolve the configuration.

        The compose file given on the command line wins over the `COMPOSE_FILE`
        environment variable, which wins over the default. `COMPOSE_COMMAND`
        replaces the orchestration tool prefix (e.g. `docker-compose`).
        """
        compose_file = compose_file or os.getenv("COMPOSE_FILE") or DEFAULT_COMPOSE_FILE
        compose_cmd = os.getenv("COMPOSE_COMMAND")
        if compose_cmd:
            overrides.setdefault("compose_cmd", tuple(shlex.split(compose_cmd)))
        return cls(compose_file=compose_file, **overrides)

    @property
    def compose_argv(self) -> list[str]:
        return [*self.compose_cmd, "-f", self.compose_file]

    @property
    def cli_argv(self) -> list[str]:
        # -T: never allocate a TTY, output is captured.
        return [
            *self.compose_argv,
            "exec",
            "-T",
            "-u",
            self.cli_user,
            self.core_service,
            "bitcoin-cli",
            "-regtest",
        ]

    def data_dir_paths(self) -> list[str]:
        return [os.path.join(self.workdir, d) for d in self.data_dirs]
