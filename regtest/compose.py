"""
Thin wrappers around the orchestration tool and the node's RPC client.
"""

import json
import logging
from typing import Any

from regtest.config import RegtestConfig
from regtest.errors import RegtestError
from regtest.runner import CommandRunner


class ComposeClient:
    """
    Drives `docker compose -f <compose_file>`.

    Usage:
        compose = ComposeClient(config, CommandRunner())
        compose.up()
        print(compose.logs("bitcoind"))
        compose.down()
    """

    def __init__(self, config: RegtestConfig, runner: CommandRunner):
        self.config = config
        self.runner = runner
        self.logger = logging.getLogger("compose")

    def _argv(self, *args: str) -> list[str]:
        return [*self.config.compose_argv, *args]

    def is_available(self) -> bool:
        return self.runner.succeeds(self._argv("version"))

    def services(self) -> list[str]:
        """Service names defined in the compose file."""
        out = self.runner.output(self._argv("config", "--services"))
        return [line.strip() for line in out.splitlines() if line.strip()]

    def up(self) -> None:
        self.logger.info(f"Starting services from {self.config.compose_file}")
        self.runner.run(self._argv("up", "-d"), check=True)

    def down(self) -> None:
        self.runner.run(self._argv("down", "--remove-orphans"), check=True)

    def logs(self, service: str) -> str:
        """Accumulated log output of `service`, empty if it cannot be fetched."""
        result = self.runner.run(self._argv("logs", service))
        return (result.stdout or "") + (result.stderr or "")


class BitcoinCli:
    """
    Runs `bitcoin-cli -regtest` inside the core node container.

    Usage:
        cli = BitcoinCli(config, CommandRunner())
        height = cli.call_json("getblockcount")
        txid = cli.call("sendtoaddress", addr, "1", wallet="miner")
    """

    def __init__(self, config: RegtestConfig, runner: CommandRunner):
        self.config = config
        self.runner = runner
        self.logger = logging.getLogger(f"rpc.{config.core_service}")

    def _argv(self, args: tuple[str, ...], wallet: str | None) -> list[str]:
        argv = list(self.config.cli_argv)
        if wallet is not None:
            argv.append(f"-rpcwallet={wallet}")
        argv.extend(str(a) for a in args)
        return argv

    def call(self, *args: str, wallet: str | None = None) -> str:
        """
        Run an RPC command that must succeed.

        Returns:
            The stripped stdout of bitcoin-cli

        Raises:
            CommandError: If bitcoin-cli exits non-zero
        """
        self.logger.debug(f"RPC call: {args} (wallet={wallet})")
        return self.runner.output(self._argv(args, wallet))

    def call_json(self, *args: str, wallet: str | None = None) -> Any:
        out = self.call(*args, wallet=wallet)
        try:
            return json.loads(out)
        except json.JSONDecodeError as e:
            raise RegtestError(f"Invalid JSON from bitcoin-cli {args[0]}: {out!r}") from e

    def succeeds(self, *args: str, wallet: str | None = None) -> bool:
        return self.runner.succeeds(self._argv(args, wallet))
