"""
Start/stop sequence of the regtest environment.

Every step of `start` must complete before the next one begins; a failing
step raises and leaves whatever partial state it produced. The next `start`
cleans that up with its initial `stop`.
"""

import logging
import os
import shutil

from regtest.compose import BitcoinCli, ComposeClient
from regtest.config import RegtestConfig
from regtest.errors import RegtestError
from regtest.ops import BlockchainOps
from regtest.ports import PortChecker, select_port_checker
from regtest.runner import CommandRunner
from regtest.wait import LogMarkerProbe, RpcProbe, wait_ready
from regtest.wallet import ensure_wallet

logger = logging.getLogger(__name__)


class Lifecycle:
    """
    Owns the regtest services and their data directories.

    Usage:
        runner = CommandRunner()
        lifecycle = Lifecycle(config, runner)
        lifecycle.start()
        lifecycle.ops.mine(5)
        lifecycle.stop()
    """

    def __init__(
        self,
        config: RegtestConfig,
        runner: CommandRunner,
        port_checker: PortChecker | None = None,
    ):
        self.config = config
        self.runner = runner
        self.compose = ComposeClient(config, runner)
        self.cli = BitcoinCli(config, runner)
        self.ops = BlockchainOps(self.cli, wallet=config.wallet_name, fund_amount=config.fund_amount)
        self.port_checker = port_checker

    def check_compose(self) -> None:
        if not self.compose.is_available():
            raise RegtestError("Could not call docker compose (hint: install docker compose plugin)")

    def start(self) -> None:
        """Bring the environment up from a clean slate, ready for tests."""
        self.stop()

        self._prepare_data_dirs()
        self._check_ports()
        self._check_services()

        self.compose.up()

        wait_ready(
            LogMarkerProbe(self.compose, self.config.core_service, self.config.core_ready_marker),
            max_attempts=self.config.max_attempts,
            interval=self.config.poll_interval,
        )
        # Log lines only prove the process started; RPC may still be warming up.
        wait_ready(
            RpcProbe(self.cli),
            max_attempts=self.config.max_attempts,
            interval=self.config.poll_interval,
        )

        ensure_wallet(self.cli, self.config.wallet_name)
        self.ops.mine(self.config.initial_blocks)

        wait_ready(
            LogMarkerProbe(self.compose, self.config.indexer_service, self.config.indexer_ready_marker),
            max_attempts=self.config.max_attempts,
            interval=self.config.poll_interval,
        )
        logger.info("Bitcoind and wallet ready")

    def stop(self) -> None:
        """Tear down services and data. Nothing running is not an error."""
        self.compose.down()
        for path in self.config.data_dir_paths():
            shutil.rmtree(path, ignore_errors=True)

    def _prepare_data_dirs(self) -> None:
        paths = self.config.data_dir_paths()
        for path in paths:
            shutil.rmtree(path, ignore_errors=True)
            try:
                os.makedirs(path, exist_ok=True)
            except OSError as e:
                raise RegtestError(f"cannot create data directory {path}") from e

        probe = os.path.join(paths[0], "testfile")
        try:
            with open(probe, "w"):
                pass
            os.remove(probe)
        except OSError as e:
            raise RegtestError("data directory is not writable") from e

    def _check_ports(self) -> None:
        # Selected lazily so only `start` needs a supported platform.
        checker = self.port_checker or select_port_checker(self.runner)
        for port in self.config.reserved_ports:
            if checker.is_port_bound(port):
                raise RegtestError(
                    f"Port {port} is already in use. Please free the port and try again."
                )

    def _check_services(self) -> None:
        defined = set(self.compose.services())
        missing = [s for s in self.config.services if s not in defined]
        if missing:
            raise RegtestError(
                f"Services {missing} are not defined in {self.config.compose_file}"
            )
