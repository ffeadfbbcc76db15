"""
flexitest service wrapping the whole compose stack.
"""

import logging
from typing import TypedDict

import flexitest

from regtest import BlockchainOps, Lifecycle
from regtest.compose import BitcoinCli


class RegtestProps(TypedDict):
    """Properties for the regtest stack."""

    compose_file: str
    workdir: str
    wallet: str


class RegtestService(flexitest.Service):
    """
    The bitcoind/electrs/proxy stack, started and stopped through `Lifecycle`.

    Unlike a ProcService there is no child process to poll: the containers are
    owned by docker, so status is tracked from start()/stop().
    """

    props: RegtestProps

    def __init__(self, props: RegtestProps, lifecycle: Lifecycle):
        super().__init__(dict(props))
        self.lifecycle = lifecycle
        self._started = False
        self._logger = logging.getLogger("service.regtest")

    @property
    def cli(self) -> BitcoinCli:
        return self.lifecycle.cli

    @property
    def ops(self) -> BlockchainOps:
        return self.lifecycle.ops

    def start(self):
        self._logger.info(f"starting stack from {self.props['compose_file']}")
        self.lifecycle.check_compose()
        self.lifecycle.start()
        self._started = True

    def stop(self):
        self._logger.info("stopping stack")
        self.lifecycle.stop()
        self._started = False

    def is_started(self) -> bool:
        return self._started

    def check_status(self) -> bool:
        return self._started and self.cli.succeeds("getblockchaininfo")

    def get_status_msg(self):
        return "running" if self._started else "stopped"

    def get_block_count(self) -> int:
        return self.ops.get_block_count()
