"""Test that sendtoaddress broadcasts without mining a block."""

import logging

import flexitest

from common.accounts import new_external_address
from common.base_test import RegtestTest

logger = logging.getLogger(__name__)


@flexitest.register
class TestSendToAddress(RegtestTest):
    def __init__(self, ctx: flexitest.InitContext):
        ctx.set_env("basic")

    def main(self, ctx):
        stack = self.get_stack()
        address = new_external_address()

        before = stack.get_block_count()
        txid = stack.ops.sendtoaddress(address, "0.5")
        after = stack.get_block_count()

        assert after == before, f"Height moved from {before} to {after}"

        # Unconfirmed: the transaction waits in the mempool
        entry = stack.cli.call_json("getmempoolentry", txid)
        logger.info(f"{txid} in mempool: {entry}")
        tx = stack.cli.call_json("gettransaction", txid, wallet="miner")
        assert tx["confirmations"] == 0

        # Leave no pending transaction behind for other tests
        stack.ops.mine(1)
        return True
