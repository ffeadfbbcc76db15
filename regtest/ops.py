"""
Blockchain operations against the mining wallet.
"""

import logging

from regtest.compose import BitcoinCli
from regtest.config.constants import FUND_AMOUNT, MINER_WALLET
from regtest.errors import CommandError, RegtestError

logger = logging.getLogger(__name__)


def parse_block_count(value: str | int | None) -> int:
    """
    Validate a block count given on the command line.

    Raises:
        RegtestError: If the value is missing, not an integer, or below 1
    """
    if value is None or str(value).strip() == "":
        raise RegtestError("Number of blocks required for mining")
    try:
        n = int(str(value).strip())
    except ValueError as e:
        raise RegtestError(f"Invalid number of blocks: {value!r}") from e
    if n < 1:
        raise RegtestError(f"Number of blocks must be positive, got {n}")
    return n


class BlockchainOps:
    """
    mine / fund / sendtoaddress through the mining wallet.

    Usage:
        ops = BlockchainOps(BitcoinCli(config, runner), wallet="miner")
        ops.mine(5)
        txid = ops.fund("bcrt1q...")
    """

    def __init__(self, cli: BitcoinCli, wallet: str = MINER_WALLET, fund_amount: str = FUND_AMOUNT):
        self.cli = cli
        self.wallet = wallet
        self.fund_amount = fund_amount

    def mine(self, blocks: str | int | None) -> list[str]:
        """Mine `blocks` blocks to the wallet and return their hashes."""
        n = parse_block_count(blocks)
        logger.info(f"Mining {n} block(s)...")
        try:
            hashes = self.cli.call_json("-generate", str(n), wallet=self.wallet)
        except CommandError as e:
            raise RegtestError(f"Failed to mine {n} block(s)") from e
        logger.info(f"Mined {n} block(s)")
        # -generate answers {"address": ..., "blocks": [...]}
        if isinstance(hashes, dict):
            return hashes.get("blocks", [])
        return hashes

    def fund(self, address: str | None) -> str:
        """Send the fund amount to `address` and confirm it with one block."""
        if not address:
            raise RegtestError("Destination address required")

        logger.info(f"Funding address {address} with {self.fund_amount} BTC...")
        try:
            txid = self.cli.call("sendtoaddress", address, self.fund_amount, wallet=self.wallet)
        except CommandError as e:
            raise RegtestError(f"Failed to send funds to {address}") from e

        self.mine(1)
        logger.info(f"Successfully funded {address} with {self.fund_amount} BTC")
        return txid

    def sendtoaddress(self, address: str | None, amount: str | None) -> str:
        """Send `amount` to `address`. The transaction is left unconfirmed."""
        if not address:
            raise RegtestError("Address is required")
        if not amount:
            raise RegtestError("Amount is required")

        logger.info(f"Sending {amount} BTC to {address}...")
        try:
            txid = self.cli.call("sendtoaddress", address, amount, wallet=self.wallet)
        except CommandError as e:
            raise RegtestError(f"Failed to send {amount} BTC to {address}") from e
        logger.info(f"Successfully sent {amount} BTC to {address}")
        return txid

    def get_block_count(self) -> int:
        return int(self.cli.call("getblockcount"))
