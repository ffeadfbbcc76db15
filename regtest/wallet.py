"""
Bootstraps the mining wallet inside the core node.
"""

import logging

from regtest.compose import BitcoinCli
from regtest.config.constants import MINER_WALLET
from regtest.errors import CommandError, RegtestError

logger = logging.getLogger(__name__)


def ensure_wallet(cli: BitcoinCli, name: str = MINER_WALLET) -> bool:
    """
    Make sure wallet `name` exists and is loaded.

    Safe to call repeatedly: an already loaded wallet is left alone.

    Returns:
        True if the wallet was created by this call

    Raises:
        RegtestError: If the wallet cannot be created or is not accessible
    """
    logger.info("Preparing bitcoind wallet...")

    wallets = cli.call_json("listwallets")
    created = False
    if name in wallets:
        logger.info(f"Wallet '{name}' already exists")
    else:
        try:
            cli.call("createwallet", name)
        except CommandError as e:
            raise RegtestError(f"Failed to create wallet '{name}'") from e
        logger.info(f"Created wallet '{name}'")
        created = True

    # Catches a wallet that exists on disk but failed to load.
    try:
        cli.call("getwalletinfo", wallet=name)
    except CommandError as e:
        raise RegtestError(f"Wallet '{name}' is not accessible") from e

    return created
