"""
Configuration and constants.
"""

from regtest.config.config import RegtestConfig
from regtest.config.constants import (
    BITCOIND_READY_MARKER,
    DEFAULT_COMPOSE_FILE,
    ELECTRS_READY_MARKER,
    INITIAL_BLOCKS,
    MINER_WALLET,
    ServiceType,
)

__all__ = [
    # config.py
    "RegtestConfig",
    # constants.py
    "ServiceType",
    "DEFAULT_COMPOSE_FILE",
    "INITIAL_BLOCKS",
    "MINER_WALLET",
    "BITCOIND_READY_MARKER",
    "ELECTRS_READY_MARKER",
]
