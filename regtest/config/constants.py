"""
Constants used throughout the regtest harness.
"""

from enum import Enum


class ServiceType(str, Enum):
    """
    Compose service names that make up the regtest environment.

    Using str Enum allows direct string comparison while providing
    IDE autocomplete and type safety.

    Usage:
        compose.logs(ServiceType.Bitcoind)
    """

    Bitcoind = "bitcoind"
    Electrs = "electrs"
    Proxy = "proxy"

    def __str__(self) -> str:
        """Allow direct use in f-strings and format operations."""
        return self.value


DEFAULT_COMPOSE_FILE = "compose.yaml"
DEFAULT_COMPOSE_CMD = ("docker", "compose")

# A regtest chain needs 101 blocks before the first coinbase is spendable.
INITIAL_BLOCKS = 103

MINER_WALLET = "miner"
FUND_AMOUNT = "1"

# Exec user inside the bitcoind container.
CLI_USER = "blits"

# rgb proxy and electrs
EXPOSED_PORTS = (3000, 50001)

# One directory per service, the first one belongs to the core node.
DATA_DIRS = ("datacore", "dataindex", "dataldk0", "dataldk1", "dataldk2")

# Log lines that mark a service as usable.
BITCOIND_READY_MARKER = "Bound to"
ELECTRS_READY_MARKER = "finished full compaction"

MAX_ATTEMPTS = 60
POLL_INTERVAL = 1.0
