"""
Disposable bitcoind/electrs regtest environment for integration tests.
Provides service lifecycle management, readiness waiting and chain operations.
"""

from .config import RegtestConfig, ServiceType
from .errors import CommandError, RegtestError
from .lifecycle import Lifecycle
from .ops import BlockchainOps
from .runner import CommandRunner
from .wait import wait_ready

__all__ = [
    "BlockchainOps",
    "CommandError",
    "CommandRunner",
    "Lifecycle",
    "RegtestConfig",
    "RegtestError",
    "ServiceType",
    "wait_ready",
]
