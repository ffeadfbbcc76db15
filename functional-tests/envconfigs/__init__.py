"""Environment configurations for functional tests."""

from envconfigs.regtest import REGTEST, RegtestEnvConfig

__all__ = [
    "REGTEST",
    "RegtestEnvConfig",
]
