"""
Service wrappers for test infrastructure.
"""

from common.services.regtest import RegtestProps, RegtestService

__all__ = [
    "RegtestService",
    "RegtestProps",
]
