"""
Waiting utilities: readiness polling for services.
"""

import logging
import time
from enum import Enum
from typing import Protocol

from regtest.compose import BitcoinCli, ComposeClient
from regtest.config.constants import MAX_ATTEMPTS, POLL_INTERVAL
from regtest.errors import RegtestError

logger = logging.getLogger(__name__)


class ReadinessState(str, Enum):
    Waiting = "waiting"
    Ready = "ready"
    TimedOut = "timed_out"


class ReadinessProbe(Protocol):
    """
    A single readiness check for a service.

    Callers only depend on this interface, so a log-based probe can be swapped
    for a health-check RPC without touching the lifecycle.
    """

    service: str

    def is_ready(self) -> bool: ...


class LogMarkerProbe:
    """Ready once `marker` appears anywhere in the service's accumulated logs."""

    def __init__(self, compose: ComposeClient, service: str, marker: str):
        self.compose = compose
        self.service = service
        self.marker = marker

    def is_ready(self) -> bool:
        return self.marker in self.compose.logs(self.service)


class RpcProbe:
    """Ready once an RPC call against the node succeeds."""

    def __init__(self, cli: BitcoinCli, method: str = "getblockchaininfo"):
        self.cli = cli
        self.method = method
        self.service = f"{cli.config.core_service} RPC"

    def is_ready(self) -> bool:
        return self.cli.succeeds(self.method)


def wait_ready(
    probe: ReadinessProbe,
    max_attempts: int = MAX_ATTEMPTS,
    interval: float = POLL_INTERVAL,
) -> ReadinessState:
    """
    Poll `probe` until it reports ready, sleeping `interval` between attempts.

    Returns:
        ReadinessState.Ready

    Raises:
        RegtestError: If the probe is still not ready after `max_attempts`
    """
    logger.info(f"Waiting for {probe.service} to be ready...")
    state = ReadinessState.Waiting
    attempt = 1
    while state is ReadinessState.Waiting:
        if probe.is_ready():
            state = ReadinessState.Ready
        elif attempt >= max_attempts:
            state = ReadinessState.TimedOut
        else:
            logger.info(f"Waiting for {probe.service} ({attempt}/{max_attempts})...")
            time.sleep(interval)
            attempt += 1

    if state is ReadinessState.TimedOut:
        raise RegtestError(f"{probe.service} did not become ready in time")

    logger.info(f"{probe.service} is ready!")
    return state
