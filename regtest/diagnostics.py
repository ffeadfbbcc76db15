"""
Reports fatal errors together with the core node's logs.
"""

import logging

from regtest.compose import ComposeClient
from regtest.errors import CommandError

logger = logging.getLogger(__name__)


def report_fatal(error: BaseException, compose: ComposeClient | None) -> None:
    """
    Log `error` and dump the core node logs for diagnosis.

    Failing to fetch the logs is only logged; the original error is what matters.
    """
    logger.error(f"ERR: {error}")
    if compose is None:
        return

    service = compose.config.core_service
    logger.error(f"Checking {service} logs for more details:")
    try:
        logs = compose.logs(service)
    except CommandError as e:
        logger.warning(f"could not fetch {service} logs: {e}")
        return
    if logs:
        logger.error(logs.rstrip())


def save_core_logs(compose: ComposeClient, path: str) -> bool:
    """
    Write the core node logs to `path` for a post-mortem.

    Returns:
        Whether the logs could be fetched; a failure is only logged
    """
    service = compose.config.core_service
    try:
        logs = compose.logs(service)
    except CommandError as e:
        logger.warning(f"could not fetch {service} logs: {e}")
        return False
    with open(path, "w") as f:
        f.write(logs)
    return True
