"""
Regtest stack factory.
Brings up the compose environment for functional tests.
"""

import contextlib
import os

import flexitest

from common.services.regtest import RegtestProps, RegtestService
from regtest import CommandRunner, Lifecycle, RegtestConfig
from regtest.diagnostics import save_core_logs


class RegtestFactory(flexitest.Factory):
    """
    Factory for the compose-based regtest stack.

    The stack binds fixed host ports from the compose file, so no port range
    is handed out and only one stack can be alive at a time.

    Usage:
        factory = RegtestFactory("compose.yaml")
        stack = factory.create_stack()
        stack.ops.mine(5)
    """

    def __init__(self, compose_file: str):
        super().__init__([])
        self.compose_file = os.path.abspath(compose_file)

    @flexitest.with_ectx("ctx")
    def create_stack(self, **kwargs) -> RegtestService:
        """
        Start the stack from a clean slate.

        Data directories live next to the compose file, where its bind mounts point.
        """
        ctx: flexitest.EnvContext = kwargs["ctx"]
        logdir = ctx.make_service_dir("regtest")

        config = RegtestConfig.from_env(
            self.compose_file,
            workdir=os.path.dirname(self.compose_file),
        )
        props: RegtestProps = {
            "compose_file": config.compose_file,
            "workdir": config.workdir,
            "wallet": config.wallet_name,
        }

        svc = RegtestService(props, Lifecycle(config, CommandRunner()))
        try:
            svc.start()
        except Exception as e:
            # Keep the failing logs around before tearing down
            save_core_logs(svc.lifecycle.compose, os.path.join(logdir, "bitcoind.log"))
            with contextlib.suppress(Exception):
                svc.stop()
            raise RuntimeError(f"Failed to start regtest stack: {e}") from e

        return svc
