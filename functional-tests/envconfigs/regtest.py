"""Environment configurations."""

from typing import cast

import flexitest

from factories.regtest import RegtestFactory

REGTEST = "regtest"


class RegtestEnvConfig(flexitest.EnvConfig):
    """
    Regtest environment: the full compose stack with the mining wallet
    bootstrapped and initial blocks mined.
    """

    def init(self, ectx: flexitest.EnvContext) -> flexitest.LiveEnv:
        factory = cast(RegtestFactory, ectx.get_factory(REGTEST))
        stack = factory.create_stack()
        return flexitest.LiveEnv({REGTEST: stack})
