"""
Test runtime that records which test is running for log tagging.
"""

import flexitest

from common.test_logging import set_current_test


class RegtestTestRuntime(flexitest.TestRuntime):
    def _exec_test(self, test_name: str, env):
        set_current_test(test_name)
        try:
            return super()._exec_test(test_name, env)
        finally:
            set_current_test(None)
