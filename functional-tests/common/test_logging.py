"""
Tags every log record with the name of the functional test that emitted it.
"""

import logging

_current_test_name: str | None = None


class TestNameFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.test_name = _current_test_name or "no-test"
        return True


def set_current_test(test_name: str | None) -> None:
    """Called by the runtime around each test execution."""
    global _current_test_name
    _current_test_name = test_name
