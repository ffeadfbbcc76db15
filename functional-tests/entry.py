#!/usr/bin/env python3
"""
Functional test runner for the regtest stack.

Usage:
    ./entry.py                          # Run all tests
    ./entry.py -t test_fund             # Run specific test
    ./entry.py -f ../compose.yaml       # Use another compose file
"""

import argparse
import logging
import os
import sys

import flexitest

from common.runtime import RegtestTestRuntime
from common.test_logging import TestNameFilter
from envconfigs import REGTEST, RegtestEnvConfig
from factories import RegtestFactory
from regtest.config import DEFAULT_COMPOSE_FILE


def setup_logging() -> None:
    """Configure root logger."""
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(test_name)s - %(name)s - %(levelname)s - %(message)s",
    )
    for handler in logging.getLogger().handlers:
        handler.addFilter(TestNameFilter())


def parse_args(argv: list[str]) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="entry.py",
        description="Run regtest functional tests",
    )
    parser.add_argument(
        "-t",
        "--test",
        nargs="*",
        help="Run specific test(s)",
    )
    parser.add_argument(
        "-f",
        "--compose-file",
        default=os.getenv("COMPOSE_FILE", DEFAULT_COMPOSE_FILE),
        help=f"Docker Compose file of the stack (default: {DEFAULT_COMPOSE_FILE})",
    )
    return parser.parse_args(argv[1:])


def filter_tests(selected: list[str] | None, modules: dict[str, str]) -> dict[str, str]:
    """Keep only the modules named on the command line, by file name."""
    if not selected:
        return modules
    wanted = frozenset(os.path.split(t)[1].removesuffix(".py") for t in selected)
    return {name: path for name, path in modules.items() if name in wanted}


def main(argv: list[str]) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging()

    factories: dict[str, flexitest.Factory] = {
        REGTEST: RegtestFactory(args.compose_file),
    }

    # The stack binds fixed ports, so a single shared env serves every test.
    global_envs: dict[str, flexitest.EnvConfig] = {
        "basic": RegtestEnvConfig(),
    }

    root_dir = os.path.dirname(os.path.abspath(__file__))
    datadir = flexitest.create_datadir_in_workspace(os.path.join(root_dir, "_dd"))
    runtime = RegtestTestRuntime(global_envs, datadir, factories)

    test_dir = os.path.join(root_dir, "tests")
    modules = filter_tests(args.test, flexitest.runtime.scan_dir_for_modules(test_dir))
    tests = flexitest.runtime.load_candidate_modules(modules)

    runtime.prepare_registered_tests()
    results = runtime.run_tests(tests)

    runtime.save_json_file("results.json", results)
    flexitest.dump_results(results)

    # Exit with error if any test failed
    flexitest.fail_on_error(results)

    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
