"""
Command line entry point.

Usage:
    regtest [-f <compose-file>] start
    regtest stop
    regtest mine <blocks>
    regtest fund <address>
    regtest sendtoaddress <address> <amount>
"""

import argparse
import logging
import os
import sys
from collections.abc import Callable

from regtest.config import DEFAULT_COMPOSE_FILE, RegtestConfig
from regtest.diagnostics import report_fatal
from regtest.errors import RegtestError
from regtest.lifecycle import Lifecycle
from regtest.runner import CommandRunner

COMMANDS_HELP = f"""
commands:
  start                           Start services, create the bitcoind wallet
                                  used for mining, generate initial blocks
  stop                            Stop services and clean up
  mine <blocks>                   Mine the requested number of blocks
  fund <address>                  Fund the requested address with 1 BTC
  sendtoaddress <address> <amount>
                                  Send to a Bitcoin address

The compose file defaults to $COMPOSE_FILE, then {DEFAULT_COMPOSE_FILE}.
"""


class ArgumentParser(argparse.ArgumentParser):
    """Bad arguments are fatal like any other error, so they exit 1, not 2."""

    def error(self, message: str):
        raise RegtestError(message)


def setup_logging() -> None:
    """Configure root logger."""
    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="regtest",
        description="Run and command regtest services",
        epilog=COMMANDS_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-f",
        "--compose-file",
        metavar="<file>",
        help=f"Specify a Docker Compose file (default: {DEFAULT_COMPOSE_FILE})",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    subparsers.add_parser("start", help="start services")
    subparsers.add_parser("stop", help="stop services and clean up")

    # Positionals are optional here, handlers report what is missing.
    mine = subparsers.add_parser("mine", help="mine blocks")
    mine.add_argument("blocks", nargs="?")

    fund = subparsers.add_parser("fund", help="fund an address with 1 BTC")
    fund.add_argument("address", nargs="?")

    send = subparsers.add_parser("sendtoaddress", help="send to an address")
    send.add_argument("address", nargs="?")
    send.add_argument("amount", nargs="?")

    return parser


def _start(args: argparse.Namespace, lifecycle: Lifecycle) -> None:
    lifecycle.start()


def _stop(args: argparse.Namespace, lifecycle: Lifecycle) -> None:
    lifecycle.stop()


def _mine(args: argparse.Namespace, lifecycle: Lifecycle) -> None:
    if not args.blocks:
        raise RegtestError("Number of blocks required for mine command")
    lifecycle.ops.mine(args.blocks)


def _fund(args: argparse.Namespace, lifecycle: Lifecycle) -> None:
    if not args.address:
        raise RegtestError("Address required for fund command")
    print(lifecycle.ops.fund(args.address))


def _sendtoaddress(args: argparse.Namespace, lifecycle: Lifecycle) -> None:
    if not args.address:
        raise RegtestError("Address required for sendtoaddress command")
    if not args.amount:
        raise RegtestError("Amount required for sendtoaddress command")
    print(lifecycle.ops.sendtoaddress(args.address, args.amount))


HANDLERS: dict[str, Callable[[argparse.Namespace, Lifecycle], None]] = {
    "start": _start,
    "stop": _stop,
    "mine": _mine,
    "fund": _fund,
    "sendtoaddress": _sendtoaddress,
}


def dispatch(args: argparse.Namespace, lifecycle: Lifecycle) -> None:
    """Route a parsed command to the lifecycle or the blockchain operations."""
    HANDLERS[args.command](args, lifecycle)


def main(argv: list[str]) -> int:
    """Main entry point."""
    setup_logging()
    parser = build_parser()

    try:
        args = parser.parse_args(argv[1:])
    except RegtestError as e:
        report_fatal(e, None)
        return 1

    if args.command is None:
        parser.print_help()
        return 1

    config = RegtestConfig.from_env(args.compose_file)
    lifecycle = Lifecycle(config, CommandRunner())

    try:
        lifecycle.check_compose()
        dispatch(args, lifecycle)
    except RegtestError as e:
        report_fatal(e, lifecycle.compose)
        return 1

    return 0


def run() -> None:
    sys.exit(main(sys.argv))
