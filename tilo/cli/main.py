from __future__ import annotations

import argparse
import json
import logging
import sys
from datetime import datetime

from tilo.command.operations import Operation, build_operations
from tilo.engine.errors import ArgumentError
from tilo.logging_setup import setup_logging
from tilo.store import load_config


logger = logging.getLogger(__name__)


def _build_parser(operations: dict[str, Operation]) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tilo")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    for op in operations.values():
        op_p = sub.add_parser(op.name, help=op.summary, add_help=False)
        op_p.add_argument("args", nargs=argparse.REMAINDER)
        op_p.set_defaults(_handler="operation")

    help_p = sub.add_parser("help", help="Show help for all or one operation")
    help_p.add_argument("operation", nargs="?", choices=list(operations))
    help_p.set_defaults(_handler="help")

    return parser


def main(argv: list[str] | None = None, *, now: datetime | None = None) -> int:
    config, config_meta = load_config()
    operations = build_operations(config)

    parser = _build_parser(operations)
    args = parser.parse_args(argv)

    setup_logging("DEBUG" if args.verbose else config.log_level)
    if config_meta.get("error"):
        print(f"tilo: config error: {config_meta.get('error')}", file=sys.stderr)
    for warning in config_meta.get("warnings", []):
        logger.warning(warning)

    if args._handler == "help":
        from tilo.cli.help import format_operation, format_overview

        if args.operation:
            print(format_operation(operations[args.operation]))
        else:
            print(format_overview(operations))
        return 0

    if args._handler == "operation":
        op = operations[args.command]
        # Read the clock once so every param sees the same instant.
        if now is None:
            now = datetime.now().astimezone()
        try:
            command = op.parser.parse(list(args.args), now)
        except ArgumentError as e:
            print(f"tilo: error: {e}", file=sys.stderr)
            return 2

        print(json.dumps(command.to_dict(), indent=2))
        return 0

    raise RuntimeError(f"Unknown command: {args.command}")


if __name__ == "__main__":
    raise SystemExit(main())
