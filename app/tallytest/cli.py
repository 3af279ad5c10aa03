"""Command line interface for running test files."""
from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import ConfigurationError, get_config
from .output.channels import FLAG_CHANNELS, channels_for_flags, configure_logging
from .runner import run

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tallytest",
        description="Run *.test.py files and print a pass/fail summary",
        allow_abbrev=False,
    )
    parser.add_argument(
        "names",
        nargs="*",
        help="Only run test files named <name>.test.py (case-insensitive)",
    )
    parser.add_argument("--root", type=Path, help="Directory to search for fixture and test files")
    for flag, channels in FLAG_CHANNELS.items():
        parser.add_argument(
            flag,
            dest="muted_flags",
            action="append_const",
            const=flag,
            help=f"Mute the {', '.join(channels)} output",
        )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    try:
        config = get_config()
    except ConfigurationError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    configure_logging(config.log_level_value)
    parser = build_parser()
    args, unknown = parser.parse_known_intermixed_args(argv)
    if unknown:
        LOGGER.debug("event=parse_args status=ignored unknown=%s", " ".join(unknown))

    if args.root is not None:
        if not args.root.is_dir():
            print(f"Root directory {args.root} does not exist", file=sys.stderr)
            return 2
        config = dataclasses.replace(config, root=args.root)

    outcome = run(config, names=args.names, muted=channels_for_flags(args.muted_flags or ()))
    return outcome.exit_code


if __name__ == "__main__":
    sys.exit(main())
