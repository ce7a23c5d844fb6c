from __future__ import annotations

import argparse
import logging
from typing import Optional, Sequence

from cli.args import add_compare_args
from cli.commands.compare import run_compare
from pipeline.wiring import load_environment


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Compare build artifact sizes between a base and a head build and report regressions."
    )
    add_compare_args(parser)
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    load_environment(args.env_file)
    return run_compare(args)
