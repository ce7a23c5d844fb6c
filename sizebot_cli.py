#!/usr/bin/env python3
"""
CLI wrapper for the build-size comparison bot.

Usage:
  python sizebot_cli.py
  python sizebot_cli.py --base-dir base-build --head-dir build
  python sizebot_cli.py --sink github --out-dir /tmp/artifacts
  python sizebot_cli.py --changed-files changed.txt --export-records --out-dir out
"""

from __future__ import annotations

import sys
from typing import Optional, Sequence

from cli.dispatch import main as _dispatch_main


def main(argv: Optional[Sequence[str]] = None) -> None:
    raise SystemExit(_dispatch_main(argv))


if __name__ == "__main__":
    main(sys.argv[1:])
