"""cli.args

Argument registration, split from the command implementations so tests can
build the parser without running anything.
"""

from __future__ import annotations

from .compare import add_compare_args

__all__ = ["add_compare_args"]
