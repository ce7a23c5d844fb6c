"""sizebot.io

Filesystem contracts and IO helpers.

Design principle
----------------
The two build trees (base and head) are read through one set of rules, and
every file this project writes goes through the atomic writers in
:mod:`sizebot.io.fs`. Stages never open output files themselves.
"""

from __future__ import annotations

from .fs import write_csv_atomic, write_json_atomic, write_text_atomic
from .layout import BuildPaths, read_commit_marker

__all__ = [
    "BuildPaths",
    "read_commit_marker",
    "write_csv_atomic",
    "write_json_atomic",
    "write_text_atomic",
]
