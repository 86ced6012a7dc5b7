"""Detection of target-language source files."""

from __future__ import annotations

import re
from typing import Sequence

from .base import StagedFile


def interpreter_pattern(interpreter: str) -> "re.Pattern[str]":
    """Match a ``#!`` line naming ``interpreter`` (``/usr/bin/perl``, ``env perl -w``, ``perl5.36``...)."""
    return re.compile(rf"^#!.*\b{re.escape(interpreter)}[\d.]*\b")


def is_target_source(
    staged: StagedFile, *, suffixes: Sequence[str], interpreter: str
) -> bool:
    """Return True if the file is source code for the configured interpreter.

    Files with an extension are judged by it alone; extension-less files by
    their first staged line.
    """
    if staged.suffix:
        return staged.suffix in {suffix.lower() for suffix in suffixes}
    return bool(interpreter_pattern(interpreter).match(staged.first_line))
