from __future__ import annotations

import math
import sys

VERSION = "czmil-image-index 1.0.0"

# Data folder marker and its replacement for the indexed camera folder.
DATA_MARKER = "LD"
INDEX_MARKER = "DC"

WEEK_SECONDS = 7 * 86400
MICROSECONDS = 1_000_000


def _log(msg: str, verbose: bool = True) -> None:
    if verbose:
        print(msg, flush=True)


def _warn(msg: str) -> None:
    print(msg, file=sys.stderr, flush=True)


def nint(value: float) -> int:
    """Nearest integer, halves rounded away from zero."""
    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))
