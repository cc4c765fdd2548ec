"""Millisecond wall-clock helpers shared by ledger and goals."""

import time
from typing import Callable

Clock = Callable[[], int]


def now_ms() -> int:
    """Current time as integer epoch milliseconds."""
    return int(time.time() * 1000)
