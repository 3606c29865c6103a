"""
Timing helpers.
"""

import time
from contextlib import contextmanager
from typing import Dict, Iterator


@contextmanager
def timer() -> Iterator[Dict[str, int]]:
    """
    Measure the wall time of a block in milliseconds.

    The yielded dict is filled when the block exits, so read it after the
    ``with`` statement.

    Example:
        >>> with timer() as t:
        ...     do_work()
        >>> elapsed = t["ms"]
    """
    result = {"ms": 0}
    start = time.perf_counter()
    try:
        yield result
    finally:
        result["ms"] = int((time.perf_counter() - start) * 1000)
