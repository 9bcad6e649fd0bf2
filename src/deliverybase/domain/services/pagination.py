"""Pagination helpers shared by listing operations."""

import math


def total_pages(total: int, limit: int) -> int:
    """Number of pages needed to show ``total`` items ``limit`` at a time."""
    if limit <= 0:
        return 0
    return math.ceil(total / limit)
