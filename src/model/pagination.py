"""Pagination arithmetic for the list views."""

from __future__ import annotations

from math import ceil
from typing import Sequence, TypeVar

from constants import PAGE_SIZES

T = TypeVar("T")

# Pages shown on each side of the current page
WINDOW = 2


def validate_page_size(page_size: int) -> int:
    """Return `page_size` if it is one of PAGE_SIZES.

    Raises:
        ValueError: for any other value
    """
    if page_size not in PAGE_SIZES:
        raise ValueError(f"Page size must be one of {PAGE_SIZES}, got {page_size}")
    return page_size


def page_count(total: int, page_size: int) -> int:
    """Number of pages; an empty collection still has one (empty) page."""
    return max(1, ceil(total / page_size))


def clamp_page(page: int, total: int, page_size: int) -> int:
    return min(max(1, page), page_count(total, page_size))


def page_slice(rows: Sequence[T], page: int, page_size: int) -> list[T]:
    """Rows visible on `page` (1-based)."""
    start = (page - 1) * page_size
    return list(rows[start : start + page_size])


def page_window(page: int, pages: int) -> list[int | None]:
    """Page buttons to show: first, last, current ± 2; None marks an ellipsis.

    Example:
        page_window(6, 12) -> [1, None, 4, 5, 6, 7, 8, None, 12]
    """
    result: list[int | None] = []
    for i in range(1, pages + 1):
        if i == 1 or i == pages or page - WINDOW <= i <= page + WINDOW:
            result.append(i)
        elif i == page - WINDOW - 1 or i == page + WINDOW + 1:
            result.append(None)
    return result


def results_info(page: int, page_size: int, total: int) -> str:
    """Range label like "11-20 of 42"."""
    if total == 0:
        return "1-0 of 0"
    start = (page - 1) * page_size + 1
    end = min(page * page_size, total)
    return f"{start}-{end} of {total}"
