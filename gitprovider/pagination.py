"""Exhaustive pagination over cursor-based list endpoints."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """One page of results and the cursor of the page after it (None on the last page)."""

    items: list[T] = field(default_factory=list)
    next_cursor: Any = None


def all_pages(fetch: Callable[[Any], Page[T]]) -> list[T]:
    """
    Fetch every page and return all items in page order.

    Args:
        fetch: Called with None for the first page, then with each page's
            next_cursor until one is None

    Raises:
        Whatever fetch raises; partial results are discarded
    """
    items: list[T] = []
    cursor: Any = None
    while True:
        page = fetch(cursor)
        items.extend(page.items)
        if page.next_cursor is None:
            return items
        cursor = page.next_cursor
