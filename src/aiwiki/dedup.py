"""Order-preserving deduplication and truncation helpers."""

from collections.abc import Callable, Iterable, Sequence
from typing import TypeVar

T = TypeVar("T")


def dedupe_by_key(items: Iterable[T], key: Callable[[T], str]) -> list[T]:
    """Keep the first item for each case-insensitive key.

    Items whose key is blank are dropped.

    Args:
        items: Items in ranked order.
        key: Function returning the identity string of an item.

    Returns:
        Items in their original order with later duplicates removed.
    """
    seen: set[str] = set()
    unique: list[T] = []
    for item in items:
        k = key(item).strip().lower()
        if not k or k in seen:
            continue
        seen.add(k)
        unique.append(item)
    return unique


def truncate(items: Sequence[T], limit: int) -> list[T]:
    """Return at most ``limit`` leading items."""
    return list(items[: max(limit, 0)])
