"""Offset/limit reads over cached collections."""

from collections.abc import Sequence
from typing import Any

from .models import Page, PageInfo


def page(collection: Sequence[Any], offset: int, page_size: int) -> Page:
    """Slice one page out of a collection.

    Bounds are checked by the caller (offset >= 0, page size capped);
    an offset past the end yields an empty page rather than an error.

    Args:
        collection: The installed collection snapshot
        offset: Index of the first element to return
        page_size: Maximum number of elements to return

    Returns:
        Page with the slice and the collection's current length
    """
    return Page(
        data=list(collection[offset : offset + page_size]),
        page_info=PageInfo(total=len(collection)),
    )
