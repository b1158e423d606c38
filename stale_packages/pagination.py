"""
Cursor based pagination helper.
"""

from __future__ import annotations

from typing import Callable, Iterator, Optional, Tuple, TypeVar

from .models import GitHubQueryError, PageInfo


P = TypeVar("P")


def paginate(
    fetch_page: Callable[[Optional[str]], P],
    page_info: Callable[[P], PageInfo],
    first_page: Optional[P] = None,
) -> Iterator[Tuple[Optional[str], P]]:
    """Walk a connection until it reports no further pages.

    Args:
        fetch_page: Fetches the page following the given cursor (None for the first page)
        page_info: Extracts the continuation state of a page
        first_page: Already fetched first page, yielded without calling ``fetch_page``

    Yields:
        Tuples of (cursor the page was requested with, page)

    Raises:
        GitHubQueryError: A page reports more pages without advancing the cursor
    """
    cursor: Optional[str] = None
    page = fetch_page(cursor) if first_page is None else first_page
    while True:
        yield cursor, page
        info = page_info(page)
        if not info.has_next_page:
            return
        if info.end_cursor is None or info.end_cursor == cursor:
            raise GitHubQueryError(f"page after cursor {cursor!r} does not advance the cursor")
        cursor = info.end_cursor
        page = fetch_page(cursor)
