"""Optional paging for list endpoints.

Without ``limit`` a listing returns every row; ``offset`` skips rows in the
listing's own order.
"""

from dataclasses import dataclass

from fastapi import Query

MAX_PAGE_SIZE = 500


@dataclass(frozen=True)
class Page:
    limit: int | None = None
    offset: int = 0


async def page_params(
    limit: int | None = Query(default=None, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(default=0, ge=0),
) -> Page:
    return Page(limit=limit, offset=offset)
