"""Page-number navigation for file listings.

The current page lives in the ``page`` query parameter of the listing URL.
Links keep every other query parameter (``sort``, ``query``) as they are.
"""
from math import ceil
from typing import List, Optional

from pydantic import BaseModel
from starlette.datastructures import URL, QueryParams

MAX_VISIBLE_PAGES = 3


class PageLink(BaseModel):
    page: int
    href: str
    active: bool = False


class Pagination(BaseModel):
    current_page: int
    total_pages: int
    pages: List[PageLink]
    previous: Optional[PageLink] = None  # None when on the first page
    next: Optional[PageLink] = None  # None when on the last page


def total_pages(total: int, page_size: int) -> int:
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    return ceil(max(total, 0) / page_size)


def visible_window(current: int, pages: int, max_visible: int = MAX_VISIBLE_PAGES) -> List[int]:
    """Up to ``max_visible`` contiguous page numbers around ``current``, within 1..pages."""
    if pages <= 0:
        return []
    start = max(current - max_visible // 2, 1)
    end = start + max_visible - 1
    if end > pages:
        end = pages
        start = max(end - max_visible + 1, 1)
    return list(range(start, end + 1))


def current_page(url: URL) -> int:
    try:
        page = int(QueryParams(url.query).get("page") or 1)
    except ValueError:
        return 1
    return page if page > 0 else 1


def go_to(url: URL, page: int) -> str:
    """Relative URL for ``page``, keeping the other query parameters."""
    target = url.include_query_params(page=page)
    return f"{target.path}?{target.query}"


def build_pagination(url: URL, current: int, total: int, page_size: int) -> Optional[Pagination]:
    """Navigation for a listing, or None when everything fits on one page."""
    pages = total_pages(total, page_size)
    if pages <= 1:
        return None

    def link(page: int) -> PageLink:
        return PageLink(page=page, href=go_to(url, page), active=page == current)

    return Pagination(
        current_page=current,
        total_pages=pages,
        pages=[link(p) for p in visible_window(current, pages)],
        previous=link(min(current - 1, pages)) if current > 1 else None,
        next=link(current + 1) if current < pages else None,
    )
