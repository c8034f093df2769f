"""Translate page/search/sort/category request parameters into a file listing query."""
from typing import List, Optional, Tuple

from pydantic import BaseModel

from app.config import settings
from app.core.exceptions import InvalidCategory
from app.modules.files.file_types import get_category_types

SORTABLE_FIELDS = ("created_at", "name", "size")
DEFAULT_SORT: Tuple[str, bool] = ("created_at", True)

# Sort keys used by older front-end builds
_SORT_FIELD_ALIASES = {
    "$createdAt": "created_at",
    "createdAt": "created_at",
}


class FileQuery(BaseModel):
    category: str
    types: List[str]
    search_text: str = ""
    sort_field: str = DEFAULT_SORT[0]
    sort_desc: bool = DEFAULT_SORT[1]
    page: int = 1
    limit: int
    offset: int = 0


def parse_sort(sort: Optional[str]) -> Tuple[str, bool]:
    """Parse '<field>-<asc|desc>' into (field, descending). Falls back to newest first."""
    if not sort or "-" not in sort:
        return DEFAULT_SORT
    field, direction = sort.rsplit("-", 1)
    field = _SORT_FIELD_ALIASES.get(field, field)
    direction = direction.lower()
    if field not in SORTABLE_FIELDS or direction not in ("asc", "desc"):
        return DEFAULT_SORT
    return field, direction == "desc"


def build_file_query(
    category: str,
    page: Optional[int] = 1,
    page_size: Optional[int] = None,
    search_text: Optional[str] = "",
    sort: Optional[str] = "",
) -> FileQuery:
    """Build the listing query for one page of a category.

    Raises InvalidCategory for an unknown category. Pages below 1 are clamped to 1.
    """
    types = get_category_types(category)
    if types is None:
        raise InvalidCategory(category)

    page_size = settings.page_size if page_size is None else page_size
    if page_size <= 0:
        raise ValueError("page_size must be positive")
    page = page if page and page > 0 else 1
    sort_field, sort_desc = parse_sort(sort)

    return FileQuery(
        category=category,
        types=types,
        search_text=(search_text or "").strip(),
        sort_field=sort_field,
        sort_desc=sort_desc,
        page=page,
        limit=page_size,
        offset=(page - 1) * page_size,
    )
