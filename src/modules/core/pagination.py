"""Zero-based pagination primitives.

``PageRequest`` describes which slice a caller wants (page index, size and
sort orders), ``Page`` carries one slice plus the total row count, and
``parse_page_request`` builds a ``PageRequest`` from query parameters:

- ``page``: 0-based index, default 0.
- ``size``: default ``PAGINATION_DEFAULT_SIZE``; larger values are clamped
  to ``PAGINATION_MAX_SIZE``.
- ``sort``: repeatable, ``field[,field...][,asc|desc]``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Mapping, Optional, Tuple, TypeVar

from django.conf import settings

from modules.core.exceptions import ApiError

T = TypeVar("T")

_DIRECTIONS = {"asc": False, "desc": True}
_INTEGER = re.compile(r"-?[0-9]+")


@dataclass(frozen=True)
class SortOrder:
    field: str
    descending: bool = False

    def to_ordering(self) -> str:
        return f"-{self.field}" if self.descending else self.field


@dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = 10
    sort: Tuple[SortOrder, ...] = ()


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T]
    total: int
    total_pages: int = 0
    request: PageRequest = field(default_factory=PageRequest)

    def envelope(self, content: List[Any]) -> Dict[str, Any]:
        """Wrap already-serialized ``content`` in the pagination envelope."""
        return {
            "content": content,
            "totalElements": self.total,
            "totalPages": self.total_pages,
            "page": self.request.page,
            "size": self.request.size,
        }


def parse_page_request(
    params: Any, sortable_fields: Mapping[str, str]
) -> PageRequest:
    """Build a ``PageRequest`` from a QueryDict.

    ``sortable_fields`` maps accepted wire names to model field names.

    Raises:
        ApiError: BAD_PARAMETER for non-numeric or out-of-range values and
            for unknown sort fields or directions.
    """
    page = _parse_int(params.get("page"), "page", default=0)
    if page < 0:
        raise ApiError.bad_parameter("Parameter 'page' must not be negative")

    size = _parse_int(params.get("size"), "size", default=settings.PAGINATION_DEFAULT_SIZE)
    if size < 1:
        raise ApiError.bad_parameter("Parameter 'size' must be at least 1")
    size = min(size, settings.PAGINATION_MAX_SIZE)

    orders: List[SortOrder] = []
    for raw in params.getlist("sort"):
        orders.extend(parse_sort(raw, sortable_fields))

    return PageRequest(page=page, size=size, sort=tuple(orders))


def parse_sort(raw: str, sortable_fields: Mapping[str, str]) -> List[SortOrder]:
    """Parse one ``sort`` value, e.g. ``price,desc`` or ``brand,model``."""
    tokens = [token.strip() for token in raw.split(",") if token.strip()]
    if not tokens:
        return []

    descending = False
    if tokens[-1].lower() in _DIRECTIONS:
        descending = _DIRECTIONS[tokens.pop().lower()]
        if not tokens:
            raise ApiError.bad_parameter(f"Sort value '{raw}' names no field")

    orders = []
    for name in tokens:
        model_field = sortable_fields.get(name)
        if model_field is None:
            raise ApiError.bad_parameter(f"Cannot sort by '{name}'")
        orders.append(SortOrder(model_field, descending))
    return orders


def _parse_int(raw: Optional[str], name: str, default: int) -> int:
    if raw is None or raw == "":
        return default
    if not _INTEGER.fullmatch(raw):
        raise ApiError.bad_parameter(f"Parameter '{name}' should be of type int")
    return int(raw)
