"""Normalization of untrusted listing parameters.

Query strings arrive as arbitrary text. Nothing here raises: malformed
pagination values are corrected to safe defaults instead of being
rejected, so callers never see a validation error for them.
"""

import re
from dataclasses import dataclass
from typing import Optional

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100

_LEADING_INT = re.compile(r"^\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class ListingParams:
    """Bounded pagination values plus the optional text filters."""
    page: int
    limit: int
    offset: int
    search: Optional[str] = None
    department: Optional[str] = None


def parse_int(value) -> Optional[int]:
    """Parse the leading integer of `value`.

    Mirrors the lenient parse browsers and query-string clients expect:
    `"3"` and `" 3abc"` give 3, `"2.7"` gives 2, while `""`, `"abc"` or
    `None` give `None`. Digit runs too long for `int()` also give `None`.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(str(value))
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        return None


def clean_filter(value: Optional[str]) -> Optional[str]:
    """Return the trimmed filter text, or `None` when there is nothing to match."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def normalize_page(value) -> int:
    parsed = parse_int(value)
    if parsed is None:
        return DEFAULT_PAGE
    return max(DEFAULT_PAGE, parsed)


def normalize_page_size(value) -> int:
    parsed = parse_int(value)
    if parsed is None or parsed < 1:
        return DEFAULT_PAGE_SIZE
    return min(MAX_PAGE_SIZE, parsed)


def normalize_pagination(page=None, page_size=None, search=None, department=None) -> ListingParams:
    """Turn raw query values into a `ListingParams`.

    `page` is clamped to >= 1 and `page_size` to [1, 100]; missing or
    non-numeric values fall back to 1 and 10 respectively.
    """
    current_page = normalize_page(page)
    limit = normalize_page_size(page_size)
    return ListingParams(
        page=current_page,
        limit=limit,
        offset=(current_page - 1) * limit,
        search=clean_filter(search),
        department=clean_filter(department),
    )
