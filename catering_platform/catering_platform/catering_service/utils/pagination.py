"""
Pagination helpers shared by every list endpoint.
"""
import math
from typing import Dict

from ..exceptions import ValidationError

DEFAULT_PER_PAGE = 10


def paginate(total_items: int, current_page: int, per_page: int) -> Dict[str, int]:
    """
    Build pagination metadata for a result set.

    Never raises. Out-of-range input is clamped rather than rejected:
    ``per_page <= 0`` falls back to ``DEFAULT_PER_PAGE``, a negative
    ``total_items`` becomes 0, and ``current_page`` is pulled into
    ``[1, total_pages]`` (or forced to 1 for an empty result).

    Args:
        total_items: Total number of matching rows across all pages
        current_page: Requested page (1-based)
        per_page: Requested page size

    Returns:
        Dictionary with total_items, current_page, per_page, total_pages, offset
    """
    if per_page <= 0:
        per_page = DEFAULT_PER_PAGE

    total_items = max(0, total_items)
    total_pages = math.ceil(total_items / per_page) if total_items > 0 else 0

    if total_pages > 0:
        current_page = max(1, min(current_page, total_pages))
    else:
        current_page = 1

    return {
        "total_items": total_items,
        "current_page": current_page,
        "per_page": per_page,
        "total_pages": total_pages,
        "offset": (current_page - 1) * per_page,
    }



def check_page_in_range(requested_page: int, total_pages: int) -> None:
    """Reject a requested page beyond the last page of a non-empty result set."""
    if total_pages > 0 and requested_page > total_pages:
        raise ValidationError({
            "page": f"The requested page ({requested_page}) exceeds the total number of pages ({total_pages})."
        })
