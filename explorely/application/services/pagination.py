"""
Page/limit helpers shared by list endpoints.

Dependencies: math (stdlib)
System role: Pagination arithmetic
"""

import math


def page_offset(page: int, limit: int) -> int:
    """Rows to skip for a 1-based page number."""
    return (max(page, 1) - 1) * limit


def page_meta(total: int, page: int, limit: int, returned: int) -> dict:
    """
    Pagination block for list responses.

    Args:
        total: Rows matching the query
        page: 1-based page number that was served
        limit: Page size
        returned: Rows actually returned on this page

    Returns:
        dict: total, current_page, total_pages, has_more
    """
    page = max(page, 1)
    return {
        "total": total,
        "current_page": page,
        "total_pages": math.ceil(total / limit) if limit else 0,
        "has_more": page_offset(page, limit) + returned < total,
    }
