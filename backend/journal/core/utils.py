"""
Utility functions for the application.
"""
from typing import Optional, Tuple

SUMMARY_LENGTH = 200
SUMMARY_ELLIPSIS = "..."

DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


def make_summary(content: Optional[str], limit: int = SUMMARY_LENGTH) -> str:
    """Preview of decrypted content, cut at ``limit`` characters (not bytes)."""
    if not content:
        return ""
    if len(content) > limit:
        return content[:limit] + SUMMARY_ELLIPSIS
    return content


def page_to_offset(page: int, page_size: int) -> Tuple[int, int, int]:
    """Normalize 1-based page numbers into ``(page, page_size, offset)``."""
    if page < 1:
        page = 1
    if page_size < 1 or page_size > MAX_PAGE_SIZE:
        page_size = DEFAULT_PAGE_SIZE
    return page, page_size, (page - 1) * page_size
