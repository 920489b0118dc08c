"""
Fixed-size pagination over a filtered contributor view.

Pages are 1-based. A page past the last one is not clamped and comes back
empty; ranks are positions within the filtered view, not global ranks.
"""

from typing import Optional, Sequence

from leaderboard_bot.constants import PaginationConstants
from leaderboard_bot.data_models.leaderboard import (
    Contributor, LeaderboardEntry, LeaderboardPage, QueryState
)


def total_pages(item_count: int, page_size: int = PaginationConstants.DEFAULT_PAGE_SIZE) -> int:
    """Ceiling division, minimum one page even for an empty view."""
    if page_size < 1:
        raise ValueError("page_size must be a positive integer")
    return max(1, (item_count + page_size - 1) // page_size)


def paginate(
    view: Sequence[Contributor],
    page: int = 1,
    page_size: int = PaginationConstants.DEFAULT_PAGE_SIZE,
    query: Optional[QueryState] = None
) -> LeaderboardPage:
    """Slice one page out of the filtered view and assign ranks."""
    if not isinstance(page, int) or page < 1:
        raise ValueError("page must be a positive integer")

    pages = total_pages(len(view), page_size)
    start = (page - 1) * page_size
    end = start + page_size

    entries = tuple(
        LeaderboardEntry(rank=rank, contributor=contributor)
        for rank, contributor in enumerate(view[start:end], start=start + 1)
    )

    return LeaderboardPage(
        entries=entries,
        current_page=page,
        total_pages=pages,
        total_items=len(view),
        query=query or QueryState(page=page),
    )


def rank_of(view: Sequence[Contributor], login: str) -> Optional[int]:
    """1-based position of ``login`` in the view, or None."""
    needle = login.lower()
    for position, contributor in enumerate(view, start=1):
        if contributor.login.lower() == needle:
            return position
    return None
