"""
In-memory query engine over the canonical contributor dataset.

Applies search, tier filter and sort in that order. The "top10" tier
re-sorts by points and truncates afterwards, whatever sort mode was
requested. All functions are pure and never mutate their input.
"""

from typing import Callable, Dict, List, Sequence

from leaderboard_bot.constants import LeagueConstants, PaginationConstants
from leaderboard_bot.data_models.leaderboard import (
    Contributor, LeaderboardPage, QueryState, SortMode, TierFilter
)
from leaderboard_bot.services.paginator import paginate
from leaderboard_bot.utils.league import LeagueTier, get_league


def _by_points(contributors: List[Contributor]) -> List[Contributor]:
    return sorted(contributors, key=lambda c: c.points, reverse=True)


def _alphabetical(contributors: List[Contributor]) -> List[Contributor]:
    # casefold approximates locale collation; raw login breaks case-only ties
    return sorted(contributors, key=lambda c: (c.login.casefold(), c.login))


def _by_commits(contributors: List[Contributor]) -> List[Contributor]:
    return sorted(contributors, key=lambda c: c.commit_count, reverse=True)


SORTERS: Dict[SortMode, Callable[[List[Contributor]], List[Contributor]]] = {
    SortMode.POINTS: _by_points,
    SortMode.ALPHABETICAL: _alphabetical,
    SortMode.RECENT: _by_commits,
}

TIER_LEAGUES = {
    TierFilter.GOLD: LeagueTier.GOLD,
    TierFilter.SILVER: LeagueTier.SILVER,
    TierFilter.BRONZE: LeagueTier.BRONZE,
}


def search_contributors(contributors: Sequence[Contributor], term: str) -> List[Contributor]:
    """Case-insensitive substring match on login. Empty term matches all."""
    needle = (term or "").lower()
    if not needle:
        return list(contributors)
    return [c for c in contributors if needle in c.login.lower()]


def matches_tier(contributor: Contributor, tier_filter: TierFilter) -> bool:
    if tier_filter in (TierFilter.ALL, TierFilter.TOP10):
        return True
    if tier_filter == TierFilter.NEW:
        return contributor.commit_count < LeagueConstants.NEW_CONTRIBUTOR_MAX_COMMITS
    return get_league(contributor.points).tier == TIER_LEAGUES[tier_filter]


def filter_contributors(contributors: Sequence[Contributor], state: QueryState) -> List[Contributor]:
    """Produce the filtered, ordered view for a query state."""
    result = search_contributors(contributors, state.search)

    if state.tier_filter != TierFilter.ALL:
        result = [c for c in result if matches_tier(c, state.tier_filter)]

    result = SORTERS[state.sort_mode](result)

    if state.tier_filter == TierFilter.TOP10:
        result = _by_points(result)[:PaginationConstants.TOP_COUNT]

    return result


def top_contributors(contributors: Sequence[Contributor], count: int = PaginationConstants.TOP_COUNT) -> List[Contributor]:
    """Highest point totals first, at most ``count`` items."""
    if count < 0:
        raise ValueError("count must not be negative")
    return _by_points(list(contributors))[:count]


def apply_query(
    contributors: Sequence[Contributor],
    state: QueryState,
    page_size: int = PaginationConstants.DEFAULT_PAGE_SIZE
) -> LeaderboardPage:
    """Filter, sort and paginate in one call."""
    view = filter_contributors(contributors, state)
    return paginate(view, state.page, page_size, query=state)
