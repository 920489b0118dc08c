"""
Leaderboard data models for the contributor league.

Provides immutable data transfer objects for the aggregated contributor
dataset, query state and paginated results.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from leaderboard_bot.data_models.github import CommitActivity


class SortMode(Enum):
    POINTS = "points"
    ALPHABETICAL = "alphabetical"
    RECENT = "recent"  # Commit count stands in for recency


class TierFilter(Enum):
    ALL = "all"
    GOLD = "gold"
    SILVER = "silver"
    BRONZE = "bronze"
    NEW = "new"      # Fewer than 5 commits
    TOP10 = "top10"  # Overrides sort mode with points, keeps 10


@dataclass(frozen=True)
class Contributor:
    """Single contributor after the join and scoring."""
    login: str
    id: int
    avatar_url: str
    profile_url: str
    commit_count: int
    merged_pr_count: int
    points: int


@dataclass
class PullRequestScore:
    """Per-user accumulator built while scanning pull requests."""
    merged_pr_count: int = 0
    points: int = 0


@dataclass(frozen=True)
class ProjectStats:
    """Project-wide totals for the stats panel."""
    contributor_count: int
    total_prs: int
    total_points: int
    star_count: int
    fork_count: int
    total_commits: int


@dataclass(frozen=True)
class QueryState:
    """Search, sort, filter and page selection for one leaderboard view.

    Changing the search, sort or tier always returns to page 1.
    """
    search: str = ""
    sort_mode: SortMode = SortMode.POINTS
    tier_filter: TierFilter = TierFilter.ALL
    page: int = 1

    def with_search(self, search: str) -> "QueryState":
        return replace(self, search=search or "", page=1)

    def with_sort(self, sort_mode: SortMode) -> "QueryState":
        return replace(self, sort_mode=sort_mode, page=1)

    def with_tier(self, tier_filter: TierFilter) -> "QueryState":
        return replace(self, tier_filter=tier_filter, page=1)

    def with_page(self, page: int) -> "QueryState":
        return replace(self, page=page)


@dataclass(frozen=True)
class LeaderboardEntry:
    """Single leaderboard row. Rank is the position in the filtered view."""
    rank: int
    contributor: Contributor


@dataclass(frozen=True)
class LeaderboardPage:
    """Paginated leaderboard data."""
    entries: Tuple[LeaderboardEntry, ...]
    current_page: int
    total_pages: int
    total_items: int
    query: QueryState = field(default_factory=QueryState)

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


@dataclass(frozen=True)
class LeaderboardSnapshot:
    """Result of one full load: canonical dataset plus project totals."""
    contributors: Tuple[Contributor, ...]
    stats: ProjectStats
    recent_activity: Tuple[CommitActivity, ...] = ()
    loaded_at: float = 0.0
    generation: int = 0

    def get(self, login: str) -> Optional[Contributor]:
        needle = login.lower()
        for contributor in self.contributors:
            if contributor.login.lower() == needle:
                return contributor
        return None
