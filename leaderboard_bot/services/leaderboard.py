"""
Leaderboard session for the contributor league.

Owns the lifecycle load -> query -> paginate over one immutable snapshot.
Each load fully replaces the previous snapshot; a generation counter makes
sure a slow load that finishes after a newer one started is discarded
instead of overwriting fresher data. Callers that only need a current
snapshot join the load already in flight rather than starting another.
"""

import asyncio
import logging
import time
from typing import Callable, Optional, Tuple

from leaderboard_bot.constants import PaginationConstants
from leaderboard_bot.data_models.leaderboard import (
    LeaderboardEntry, LeaderboardPage, LeaderboardSnapshot, ProjectStats, QueryState
)
from leaderboard_bot.services.aggregator import aggregate_contributors
from leaderboard_bot.services.github_fetcher import GitHubFetcher
from leaderboard_bot.services.paginator import rank_of
from leaderboard_bot.services.query_engine import apply_query, filter_contributors, top_contributors
from leaderboard_bot.services.scoring import PullRequestScorer
from leaderboard_bot.utils.leaderboard_exceptions import (
    LeaderboardException, LeaderboardNotLoadedError
)

logger = logging.getLogger(__name__)


class LeaderboardSession:
    """Loads, holds and queries one contributor snapshot."""

    def __init__(
        self,
        fetcher: GitHubFetcher,
        page_size: int = PaginationConstants.DEFAULT_PAGE_SIZE,
        clock: Callable[[], float] = time.monotonic
    ):
        self.fetcher = fetcher
        self.page_size = page_size
        self._clock = clock
        self._snapshot: Optional[LeaderboardSnapshot] = None
        self._generation = 0
        self._pending: Optional[asyncio.Task] = None

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    @property
    def snapshot(self) -> LeaderboardSnapshot:
        if self._snapshot is None:
            raise LeaderboardNotLoadedError()
        return self._snapshot

    @property
    def stats(self) -> ProjectStats:
        return self.snapshot.stats

    def is_stale(self, ttl_seconds: float) -> bool:
        """True when nothing is loaded or the snapshot is older than the TTL."""
        if self._snapshot is None:
            return True
        return self._clock() - self._snapshot.loaded_at >= ttl_seconds

    async def load(self) -> Optional[LeaderboardSnapshot]:
        """
        Fetch, score and aggregate a fresh snapshot.

        Returns:
            The installed snapshot, or None when a newer load started while
            this one was in flight and its result was discarded

        Raises:
            NetworkError: If the repository summary or contributor list fetch fails
            DataShapeError: If either of those bodies is malformed
        """
        self._generation += 1
        generation = self._generation
        logger.info(f"Loading leaderboard for {self.fetcher.owner}/{self.fetcher.repo} (generation {generation})")

        try:
            data = await self.fetcher.fetch_all()
            scoring = PullRequestScorer.score_all(data.pull_requests)
            contributors, stats = aggregate_contributors(data.repository, data.contributors, scoring)
        except LeaderboardException as e:
            logger.error(f"Leaderboard load {generation} failed: {e}")
            raise

        if generation != self._generation:
            logger.info(f"Discarding stale leaderboard load {generation}; load {self._generation} is newer")
            return None

        self._snapshot = LeaderboardSnapshot(
            contributors=contributors,
            stats=stats,
            recent_activity=data.recent_activity,
            loaded_at=self._clock(),
            generation=generation,
        )
        logger.info(
            f"Leaderboard loaded: {stats.contributor_count} contributors, "
            f"{stats.total_prs} merged PRs, {stats.total_points} points"
        )
        return self._snapshot

    async def reload(self) -> Optional[LeaderboardSnapshot]:
        """
        Start a new load that supersedes any load in flight.

        Waiters in ensure_loaded follow the newest load, so a superseded
        one never leaves them without a snapshot.
        """
        self._pending = asyncio.create_task(self.load())
        return await asyncio.shield(self._pending)

    async def ensure_loaded(self, ttl_seconds: float) -> LeaderboardSnapshot:
        """Reload when the snapshot is missing or expired, sharing one load between callers."""
        if not self.is_stale(ttl_seconds):
            return self.snapshot

        if self._pending is None or self._pending.done():
            self._pending = asyncio.create_task(self.load())

        task = self._pending
        while True:
            result = await asyncio.shield(task)
            if result is not None or self._pending is task:
                break
            # Discarded by a newer reload; wait for that one instead
            task = self._pending
        return self.snapshot

    def query(self, state: QueryState) -> LeaderboardPage:
        """Filtered, sorted page for ``state``."""
        return apply_query(self.snapshot.contributors, state, self.page_size)

    def top(self, count: int = PaginationConstants.TOP_COUNT) -> Tuple[LeaderboardEntry, ...]:
        """Top contributors by points with their ranks."""
        return tuple(
            LeaderboardEntry(rank=rank, contributor=contributor)
            for rank, contributor in enumerate(top_contributors(self.snapshot.contributors, count), start=1)
        )

    def find(self, login: str, state: Optional[QueryState] = None) -> Optional[LeaderboardEntry]:
        """
        Look up one contributor for the detail view.

        The rank is the contributor's position in the filtered view of
        ``state``, or in the canonical dataset when no state is given.
        """
        if state is None:
            view = self.snapshot.contributors
        else:
            view = filter_contributors(self.snapshot.contributors, state)

        rank = rank_of(view, login)
        if rank is None:
            return None
        return LeaderboardEntry(rank=rank, contributor=view[rank - 1])
