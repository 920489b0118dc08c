"""
Pull request scoring for the contributor league.

Only merged pull requests earn points. Each label that names a level adds
that level's weight, so a PR labelled both "level 3" and "level 1" is worth
11 + 2. A merged PR without any level label earns the default weight.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Tuple

from leaderboard_bot.constants import PointConstants
from leaderboard_bot.data_models.github import PullRequest
from leaderboard_bot.data_models.leaderboard import PullRequestScore

logger = logging.getLogger(__name__)


@dataclass
class ScoringResult:
    """Per-user accumulators plus project-wide totals."""
    per_user: Dict[str, PullRequestScore] = field(default_factory=dict)
    total_prs: int = 0
    total_points: int = 0

    def for_user(self, login: str) -> PullRequestScore:
        return self.per_user.get(login, PullRequestScore())


class PullRequestScorer:
    """Label-weighted scoring of merged pull requests."""

    # Checked in order; the first match decides a single label's weight
    LEVEL_WEIGHTS: Tuple[Tuple[str, int], ...] = (
        (PointConstants.LEVEL_3_LABEL, PointConstants.LEVEL_3),
        (PointConstants.LEVEL_2_LABEL, PointConstants.LEVEL_2),
        (PointConstants.LEVEL_1_LABEL, PointConstants.LEVEL_1),
    )

    @classmethod
    def label_weight(cls, label: str) -> int:
        """Weight of a single label, 0 when it names no level."""
        name = label.lower()
        for needle, weight in cls.LEVEL_WEIGHTS:
            if needle in name:
                return weight
        return 0

    @classmethod
    def score_pull_request(cls, pull_request: PullRequest) -> int:
        """Points for one pull request. Unmerged pull requests score 0."""
        if not pull_request.is_merged:
            return 0

        points = 0
        has_level = False
        for label in pull_request.labels:
            weight = cls.label_weight(label)
            if weight:
                points += weight
                has_level = True

        if not has_level:
            points += PointConstants.DEFAULT
        return points

    @classmethod
    def score_all(cls, pull_requests: Iterable[PullRequest]) -> ScoringResult:
        """Accumulate merged PR counts and points per author."""
        result = ScoringResult()
        skipped_authorless = 0

        for pull_request in pull_requests:
            if not pull_request.is_merged:
                continue
            if not pull_request.author_login:
                skipped_authorless += 1
                continue

            points = cls.score_pull_request(pull_request)
            user_score = result.per_user.setdefault(pull_request.author_login, PullRequestScore())
            user_score.merged_pr_count += 1
            user_score.points += points

            result.total_prs += 1
            result.total_points += points

        if skipped_authorless:
            logger.debug(f"Skipped {skipped_authorless} merged pull requests without an author")

        return result
