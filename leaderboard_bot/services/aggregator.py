"""
Joins GitHub contributor records with pull request scores.

Produces the canonical contributor dataset (bots removed, sorted by points)
and the project-wide totals shown on the stats panel.
"""

import logging
from typing import Any, List, Tuple

from leaderboard_bot.constants import PointConstants
from leaderboard_bot.data_models.github import ContributorRecord, RepositorySummary
from leaderboard_bot.data_models.leaderboard import Contributor, ProjectStats
from leaderboard_bot.services.scoring import ScoringResult
from leaderboard_bot.utils.leaderboard_exceptions import DataShapeError

logger = logging.getLogger(__name__)


def parse_contributor_list(payload: Any) -> List[ContributorRecord]:
    """Validate the contributors endpoint body."""
    if not isinstance(payload, list):
        raise DataShapeError("contributor list", f"expected a list, got {type(payload).__name__}")
    return [ContributorRecord.from_api(item) for item in payload]


def final_points(record: ContributorRecord, scored_points: int) -> int:
    """PR points, or one point per commit when no PR points were earned."""
    if scored_points == 0:
        return record.commit_count * PointConstants.COMMIT
    return scored_points


def aggregate_contributors(
    repository_payload: Any,
    contributors_payload: Any,
    scoring: ScoringResult
) -> Tuple[Tuple[Contributor, ...], ProjectStats]:
    """
    Build the canonical dataset and project stats.

    Args:
        repository_payload: Raw repository summary body
        contributors_payload: Raw contributor list body
        scoring: Per-user PR scores and project totals

    Returns:
        Contributors sorted by points (descending, ties keep fetch order)
        and the ProjectStats for this load

    Raises:
        DataShapeError: If either payload is missing required fields
    """
    summary = RepositorySummary.from_api(repository_payload)
    records = parse_contributor_list(contributors_payload)

    contributors = []
    total_commits = 0
    bots_skipped = 0

    for record in records:
        if record.is_bot:
            bots_skipped += 1
            continue

        user_score = scoring.for_user(record.login)
        total_commits += record.commit_count

        contributors.append(Contributor(
            login=record.login,
            id=record.id,
            avatar_url=record.avatar_url,
            profile_url=record.profile_url,
            commit_count=record.commit_count,
            merged_pr_count=user_score.merged_pr_count,
            points=final_points(record, user_score.points),
        ))

    # sorted() is stable, so equal totals keep the order GitHub returned
    contributors.sort(key=lambda c: c.points, reverse=True)

    stats = ProjectStats(
        contributor_count=len(contributors),
        total_prs=scoring.total_prs,
        total_points=scoring.total_points,
        star_count=summary.star_count,
        fork_count=summary.fork_count,
        total_commits=total_commits,
    )

    logger.debug(
        f"Aggregated {len(contributors)} contributors "
        f"({bots_skipped} bots skipped, {scoring.total_prs} merged PRs)"
    )
    return tuple(contributors), stats
