"""
Tests for joining contributors with pull request scores.
"""

import pytest

from conftest import contributor_payload, pull_payload, repository_payload

from leaderboard_bot.data_models.github import PullRequest
from leaderboard_bot.services.aggregator import aggregate_contributors
from leaderboard_bot.services.scoring import PullRequestScorer, ScoringResult
from leaderboard_bot.utils.leaderboard_exceptions import DataShapeError


def _score(*pulls):
    return PullRequestScorer.score_all(PullRequest.from_api(p) for p in pulls)


def test_joins_scores_by_login():
    contributors, stats = aggregate_contributors(
        repository_payload(stars=100, forks=12),
        [contributor_payload("ada", 20), contributor_payload("grace", 3)],
        _score(pull_payload("ada", labels=["level 3"]), pull_payload("grace", labels=["level 2"])),
    )

    by_login = {c.login: c for c in contributors}
    assert by_login["ada"].points == 11
    assert by_login["ada"].merged_pr_count == 1
    assert by_login["grace"].points == 5
    assert stats.star_count == 100
    assert stats.fork_count == 12


def test_zero_points_fall_back_to_commit_count():
    contributors, _ = aggregate_contributors(
        repository_payload(),
        [contributor_payload("legacy", contributions=7)],
        ScoringResult(),
    )
    assert contributors[0].points == 7
    assert contributors[0].merged_pr_count == 0


def test_fallback_ignores_unmerged_pull_requests():
    contributors, _ = aggregate_contributors(
        repository_payload(),
        [contributor_payload("drafty", contributions=4)],
        _score(pull_payload("drafty", merged=False, labels=["level 3"])),
    )
    assert contributors[0].points == 4


def test_bots_never_appear():
    contributors, stats = aggregate_contributors(
        repository_payload(),
        [
            contributor_payload("dependabot[bot]", contributions=500, type="Bot"),
            contributor_payload("ada", contributions=5),
        ],
        _score(*[pull_payload("dependabot[bot]", labels=["level 3"]) for _ in range(10)]),
    )

    assert [c.login for c in contributors] == ["ada"]
    assert stats.contributor_count == 1
    assert stats.total_commits == 5


def test_project_totals():
    contributors, stats = aggregate_contributors(
        repository_payload(),
        [contributor_payload("ada", 10), contributor_payload("grace", 5), contributor_payload("ci", 99, type="Bot")],
        _score(
            pull_payload("ada", labels=["level 1"]),
            pull_payload("grace"),
            pull_payload("outsider", labels=["level 2"]),
        ),
    )

    assert stats.contributor_count == 2
    assert stats.total_commits == 15
    # PR totals cover every merged PR that was scanned
    assert stats.total_prs == 3
    assert stats.total_points == 8


def test_sorted_by_points_with_stable_ties():
    contributors, _ = aggregate_contributors(
        repository_payload(),
        [
            contributor_payload("first", 3),
            contributor_payload("second", 9),
            contributor_payload("third", 3),
            contributor_payload("fourth", 12),
        ],
        ScoringResult(),
    )
    assert [c.login for c in contributors] == ["fourth", "second", "first", "third"]


def test_points_are_non_negative_integers():
    contributors, _ = aggregate_contributors(
        repository_payload(),
        [contributor_payload("a", 0), contributor_payload("b", 3)],
        _score(pull_payload("b", labels=["level 2"])),
    )
    for contributor in contributors:
        assert isinstance(contributor.points, int)
        assert contributor.points >= 0


@pytest.mark.parametrize("repository", [
    {"forks_count": 1},
    {"stargazers_count": "many", "forks_count": 1},
    ["not", "an", "object"],
    None,
])
def test_malformed_repository_summary(repository):
    with pytest.raises(DataShapeError):
        aggregate_contributors(repository, [contributor_payload("ada")], ScoringResult())


@pytest.mark.parametrize("contributors", [
    {"message": "API rate limit exceeded"},
    [{"login": "ada"}],
    [dict(contributor_payload("ada"), contributions=-1)],
    [dict(contributor_payload("ada"), id=True)],
])
def test_malformed_contributor_list(contributors):
    with pytest.raises(DataShapeError):
        aggregate_contributors(repository_payload(), contributors, ScoringResult())
