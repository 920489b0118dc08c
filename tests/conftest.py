"""
Shared fixtures and payload builders for the contributor league tests.
"""

import pytest

from leaderboard_bot.data_models.leaderboard import Contributor


def contributor_payload(login, contributions=10, id=None, type="User"):
    """Contributor entry as the GitHub contributors endpoint returns it."""
    return {
        "login": login,
        "id": id if id is not None else abs(hash(login)) % 100000,
        "avatar_url": f"https://avatars.example/{login}.png",
        "html_url": f"https://github.com/{login}",
        "contributions": contributions,
        "type": type,
    }


def pull_payload(login, merged=True, labels=()):
    """Pull request entry as the GitHub pulls endpoint returns it."""
    return {
        "user": {"login": login} if login is not None else None,
        "merged_at": "2024-05-01T12:00:00Z" if merged else None,
        "labels": [{"name": name} for name in labels],
    }


def repository_payload(stars=42, forks=7):
    return {"stargazers_count": stars, "forks_count": forks}


def make_contributor(login, points=0, commits=10, prs=0, id=1):
    return Contributor(
        login=login,
        id=id,
        avatar_url=f"https://avatars.example/{login}.png",
        profile_url=f"https://github.com/{login}",
        commit_count=commits,
        merged_pr_count=prs,
        points=points,
    )


@pytest.fixture
def league_dataset():
    """Canonical dataset spanning every league, already sorted by points."""
    return (
        make_contributor("ada", points=150, commits=40, prs=12, id=1),
        make_contributor("Grace", points=120, commits=30, prs=10, id=2),
        make_contributor("linus", points=119, commits=60, prs=9, id=3),
        make_contributor("barbara", points=60, commits=3, prs=5, id=4),
        make_contributor("ken", points=59, commits=25, prs=4, id=5),
        make_contributor("dennis", points=30, commits=2, prs=3, id=6),
        make_contributor("margaret", points=29, commits=29, prs=0, id=7),
        make_contributor("alan", points=4, commits=4, prs=0, id=8),
        make_contributor("edsger", points=1, commits=50, prs=1, id=9),
    )
