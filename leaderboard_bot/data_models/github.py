"""
GitHub input records for the contributor leaderboard.

Immutable views over the REST API payloads the leaderboard consumes. Each
record validates the fields it needs and raises DataShapeError on anything
missing or of the wrong type.
"""

from dataclasses import dataclass
from typing import Any, FrozenSet, Optional

from leaderboard_bot.utils.leaderboard_exceptions import DataShapeError


def _require(payload: Any, key: str, expected: type, resource: str):
    if not isinstance(payload, dict):
        raise DataShapeError(resource, f"expected an object, got {type(payload).__name__}")
    if key not in payload:
        raise DataShapeError(resource, f"missing field '{key}'")
    value = payload[key]
    # bool is an int subclass; never accept it for counts or ids
    if isinstance(value, bool) and expected is not bool:
        raise DataShapeError(resource, f"field '{key}' must be {expected.__name__}")
    if not isinstance(value, expected):
        raise DataShapeError(resource, f"field '{key}' must be {expected.__name__}")
    return value


def _optional(payload: dict, key: str, expected: type, resource: str):
    """Like _require, but a missing or null field yields None."""
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, expected):
        raise DataShapeError(resource, f"field '{key}' must be {expected.__name__}")
    return value


def _require_count(payload: Any, key: str, resource: str) -> int:
    value = _require(payload, key, int, resource)
    if value < 0:
        raise DataShapeError(resource, f"field '{key}' must not be negative")
    return value


@dataclass(frozen=True)
class RepositorySummary:
    """Star and fork counts of the tracked repository."""
    star_count: int
    fork_count: int

    @classmethod
    def from_api(cls, payload: Any) -> "RepositorySummary":
        return cls(
            star_count=_require_count(payload, "stargazers_count", "repository summary"),
            fork_count=_require_count(payload, "forks_count", "repository summary"),
        )


@dataclass(frozen=True)
class ContributorRecord:
    """Single entry of the repository contributors endpoint."""
    login: str
    id: int
    avatar_url: str
    profile_url: str
    commit_count: int
    account_type: str

    @property
    def is_bot(self) -> bool:
        return self.account_type == "Bot"

    @classmethod
    def from_api(cls, payload: Any) -> "ContributorRecord":
        resource = "contributor record"
        return cls(
            login=_require(payload, "login", str, resource),
            id=_require(payload, "id", int, resource),
            avatar_url=_require(payload, "avatar_url", str, resource),
            profile_url=_require(payload, "html_url", str, resource),
            commit_count=_require_count(payload, "contributions", resource),
            account_type=_require(payload, "type", str, resource),
        )


@dataclass(frozen=True)
class PullRequest:
    """Pull request reduced to what scoring needs."""
    author_login: Optional[str]
    merged_at: Optional[str]
    labels: FrozenSet[str]

    @property
    def is_merged(self) -> bool:
        return bool(self.merged_at)

    @classmethod
    def from_api(cls, payload: Any) -> "PullRequest":
        resource = "pull request"
        if not isinstance(payload, dict):
            raise DataShapeError(resource, f"expected an object, got {type(payload).__name__}")

        # Deleted accounts come back with a null user
        user = payload.get("user")
        author_login = user.get("login") if isinstance(user, dict) else None

        labels = payload.get("labels") or []
        if not isinstance(labels, list):
            raise DataShapeError(resource, "field 'labels' must be list")
        names = frozenset(
            label["name"] for label in labels
            if isinstance(label, dict) and isinstance(label.get("name"), str)
        )

        return cls(
            author_login=author_login,
            merged_at=payload.get("merged_at"),
            labels=names,
        )


@dataclass(frozen=True)
class CommitActivity:
    """Recent commit shown in the activity feed."""
    author_name: str
    message_headline: str
    committed_at: Optional[str]

    @classmethod
    def from_api(cls, payload: Any) -> "CommitActivity":
        resource = "commit"
        commit = _require(payload, "commit", dict, resource)
        author = _optional(commit, "author", dict, resource) or {}
        message = _optional(commit, "message", str, resource) or ""
        return cls(
            author_name=_optional(author, "name", str, resource) or "unknown",
            message_headline=message.split("\n", 1)[0],
            committed_at=_optional(author, "date", str, resource),
        )
