"""
Custom exceptions for the contributor leaderboard with user-friendly error messages.
"""

from typing import Iterable


class LeaderboardException(Exception):
    """Base exception for leaderboard-related errors."""
    def __init__(self, message: str, user_message: str = None):
        super().__init__(message)
        self.user_message = user_message or message

class NetworkError(LeaderboardException):
    """Raised when a required GitHub fetch fails or returns a non-success status."""
    def __init__(self, resources: Iterable[str], details: str = None):
        self.resources = tuple(resources)
        names = ", ".join(self.resources)
        message = f"Failed to fetch {names}"
        if details:
            message += f": {details}"
        super().__init__(
            message,
            "❌ Failed to load data. The GitHub API limit may be exceeded."
        )

class DataShapeError(LeaderboardException):
    """Raised when a GitHub response body is missing required fields."""
    def __init__(self, resource: str, reason: str):
        self.resource = resource
        self.reason = reason
        super().__init__(
            f"Malformed {resource}: {reason}",
            "❌ GitHub returned data in an unexpected format."
        )

class LeaderboardNotLoadedError(LeaderboardException):
    """Raised when the leaderboard is queried before any load completed."""
    def __init__(self):
        super().__init__(
            "Leaderboard queried before a snapshot was loaded",
            "❌ The leaderboard is still loading. Please try again in a moment."
        )
