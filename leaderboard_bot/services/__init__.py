"""
Services package for the contributor league bot.

Fetching, scoring, aggregation and querying of the contributor leaderboard.
"""

from .base import BaseService
from .github_fetcher import GitHubFetcher
from .leaderboard import LeaderboardSession
from .rate_limiter import SimpleRateLimiter

__all__ = ['BaseService', 'GitHubFetcher', 'LeaderboardSession', 'SimpleRateLimiter']
