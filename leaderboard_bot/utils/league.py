"""
League tiers for contributor point totals.

The league is derived from points on demand and never stored on the
contributor record.
"""

from dataclasses import dataclass
from enum import Enum

from leaderboard_bot.constants import LeagueConstants, UIConstants


class LeagueTier(Enum):
    """Ordered from highest to lowest."""
    GOLD = "gold"
    SILVER = "silver"
    BRONZE = "bronze"
    UNRANKED = "unranked"


@dataclass(frozen=True)
class League:
    tier: LeagueTier
    name: str
    label: str
    color: int


GOLD_LEAGUE = League(LeagueTier.GOLD, "Gold", "🏆 Gold League", UIConstants.GOLD_COLOR)
SILVER_LEAGUE = League(LeagueTier.SILVER, "Silver", "🥈 Silver League", UIConstants.SILVER_COLOR)
BRONZE_LEAGUE = League(LeagueTier.BRONZE, "Bronze", "🥉 Bronze League", UIConstants.BRONZE_COLOR)
UNRANKED_LEAGUE = League(LeagueTier.UNRANKED, "Contributor", "Contributor", UIConstants.DEFAULT_EMBED_COLOR)


def get_league(points: int) -> League:
    """Map a point total to its league."""
    if points >= LeagueConstants.GOLD_THRESHOLD:
        return GOLD_LEAGUE
    if points >= LeagueConstants.SILVER_THRESHOLD:
        return SILVER_LEAGUE
    if points >= LeagueConstants.BRONZE_THRESHOLD:
        return BRONZE_LEAGUE
    return UNRANKED_LEAGUE
