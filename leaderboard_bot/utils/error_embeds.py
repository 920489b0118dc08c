"""
Centralized error embeds for the contributor league bot.

Every load failure reaches the user through one of these, so a failed
GitHub fetch always looks the same regardless of which command hit it.
"""

import discord

from leaderboard_bot.utils.leaderboard_exceptions import LeaderboardException


class ErrorEmbeds:
    """Centralized error embed factory for consistent error handling."""

    @staticmethod
    def load_failed(error: LeaderboardException) -> discord.Embed:
        """Create embed for a failed leaderboard load."""
        return discord.Embed(
            title="⚠️ Failed to Load Data",
            description=f"{error.user_message}\n\nUse `/refresh` to try again later.",
            color=discord.Color.red()
        )

    @staticmethod
    def contributor_not_found(login: str) -> discord.Embed:
        """Create embed for when a login is not on the leaderboard."""
        return discord.Embed(
            title="Contributor Not Found",
            description=f"No contributor named **{discord.utils.escape_markdown(login)}** is on the leaderboard.",
            color=discord.Color.orange()
        )

    @staticmethod
    def command_error(error: str) -> discord.Embed:
        """Create embed for general command errors."""
        return discord.Embed(
            title="Command Error",
            description=f"An error occurred: {error}\n\nPlease try again or contact an administrator.",
            color=discord.Color.red()
        )
