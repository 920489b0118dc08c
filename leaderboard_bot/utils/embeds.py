"""
Shared embed builders for the contributor league bot.

Keeps the leaderboard page, stats panel, detail card and activity feed
formatted the same way in cogs and views.
"""

from typing import Sequence
from urllib.parse import quote

import discord

from leaderboard_bot.constants import UIConstants
from leaderboard_bot.data_models.github import CommitActivity
from leaderboard_bot.data_models.leaderboard import (
    LeaderboardEntry, LeaderboardPage, ProjectStats, SortMode, TierFilter
)
from leaderboard_bot.utils.league import get_league

SORT_LABELS = {
    SortMode.POINTS: "Points",
    SortMode.ALPHABETICAL: "Alphabetical",
    SortMode.RECENT: "Most Commits",
}

TIER_LABELS = {
    TierFilter.ALL: "All Contributors",
    TierFilter.GOLD: "Gold League",
    TierFilter.SILVER: "Silver League",
    TierFilter.BRONZE: "Bronze League",
    TierFilter.NEW: "New Contributors",
    TierFilter.TOP10: "Top 10",
}


def pull_requests_url(repo_slug: str, login: str) -> str:
    """Search URL for a user's pull requests in the tracked repository."""
    query = quote(f"is:pr author:{login}", safe=":")
    return f"https://github.com/{repo_slug}/pulls?q={query}"


def _table(entries: Sequence[LeaderboardEntry]) -> str:
    lines = ["```"]
    lines.append(f"{'#':<4} {'Contributor':<20} {'Pts':<6} {'PRs':<5} {'League':<8}")
    lines.append("-" * 46)
    for entry in entries:
        c = entry.contributor
        league = get_league(c.points)
        lines.append(
            f"{entry.rank:<4} {c.login[:18]:<20} {c.points:<6} "
            f"{c.merged_pr_count:<5} {league.name[:8]:<8}"
        )
    lines.append("```")
    return "\n".join(lines)


def build_leaderboard_embed(page: LeaderboardPage, repo_slug: str) -> discord.Embed:
    """Build formatted leaderboard page embed."""
    query = page.query
    description = (
        f"Sorted by: **{SORT_LABELS[query.sort_mode]}** | "
        f"Showing: **{TIER_LABELS[query.tier_filter]}**"
    )
    if query.search:
        description += f"\nSearch: `{query.search}`"

    embed = discord.Embed(
        title=f"{UIConstants.TROPHY_EMOJI} {repo_slug} Contributors",
        description=description,
        color=discord.Color.gold()
    )

    if not page.entries:
        embed.description += "\n\nNo contributors match your search."
    else:
        embed.description += "\n" + _table(page.entries)

    embed.set_footer(
        text=f"Page {page.current_page}/{page.total_pages} | Contributors: {page.total_items}"
    )
    return embed


def build_top_embed(entries: Sequence[LeaderboardEntry], repo_slug: str) -> discord.Embed:
    embed = discord.Embed(
        title=f"{UIConstants.TROPHY_EMOJI} Top {len(entries)} Contributors - {repo_slug}",
        color=discord.Color.gold()
    )
    embed.description = _table(entries) if entries else "No contributors yet."
    return embed


def build_stats_embed(stats: ProjectStats, repo_slug: str) -> discord.Embed:
    """Build the project-wide stats panel."""
    embed = discord.Embed(
        title=f"📊 {repo_slug} Project Stats",
        color=UIConstants.DEFAULT_EMBED_COLOR
    )
    embed.add_field(name="Contributors", value=f"{stats.contributor_count:,}", inline=True)
    embed.add_field(name="Commits", value=f"{stats.total_commits:,}", inline=True)
    embed.add_field(name="Merged PRs", value=f"{stats.total_prs:,}", inline=True)
    embed.add_field(name="Points Awarded", value=f"{stats.total_points:,}", inline=True)
    embed.add_field(name="Stars", value=f"{stats.star_count:,}", inline=True)
    embed.add_field(name="Forks", value=f"{stats.fork_count:,}", inline=True)
    return embed


def build_contributor_embed(entry: LeaderboardEntry, repo_slug: str) -> discord.Embed:
    """
    Build the detail card for one contributor.

    Args:
        entry: Contributor with its rank in the current view
        repo_slug: owner/name of the tracked repository

    Returns:
        Embed with rank, points, league, commits and a link to the
        contributor's pull requests
    """
    c = entry.contributor
    league = get_league(c.points)

    embed = discord.Embed(
        title=c.login,
        url=c.profile_url,
        color=league.color
    )
    embed.set_thumbnail(url=c.avatar_url)

    embed.add_field(name="Rank", value=f"#{entry.rank}", inline=True)
    embed.add_field(name="Points", value=f"{c.points:,}", inline=True)
    embed.add_field(name="League", value=league.label, inline=True)
    embed.add_field(name=f"{UIConstants.COMMIT_EMOJI} Commits", value=f"{c.commit_count:,}", inline=True)
    embed.add_field(name=f"{UIConstants.PR_EMOJI} Merged PRs", value=f"{c.merged_pr_count:,}", inline=True)
    embed.add_field(
        name="Links",
        value=f"[GitHub Profile]({c.profile_url}) | [Pull Requests]({pull_requests_url(repo_slug, c.login)})",
        inline=False
    )
    return embed


def build_activity_embed(activity: Sequence[CommitActivity], repo_slug: str) -> discord.Embed:
    """Build the recent commits feed."""
    embed = discord.Embed(
        title=f"🕒 Recent Activity - {repo_slug}",
        color=UIConstants.DEFAULT_EMBED_COLOR
    )
    if not activity:
        embed.description = "No recent activity available."
        return embed

    for commit in activity:
        date = (commit.committed_at or "")[:10] or "unknown date"
        embed.add_field(
            name=f"{commit.author_name} pushed code",
            value=f"\"{commit.message_headline[:200]}\"\n{date}",
            inline=False
        )
    return embed
