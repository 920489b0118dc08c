import discord
from discord import app_commands
from discord.ext import commands
from typing import Optional
from leaderboard_bot.config import Config
from leaderboard_bot.constants import PaginationConstants
from leaderboard_bot.data_models.leaderboard import QueryState, SortMode, TierFilter
from leaderboard_bot.services.leaderboard import LeaderboardSession
from leaderboard_bot.services.rate_limiter import rate_limit
from leaderboard_bot.utils.embeds import (
    build_activity_embed, build_contributor_embed, build_stats_embed, build_top_embed
)
from leaderboard_bot.utils.error_embeds import ErrorEmbeds
from leaderboard_bot.utils.leaderboard_exceptions import LeaderboardException
from leaderboard_bot.views.leaderboard import LeaderboardView
import logging

logger = logging.getLogger(__name__)

SORT_CHOICES = [
    app_commands.Choice(name="Points", value=SortMode.POINTS.value),
    app_commands.Choice(name="Alphabetical", value=SortMode.ALPHABETICAL.value),
    app_commands.Choice(name="Most Commits", value=SortMode.RECENT.value),
]

TIER_CHOICES = [
    app_commands.Choice(name="All", value=TierFilter.ALL.value),
    app_commands.Choice(name="Gold League", value=TierFilter.GOLD.value),
    app_commands.Choice(name="Silver League", value=TierFilter.SILVER.value),
    app_commands.Choice(name="Bronze League", value=TierFilter.BRONZE.value),
    app_commands.Choice(name="New Contributors", value=TierFilter.NEW.value),
    app_commands.Choice(name="Top 10", value=TierFilter.TOP10.value),
]

class LeaderboardCog(commands.Cog):
    """Contributor leaderboard commands"""

    def __init__(self, bot):
        self.bot = bot
        self.session: LeaderboardSession = bot.leaderboard_session
        self.repo_slug = Config.repository_slug()

    async def _ensure_loaded(self, interaction: discord.Interaction) -> bool:
        """Load or refresh the snapshot; report failures to the user."""
        try:
            await self.session.ensure_loaded(Config.CACHE_TTL_SECONDS)
            return True
        except LeaderboardException as e:
            await interaction.followup.send(embed=ErrorEmbeds.load_failed(e))
            return False

    @app_commands.command(name="leaderboard", description="View the contributor leaderboard")
    @app_commands.describe(
        search="Filter by GitHub login",
        sort="Sort order",
        tier="League filter"
    )
    @app_commands.choices(sort=SORT_CHOICES, tier=TIER_CHOICES)
    @rate_limit("leaderboard", limit=5, window=60)
    async def leaderboard(
        self,
        interaction: discord.Interaction,
        search: Optional[str] = None,
        sort: Optional[app_commands.Choice[str]] = None,
        tier: Optional[app_commands.Choice[str]] = None
    ):
        """Display the paginated contributor leaderboard."""
        await interaction.response.defer()
        if not await self._ensure_loaded(interaction):
            return

        state = QueryState()
        if search:
            state = state.with_search(search)
        if sort:
            state = state.with_sort(SortMode(sort.value))
        if tier:
            state = state.with_tier(TierFilter(tier.value))

        view = LeaderboardView(self.session, state, self.repo_slug)
        await interaction.followup.send(embed=view.build_embed(), view=view)

    @app_commands.command(name="contributor", description="View a contributor's league card")
    @app_commands.describe(login="GitHub login")
    async def contributor(self, interaction: discord.Interaction, login: str):
        """Display the detail card for one contributor."""
        await interaction.response.defer()
        if not await self._ensure_loaded(interaction):
            return

        entry = self.session.find(login)
        if entry is None:
            await interaction.followup.send(embed=ErrorEmbeds.contributor_not_found(login))
            return
        await interaction.followup.send(embed=build_contributor_embed(entry, self.repo_slug))

    @contributor.autocomplete('login')
    async def login_autocomplete(
        self,
        interaction: discord.Interaction,
        current: str,
    ) -> list[app_commands.Choice[str]]:
        """Suggest logins from the loaded snapshot only."""
        if not self.session.is_loaded:
            return []
        needle = current.lower()
        return [
            app_commands.Choice(name=c.login, value=c.login)
            for c in self.session.snapshot.contributors
            if needle in c.login.lower()
        ][:25]  # Discord limit

    @app_commands.command(name="top", description="View the top contributors by points")
    @app_commands.describe(count="How many contributors to show (1-25)")
    async def top(
        self,
        interaction: discord.Interaction,
        count: app_commands.Range[int, 1, 25] = PaginationConstants.TOP_COUNT
    ):
        await interaction.response.defer()
        if not await self._ensure_loaded(interaction):
            return
        await interaction.followup.send(embed=build_top_embed(self.session.top(count), self.repo_slug))

    @app_commands.command(name="project-stats", description="View project-wide contribution stats")
    async def project_stats(self, interaction: discord.Interaction):
        await interaction.response.defer()
        if not await self._ensure_loaded(interaction):
            return
        await interaction.followup.send(embed=build_stats_embed(self.session.stats, self.repo_slug))

    @app_commands.command(name="activity", description="View the latest commits")
    async def activity(self, interaction: discord.Interaction):
        await interaction.response.defer()
        if not await self._ensure_loaded(interaction):
            return
        await interaction.followup.send(
            embed=build_activity_embed(self.session.snapshot.recent_activity, self.repo_slug)
        )

    @app_commands.command(name="refresh", description="Reload contributor data from GitHub")
    @rate_limit("refresh", limit=1, window=300)
    async def refresh(self, interaction: discord.Interaction):
        """Force a full reload, replacing the current snapshot."""
        await interaction.response.defer(ephemeral=True)
        try:
            snapshot = await self.session.reload()
        except LeaderboardException as e:
            await interaction.followup.send(embed=ErrorEmbeds.load_failed(e), ephemeral=True)
            return

        if snapshot is None:
            await interaction.followup.send("A newer refresh is already in progress.", ephemeral=True)
            return
        await interaction.followup.send(
            f"✅ Reloaded {snapshot.stats.contributor_count} contributors.",
            ephemeral=True
        )

async def setup(bot):
    await bot.add_cog(LeaderboardCog(bot))
