"""
Leaderboard view components for the contributor league.

Interactive Discord UI for browsing the contributor leaderboard. Every
interaction builds a new QueryState and asks the session for the page; the
view itself never filters or sorts.
"""

import logging

import discord
from discord.ui import View, Button, Select

from leaderboard_bot.constants import UIConstants
from leaderboard_bot.data_models.leaderboard import LeaderboardPage, QueryState, SortMode, TierFilter
from leaderboard_bot.services.leaderboard import LeaderboardSession
from leaderboard_bot.utils.embeds import (
    SORT_LABELS, TIER_LABELS, build_contributor_embed, build_leaderboard_embed
)
from leaderboard_bot.utils.error_embeds import ErrorEmbeds
from leaderboard_bot.utils.leaderboard_exceptions import LeaderboardException

logger = logging.getLogger(__name__)


class LeaderboardView(View):
    """Paginated, sortable, filterable leaderboard view."""

    def __init__(
        self,
        session: LeaderboardSession,
        state: QueryState,
        repo_slug: str,
        *,
        timeout: int = UIConstants.VIEW_TIMEOUT
    ):
        super().__init__(timeout=timeout)
        self.session = session
        self.state = state
        self.repo_slug = repo_slug
        self.page = session.query(state)

        self._update_items()

    def build_embed(self) -> discord.Embed:
        return build_leaderboard_embed(self.page, self.repo_slug)

    def _update_items(self):
        """Rebuild buttons and selects for the current page."""
        self.clear_items()

        prev_button = Button(
            label="Previous",
            style=discord.ButtonStyle.primary,
            disabled=not self.page.has_previous,
            custom_id="contributors:prev"
        )
        prev_button.callback = self.previous_page
        self.add_item(prev_button)

        page_indicator = Button(
            label=f"Page {self.page.current_page}/{self.page.total_pages}",
            style=discord.ButtonStyle.secondary,
            disabled=True
        )
        self.add_item(page_indicator)

        next_button = Button(
            label="Next",
            style=discord.ButtonStyle.primary,
            disabled=not self.page.has_next,
            custom_id="contributors:next"
        )
        next_button.callback = self.next_page
        self.add_item(next_button)

        self.add_item(SortSelect(self.state.sort_mode))
        self.add_item(TierSelect(self.state.tier_filter))
        if self.page.entries:
            self.add_item(ContributorSelect(self.page))

    async def previous_page(self, interaction: discord.Interaction):
        await interaction.response.defer()
        if self.page.has_previous:
            await self.show(interaction, self.state.with_page(self.page.current_page - 1))

    async def next_page(self, interaction: discord.Interaction):
        await interaction.response.defer()
        if self.page.has_next:
            await self.show(interaction, self.state.with_page(self.page.current_page + 1))

    async def show(self, interaction: discord.Interaction, state: QueryState):
        """Query the session for ``state`` and redraw the message."""
        try:
            self.state = state
            self.page = self.session.query(state)
            self._update_items()
            await interaction.followup.edit_message(
                message_id=interaction.message.id,
                embed=self.build_embed(),
                view=self
            )
        except LeaderboardException as e:
            await interaction.followup.send(embed=ErrorEmbeds.load_failed(e), ephemeral=True)
        except discord.HTTPException as e:
            logger.error(f"Error updating leaderboard message: {e}")
            await interaction.followup.send(embed=ErrorEmbeds.command_error(str(e)), ephemeral=True)

    async def on_timeout(self):
        for item in self.children:
            item.disabled = True
        logger.debug("LeaderboardView timed out")


class SortSelect(Select):
    """Dropdown for changing sort order."""

    DESCRIPTIONS = {
        SortMode.POINTS: "Highest point total first",
        SortMode.ALPHABETICAL: "By GitHub login",
        SortMode.RECENT: "Most commits first",
    }

    def __init__(self, current: SortMode):
        options = [
            discord.SelectOption(
                label=SORT_LABELS[mode],
                value=mode.value,
                description=self.DESCRIPTIONS[mode],
                default=mode == current
            )
            for mode in SortMode
        ]
        super().__init__(placeholder="Sort by...", options=options, custom_id="contributors:sort")

    async def callback(self, interaction: discord.Interaction):
        await interaction.response.defer()
        view: LeaderboardView = self.view
        await view.show(interaction, view.state.with_sort(SortMode(self.values[0])))


class TierSelect(Select):
    """Dropdown for filtering by league."""

    def __init__(self, current: TierFilter):
        options = [
            discord.SelectOption(
                label=TIER_LABELS[tier],
                value=tier.value,
                default=tier == current
            )
            for tier in TierFilter
        ]
        super().__init__(placeholder="Filter by league...", options=options, custom_id="contributors:tier")

    async def callback(self, interaction: discord.Interaction):
        await interaction.response.defer()
        view: LeaderboardView = self.view
        await view.show(interaction, view.state.with_tier(TierFilter(self.values[0])))


class ContributorSelect(Select):
    """Dropdown that opens the detail card for a contributor on this page."""

    def __init__(self, page: LeaderboardPage):
        options = [
            discord.SelectOption(
                label=f"#{entry.rank} {entry.contributor.login}"[:100],
                value=entry.contributor.login,
                description=f"{entry.contributor.points} points"
            )
            for entry in page.entries
        ]
        super().__init__(placeholder="View contributor...", options=options, custom_id="contributors:detail")

    async def callback(self, interaction: discord.Interaction):
        view: LeaderboardView = self.view
        login = self.values[0]
        try:
            entry = view.session.find(login, view.state)
        except LeaderboardException as e:
            await interaction.response.send_message(embed=ErrorEmbeds.load_failed(e), ephemeral=True)
            return

        if entry is None:
            await interaction.response.send_message(embed=ErrorEmbeds.contributor_not_found(login), ephemeral=True)
            return

        await interaction.response.send_message(
            embed=build_contributor_embed(entry, view.repo_slug),
            ephemeral=True
        )
