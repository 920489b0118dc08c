import asyncio
import logging
import traceback
from typing import Optional

import aiohttp
import discord
from discord.ext import commands
from discord import app_commands

from leaderboard_bot.config import Config
from leaderboard_bot.services.github_fetcher import GitHubFetcher
from leaderboard_bot.services.leaderboard import LeaderboardSession
from leaderboard_bot.services.rate_limiter import SimpleRateLimiter
from leaderboard_bot.utils.leaderboard_exceptions import LeaderboardException
from leaderboard_bot.utils.logger import setup_logger

class ContributorLeagueBot(commands.Bot):
    def __init__(self):
        intents = discord.Intents.default()
        intents.guilds = True

        super().__init__(
            command_prefix=Config.COMMAND_PREFIX,
            intents=intents,
            help_command=None
        )

        self.tree.on_error = self.on_app_command_error

        self.http_session: Optional[aiohttp.ClientSession] = None
        self.leaderboard_session: Optional[LeaderboardSession] = None
        self.rate_limiter = SimpleRateLimiter()
        setup_logger()
        self.logger = logging.getLogger(__name__)

    async def setup_hook(self):
        """Called when the bot is starting up"""
        self.logger.info(f"Setting up Contributor League Bot for {Config.repository_slug()}...")

        # One HTTP session shared by every load
        self.http_session = aiohttp.ClientSession()
        fetcher = GitHubFetcher.from_config(self.http_session)
        self.leaderboard_session = LeaderboardSession(fetcher)

        try:
            await self.leaderboard_session.reload()
        except LeaderboardException as e:
            # Commands retry the load on first use
            self.logger.warning(f"Initial leaderboard load failed: {e}")

        await self.load_extension('leaderboard_bot.cogs.leaderboard')
        self.logger.info("Loaded cog: leaderboard_bot.cogs.leaderboard")

        await self._sync_commands()
        self.logger.info("Contributor League Bot setup complete!")

    async def _sync_commands(self):
        """Sync slash commands with Discord"""
        if not self.tree.get_commands():
            self.logger.warning("No application commands found to sync. Check for cog loading errors.")
            return

        try:
            guild_ids = Config.get_guild_ids()

            if guild_ids:
                for guild_id in guild_ids:
                    guild = discord.Object(id=guild_id)
                    self.tree.copy_global_to(guild=guild)
                    try:
                        synced = await self.tree.sync(guild=guild)
                        self.logger.info(f"Synced {len(synced)} command(s) to guild {guild_id}")
                    except discord.errors.HTTPException as e:
                        self.logger.error(f"HTTP error syncing to guild {guild_id}. Status: {e.status}, Response: {e.text}")
            else:
                # Global sync (can take up to 1 hour, works everywhere)
                synced = await self.tree.sync()
                self.logger.info(f"Synced {len(synced)} command(s) globally")
        except discord.errors.HTTPException as e:
            self.logger.error(f"Failed to sync commands: {e}", exc_info=True)

    async def on_ready(self):
        """Called when the bot is ready"""
        self.logger.info(f'{self.user} has connected to Discord!')
        self.logger.info(f'Bot is in {len(self.guilds)} guilds')

        await self.change_presence(
            activity=discord.Game(name=f"{Config.repository_slug()} | /leaderboard")
        )

    async def on_app_command_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        """Global error handler for slash commands"""
        command_name = interaction.command.name if interaction.command else 'Unknown'
        self.logger.error(f"Error in app command '{command_name}': {error}", exc_info=True)

        original = getattr(error, 'original', None)
        if isinstance(original, LeaderboardException):
            description = original.user_message
        else:
            description = "An unexpected error occurred while processing your command."

        error_embed = discord.Embed(
            title="❌ Command Failed",
            description=description,
            color=discord.Color.red()
        )
        try:
            if interaction.response.is_done():
                await interaction.followup.send(embed=error_embed, ephemeral=True)
            else:
                await interaction.response.send_message(embed=error_embed, ephemeral=True)
        except discord.HTTPException as e:
            self.logger.error(f"Failed to send error response: {e}")

    async def close(self):
        """Cleanup when bot is shutting down"""
        self.logger.info("Shutting down Contributor League Bot...")

        if self.http_session and not self.http_session.closed:
            await self.http_session.close()

        await super().close()

async def main():
    """Main entry point"""
    Config.validate()

    bot = ContributorLeagueBot()

    try:
        await bot.start(Config.DISCORD_TOKEN)
    except KeyboardInterrupt:
        await bot.close()
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        traceback.print_exc()
    finally:
        await bot.close()

def run():
    asyncio.run(main())

if __name__ == "__main__":
    run()
