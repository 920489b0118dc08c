import os
from dotenv import load_dotenv

load_dotenv()

class Config:
    """Bot configuration settings"""

    # Discord settings
    DISCORD_TOKEN = os.getenv('DISCORD_TOKEN')
    DISCORD_GUILD_ID = int(os.getenv('DISCORD_GUILD_ID', 0))
    DISCORD_GUILD_IDS = os.getenv('DISCORD_GUILD_IDS', '')  # Comma-separated for multi-guild support
    OWNER_DISCORD_ID = int(os.getenv('OWNER_DISCORD_ID', 0))

    # Bot settings
    COMMAND_PREFIX = os.getenv('COMMAND_PREFIX', '!')
    DEBUG = os.getenv('DEBUG', 'False').lower() == 'true'
    LOG_DIR = os.getenv('LOG_DIR', 'logs')

    # GitHub settings
    GITHUB_TOKEN = os.getenv('GITHUB_TOKEN')
    GITHUB_API_BASE = os.getenv('GITHUB_API_BASE', 'https://api.github.com')
    REPO_OWNER = os.getenv('REPO_OWNER', 'janavipandole')
    REPO_NAME = os.getenv('REPO_NAME', 'Foodie')

    # Fetch settings
    REQUEST_TIMEOUT = int(os.getenv('REQUEST_TIMEOUT', 20))
    PR_PAGE_LIMIT = int(os.getenv('PR_PAGE_LIMIT', 3))  # 100 PRs per page

    # Snapshot older than this is reloaded on the next command
    CACHE_TTL_SECONDS = int(os.getenv('CACHE_TTL_SECONDS', 900))

    @classmethod
    def get_guild_ids(cls):
        """Get list of guild IDs for command syncing"""
        if cls.DISCORD_GUILD_IDS:
            # Multi-guild support: comma-separated IDs
            try:
                return [int(guild_id.strip()) for guild_id in cls.DISCORD_GUILD_IDS.split(',') if guild_id.strip()]
            except ValueError:
                raise ValueError("DISCORD_GUILD_IDS must be comma-separated integers")
        elif cls.DISCORD_GUILD_ID:
            return [cls.DISCORD_GUILD_ID]
        else:
            # Global sync
            return []

    @classmethod
    def repository_slug(cls) -> str:
        return f"{cls.REPO_OWNER}/{cls.REPO_NAME}"

    @classmethod
    def validate(cls):
        """Validate that required configuration is present"""
        if not cls.DISCORD_TOKEN:
            raise ValueError("DISCORD_TOKEN is required")
        if not cls.REPO_OWNER or not cls.REPO_NAME:
            raise ValueError("REPO_OWNER and REPO_NAME are required")
        if cls.PR_PAGE_LIMIT < 0:
            raise ValueError("PR_PAGE_LIMIT must not be negative")
