"""
Constants for the contributor league bot.

Point weights, league thresholds and display values used by the scoring
pipeline and the Discord presentation layer.
"""

class PointConstants:
    """Point weights for merged pull requests."""

    # Label substrings, checked in this order per label
    LEVEL_3_LABEL = "level 3"
    LEVEL_2_LABEL = "level 2"
    LEVEL_1_LABEL = "level 1"

    LEVEL_3 = 11
    LEVEL_2 = 5
    LEVEL_1 = 2
    DEFAULT = 1  # Merged PR with no level label
    COMMIT = 1   # Fallback point per commit when no PR points were earned

class LeagueConstants:
    """Point thresholds for each league tier (inclusive lower bounds)."""

    GOLD_THRESHOLD = 120
    SILVER_THRESHOLD = 60
    BRONZE_THRESHOLD = 30

    # Contributors with fewer commits than this count as "new"
    NEW_CONTRIBUTOR_MAX_COMMITS = 5

class PaginationConstants:
    """Constants for paginated displays."""

    # Fixed page size for the contributor grid
    DEFAULT_PAGE_SIZE = 12

    # Size of the "top" mode
    TOP_COUNT = 10

    # GitHub REST page size for list endpoints
    GITHUB_PER_PAGE = 100

    # Commits shown in the recent activity feed
    RECENT_ACTIVITY_COUNT = 5

class UIConstants:
    """Constants for Discord UI elements."""

    # Embed colors
    DEFAULT_EMBED_COLOR = 0x3498db  # Blue
    GOLD_COLOR = 0xffd700
    SILVER_COLOR = 0xc0c0c0
    BRONZE_COLOR = 0xcd7f32
    ERROR_COLOR = 0xe74c3c

    TROPHY_EMOJI = "🏆"
    PR_EMOJI = "🔀"
    COMMIT_EMOJI = "📝"

    # Views expire after this many seconds
    VIEW_TIMEOUT = 900
