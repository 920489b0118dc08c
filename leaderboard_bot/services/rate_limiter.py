"""
Rate limiting for commands that reach the GitHub API.

Simple in-memory sliding window per user and command.
"""

import math
import time
import asyncio
from functools import wraps
from collections import defaultdict, deque
import logging

logger = logging.getLogger(__name__)

class SimpleRateLimiter:
    """In-memory rate limiter for Discord commands.

    History lives in memory per user:command pair and is pruned lazily
    on each check.
    """

    def __init__(self, clock=time.monotonic):
        self._requests = defaultdict(deque)
        self._lock = asyncio.Lock()
        self._clock = clock

    async def is_allowed(self, user_id: int, command: str, limit: int, window: int) -> bool:
        """Record the call and report whether it fits in the window."""
        if limit <= 0 or window <= 0:
            return False

        key = f"{user_id}:{command}"
        now = self._clock()

        async with self._lock:
            history = self._requests[key]
            while history and history[0] <= now - window:
                history.popleft()

            if len(history) < limit:
                history.append(now)
                return True

            logger.debug(f"Rate limit hit for {key}")
            return False

    def retry_after(self, user_id: int, command: str, window: int) -> float:
        """Seconds until the oldest call in the window expires; 0 when none is recorded."""
        history = self._requests.get(f"{user_id}:{command}")
        if not history:
            return 0.0
        return max(0.0, history[0] + window - self._clock())

def rate_limit(command: str, limit: int = 1, window: int = 60):
    """Decorator for rate limiting Discord commands."""
    def decorator(func):
        @wraps(func)
        async def wrapper(self, interaction, *args, **kwargs):
            rate_limiter = self.bot.rate_limiter

            # Bot owner bypasses rate limits
            from leaderboard_bot.config import Config
            if interaction.user.id == Config.OWNER_DISCORD_ID:
                return await func(self, interaction, *args, **kwargs)

            if not await rate_limiter.is_allowed(interaction.user.id, command, limit, window):
                wait = math.ceil(rate_limiter.retry_after(interaction.user.id, command, window))
                await interaction.response.send_message(
                    f"⏰ Rate limit exceeded. `/{command}` calls GitHub; try again in {wait}s.",
                    ephemeral=True
                )
                return

            return await func(self, interaction, *args, **kwargs)
        return wrapper
    return decorator
