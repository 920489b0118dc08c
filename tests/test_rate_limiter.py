"""
Tests for the in-memory command rate limiter.
"""

from types import SimpleNamespace

from leaderboard_bot.services.rate_limiter import SimpleRateLimiter, rate_limit


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


async def test_allows_up_to_limit_within_window():
    limiter = SimpleRateLimiter(clock=FakeClock())
    results = [await limiter.is_allowed(1, "refresh", limit=2, window=60) for _ in range(3)]
    assert results == [True, True, False]


async def test_window_expires():
    clock = FakeClock()
    limiter = SimpleRateLimiter(clock=clock)

    assert await limiter.is_allowed(1, "refresh", limit=1, window=60)
    clock.now = 59
    assert not await limiter.is_allowed(1, "refresh", limit=1, window=60)
    clock.now = 61
    assert await limiter.is_allowed(1, "refresh", limit=1, window=60)


async def test_users_and_commands_are_independent():
    limiter = SimpleRateLimiter(clock=FakeClock())
    assert await limiter.is_allowed(1, "refresh", limit=1, window=60)
    assert await limiter.is_allowed(2, "refresh", limit=1, window=60)
    assert await limiter.is_allowed(1, "leaderboard", limit=1, window=60)


async def test_invalid_parameters_deny():
    limiter = SimpleRateLimiter()
    assert not await limiter.is_allowed(1, "refresh", limit=0, window=60)
    assert not await limiter.is_allowed(1, "refresh", limit=1, window=0)


async def test_retry_after_counts_down_to_window_end():
    clock = FakeClock()
    limiter = SimpleRateLimiter(clock=clock)

    assert limiter.retry_after(1, "refresh", window=300) == 0.0
    await limiter.is_allowed(1, "refresh", limit=1, window=300)
    clock.now = 120
    assert limiter.retry_after(1, "refresh", window=300) == 180


class FakeResponse:
    def __init__(self):
        self.messages = []

    async def send_message(self, content, ephemeral=False):
        self.messages.append(content)


class FakeCog:
    def __init__(self, clock):
        self.bot = SimpleNamespace(rate_limiter=SimpleRateLimiter(clock=clock))
        self.calls = 0

    @rate_limit("refresh", limit=1, window=300)
    async def refresh(self, interaction):
        self.calls += 1


async def test_decorator_blocks_and_reports_wait():
    clock = FakeClock()
    cog = FakeCog(clock)
    interaction = SimpleNamespace(user=SimpleNamespace(id=42), response=FakeResponse())

    await cog.refresh(interaction)
    clock.now = 100
    await cog.refresh(interaction)

    assert cog.calls == 1
    assert interaction.response.messages == [
        "⏰ Rate limit exceeded. `/refresh` calls GitHub; try again in 200s."
    ]
