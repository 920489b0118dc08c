"""
Base service class for the contributor league bot.

Provides shared aiohttp session management for services that talk to
external HTTP APIs.
"""

import logging
from typing import Optional

import aiohttp

logger = logging.getLogger(__name__)

class BaseService:
    """Base class for services that share a single aiohttp session."""

    def __init__(self, http_session: Optional[aiohttp.ClientSession] = None):
        """
        Initialize base service with an optional shared session.

        Args:
            http_session: Session owned by the caller. When omitted the
                service opens its own on first use and closes it in close().
        """
        self._http_session = http_session
        self._owns_session = http_session is None

    async def get_http_session(self) -> aiohttp.ClientSession:
        """Return the shared session, opening one if this service owns it."""
        if self._http_session is None or self._http_session.closed:
            if not self._owns_session:
                raise RuntimeError("Shared HTTP session was closed by its owner")
            self._http_session = aiohttp.ClientSession()
            logger.debug(f"{type(self).__name__} opened its own HTTP session")
        return self._http_session

    async def close(self):
        """Close the session if this service opened it."""
        if not self._owns_session or self._http_session is None:
            return
        if not self._http_session.closed:
            await self._http_session.close()
        self._http_session = None
