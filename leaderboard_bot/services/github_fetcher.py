"""
GitHub REST fetcher for the contributor leaderboard.

The repository summary and contributor list are required and fetched
concurrently; either failing fails the whole load with one NetworkError.
Pull requests are fetched page by page up to a fixed limit and are
best-effort: a failed or empty page ends the scan and keeps what was
already collected. Nothing is retried.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import aiohttp

from leaderboard_bot.config import Config
from leaderboard_bot.constants import PaginationConstants
from leaderboard_bot.data_models.github import CommitActivity, PullRequest
from leaderboard_bot.services.base import BaseService
from leaderboard_bot.utils.leaderboard_exceptions import (
    DataShapeError, LeaderboardException, NetworkError
)

logger = logging.getLogger(__name__)


@dataclass
class FetchedData:
    """Raw bodies of one load, before aggregation."""
    repository: Any
    contributors: Any
    pull_requests: List[PullRequest] = field(default_factory=list)
    recent_activity: Tuple[CommitActivity, ...] = ()


class GitHubFetcher(BaseService):
    """Fetches repository, contributor and pull request data for one repo."""

    def __init__(
        self,
        owner: str,
        repo: str,
        http_session: Optional[aiohttp.ClientSession] = None,
        token: Optional[str] = None,
        api_base: str = "https://api.github.com",
        timeout: int = 20,
        pr_page_limit: int = 3
    ):
        super().__init__(http_session)
        self.owner = owner
        self.repo = repo
        self.token = token
        self.api_base = api_base.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)
        self.pr_page_limit = pr_page_limit

    @classmethod
    def from_config(cls, http_session: Optional[aiohttp.ClientSession] = None) -> "GitHubFetcher":
        return cls(
            owner=Config.REPO_OWNER,
            repo=Config.REPO_NAME,
            http_session=http_session,
            token=Config.GITHUB_TOKEN,
            api_base=Config.GITHUB_API_BASE,
            timeout=Config.REQUEST_TIMEOUT,
            pr_page_limit=Config.PR_PAGE_LIMIT,
        )

    @property
    def repo_url(self) -> str:
        return f"{self.api_base}/repos/{self.owner}/{self.repo}"

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get_json(self, resource: str, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET a JSON body; non-2xx and transport failures raise NetworkError."""
        session = await self.get_http_session()
        try:
            async with session.get(url, params=params, headers=self._headers(), timeout=self.timeout) as resp:
                if not 200 <= resp.status < 300:
                    raise NetworkError([resource], f"HTTP {resp.status}")
                body = await resp.read()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise NetworkError([resource], str(e) or type(e).__name__) from e

        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise DataShapeError(resource, f"invalid JSON ({e.msg})") from e
        except UnicodeDecodeError as e:
            raise DataShapeError(resource, f"body is not valid UTF-8 ({e.reason})") from e

    async def fetch_repository(self) -> Any:
        return await self._get_json("repository summary", self.repo_url)

    async def fetch_contributors(self) -> Any:
        return await self._get_json(
            "contributor list",
            f"{self.repo_url}/contributors",
            params={"per_page": PaginationConstants.GITHUB_PER_PAGE},
        )

    async def fetch_required(self) -> Tuple[Any, Any]:
        """Fetch repository summary and contributors concurrently."""
        results = await asyncio.gather(
            self.fetch_repository(),
            self.fetch_contributors(),
            return_exceptions=True,
        )

        network_failures = [r for r in results if isinstance(r, NetworkError)]
        if network_failures:
            resources = [name for failure in network_failures for name in failure.resources]
            details = "; ".join(str(failure) for failure in network_failures)
            raise NetworkError(resources, details)

        for result in results:
            if isinstance(result, BaseException):
                raise result

        repository, contributors = results
        return repository, contributors

    async def fetch_pull_requests(self) -> List[PullRequest]:
        """Scan pull request pages until the limit, an empty page or a failure."""
        pull_requests: List[PullRequest] = []

        for page in range(1, self.pr_page_limit + 1):
            try:
                data = await self._get_json(
                    f"pull requests page {page}",
                    f"{self.repo_url}/pulls",
                    params={
                        "state": "all",
                        "per_page": PaginationConstants.GITHUB_PER_PAGE,
                        "page": page,
                    },
                )
            except LeaderboardException as e:
                logger.warning(f"Stopping pull request scan at page {page}: {e}")
                break

            if not isinstance(data, list):
                logger.warning(f"Stopping pull request scan at page {page}: body is not a list")
                break
            if not data:
                break

            for item in data:
                try:
                    pull_requests.append(PullRequest.from_api(item))
                except DataShapeError as e:
                    logger.warning(f"Skipping pull request on page {page}: {e}")

        logger.debug(f"Fetched {len(pull_requests)} pull requests for {self.owner}/{self.repo}")
        return pull_requests

    async def fetch_recent_commits(self, limit: int = PaginationConstants.RECENT_ACTIVITY_COUNT) -> Tuple[CommitActivity, ...]:
        """Latest commits for the activity feed. Failures yield an empty feed."""
        try:
            data = await self._get_json(
                "recent commits",
                f"{self.repo_url}/commits",
                params={"per_page": limit},
            )
            if not isinstance(data, list):
                raise DataShapeError("recent commits", "expected a list")
            return tuple(CommitActivity.from_api(item) for item in data[:limit])
        except LeaderboardException as e:
            logger.error(f"Recent activity unavailable: {e}")
            return ()

    async def fetch_all(self) -> FetchedData:
        """Required data first; pull requests and activity only after it succeeds."""
        repository, contributors = await self.fetch_required()
        pull_requests, recent_activity = await asyncio.gather(
            self.fetch_pull_requests(),
            self.fetch_recent_commits(),
        )
        return FetchedData(
            repository=repository,
            contributors=contributors,
            pull_requests=pull_requests,
            recent_activity=recent_activity,
        )
