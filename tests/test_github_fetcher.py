"""
Tests for the GitHub fetcher against an in-process aiohttp server.
"""

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer as AiohttpServer

from conftest import contributor_payload, pull_payload, repository_payload

from leaderboard_bot.services.github_fetcher import GitHubFetcher
from leaderboard_bot.utils.leaderboard_exceptions import DataShapeError, NetworkError

REPO = "/repos/octo/widgets"


class FakeGitHub:
    """Serves canned responses keyed by (path, page query parameter)."""

    def __init__(self):
        self.responses = {}
        self.requests = []

    def add(self, path, body, status=200, page=None, raw=False):
        self.responses[(path, page)] = (status, body, raw)

    async def handle(self, request: web.Request) -> web.Response:
        self.requests.append(request)
        page = request.query.get("page")
        key = (request.path, page) if (request.path, page) in self.responses else (request.path, None)
        if key not in self.responses:
            return web.json_response({"message": "Not Found"}, status=404)
        status, body, raw = self.responses[key]
        if raw and isinstance(body, bytes):
            return web.Response(body=body, status=status, content_type="application/json")
        if raw:
            return web.Response(text=body, status=status)
        return web.json_response(body, status=status)

    def pages_requested(self):
        return [r.query.get("page") for r in self.requests if r.path == f"{REPO}/pulls"]


@pytest_asyncio.fixture
async def github():
    fake = FakeGitHub()
    app = web.Application()
    app.router.add_route("GET", "/{tail:.*}", fake.handle)
    server = AiohttpServer(app)
    await server.start_server()
    fake.base_url = str(server.make_url(""))
    yield fake
    await server.close()


@pytest_asyncio.fixture
async def make_fetcher(github):
    fetchers = []

    def factory(**kwargs):
        fetcher = GitHubFetcher("octo", "widgets", api_base=github.base_url, timeout=5, **kwargs)
        fetchers.append(fetcher)
        return fetcher

    yield factory
    for fetcher in fetchers:
        await fetcher.close()


def _serve_required(github):
    github.add(REPO, repository_payload(stars=10, forks=2))
    github.add(f"{REPO}/contributors", [contributor_payload("ada", 5), contributor_payload("grace", 3)])


async def test_fetch_all(github, make_fetcher):
    _serve_required(github)
    github.add(f"{REPO}/pulls", [pull_payload("ada", labels=["level 3"]), pull_payload("grace", merged=False)], page="1")
    github.add(f"{REPO}/pulls", [], page="2")
    github.add(f"{REPO}/commits", [
        {"commit": {"message": "Fix menu\n\nlong body", "author": {"name": "Ada", "date": "2024-05-01T10:00:00Z"}}},
    ])

    data = await make_fetcher().fetch_all()

    assert data.repository["stargazers_count"] == 10
    assert [c["login"] for c in data.contributors] == ["ada", "grace"]
    assert [pr.author_login for pr in data.pull_requests] == ["ada", "grace"]
    assert data.pull_requests[0].labels == frozenset({"level 3"})
    assert data.recent_activity[0].message_headline == "Fix menu"
    assert data.recent_activity[0].author_name == "Ada"
    # Empty page ends the scan
    assert github.pages_requested() == ["1", "2"]


async def test_pull_request_scan_is_bounded(github, make_fetcher):
    _serve_required(github)
    github.add(f"{REPO}/pulls", [pull_payload("ada")])

    pulls = await make_fetcher(pr_page_limit=3).fetch_pull_requests()

    assert len(pulls) == 3
    assert github.pages_requested() == ["1", "2", "3"]


async def test_failed_pull_request_page_keeps_earlier_pages(github, make_fetcher):
    _serve_required(github)
    github.add(f"{REPO}/pulls", [pull_payload("ada"), pull_payload("grace")], page="1")
    github.add(f"{REPO}/pulls", {"message": "Bad Gateway"}, status=502, page="2")
    github.add(f"{REPO}/pulls", [pull_payload("linus")], page="3")

    data = await make_fetcher().fetch_all()

    assert [pr.author_login for pr in data.pull_requests] == ["ada", "grace"]
    assert github.pages_requested() == ["1", "2"]


async def test_pull_request_failure_on_first_page_is_not_fatal(github, make_fetcher):
    _serve_required(github)
    github.add(f"{REPO}/pulls", {"message": "API rate limit exceeded"}, status=403)

    data = await make_fetcher().fetch_all()

    assert data.pull_requests == []
    assert len(data.contributors) == 2


async def test_contributor_failure_fails_the_load(github, make_fetcher):
    github.add(REPO, repository_payload())
    github.add(f"{REPO}/contributors", {"message": "boom"}, status=500)

    with pytest.raises(NetworkError) as excinfo:
        await make_fetcher().fetch_all()

    assert excinfo.value.resources == ("contributor list",)
    assert "HTTP 500" in str(excinfo.value)
    assert github.pages_requested() == []


async def test_both_required_failures_become_one_error(github, make_fetcher):
    github.add(REPO, {"message": "API rate limit exceeded"}, status=403)
    github.add(f"{REPO}/contributors", {"message": "API rate limit exceeded"}, status=403)

    with pytest.raises(NetworkError) as excinfo:
        await make_fetcher().fetch_required()

    assert set(excinfo.value.resources) == {"repository summary", "contributor list"}


async def test_invalid_json_is_a_data_shape_error(github, make_fetcher):
    github.add(REPO, "<html>oops</html>", raw=True)
    github.add(f"{REPO}/contributors", [])

    with pytest.raises(DataShapeError):
        await make_fetcher().fetch_required()


async def test_undecodable_body_is_a_data_shape_error(github, make_fetcher):
    github.add(REPO, repository_payload())
    github.add(f"{REPO}/contributors", b'[{"login": "\xff\xfe"}]', raw=True)

    with pytest.raises(DataShapeError) as excinfo:
        await make_fetcher().fetch_required()

    assert excinfo.value.resource == "contributor list"


async def test_undecodable_pull_request_page_is_not_fatal(github, make_fetcher):
    _serve_required(github)
    github.add(f"{REPO}/pulls", b'[{"user": {"login": "\xff\xfe"}}]', raw=True)

    data = await make_fetcher().fetch_all()

    assert data.pull_requests == []
    assert len(data.contributors) == 2


async def test_unreachable_host_is_a_network_error():
    fetcher = GitHubFetcher("octo", "widgets", api_base="http://127.0.0.1:9", timeout=2)
    try:
        with pytest.raises(NetworkError):
            await fetcher.fetch_repository()
    finally:
        await fetcher.close()


async def test_token_is_sent_as_bearer(github, make_fetcher):
    _serve_required(github)

    await make_fetcher(token="s3cret").fetch_repository()

    assert github.requests[-1].headers["Authorization"] == "Bearer s3cret"
    assert github.requests[-1].headers["Accept"] == "application/vnd.github+json"


async def test_no_token_no_authorization_header(github, make_fetcher):
    _serve_required(github)

    await make_fetcher().fetch_repository()

    assert "Authorization" not in github.requests[-1].headers


async def test_recent_commit_failure_yields_empty_feed(github, make_fetcher):
    github.add(f"{REPO}/commits", {"message": "nope"}, status=500)

    assert await make_fetcher().fetch_recent_commits() == ()


async def test_malformed_commit_yields_empty_feed(github, make_fetcher):
    _serve_required(github)
    github.add(f"{REPO}/commits", [{"commit": {"message": "Fix menu", "author": "Ada"}}])

    data = await make_fetcher().fetch_all()

    assert data.recent_activity == ()
    assert len(data.contributors) == 2
