"""Pytest configuration and fixtures."""

import asyncio

import pytest

from factories import BitbucketCloudConnectionFactory, BitbucketRepoFactory, ExternalServiceFactory
from repo_inventory.bitbucketcloud.models import BitbucketRepo, PageToken
from repo_inventory.core.models.connection import BitbucketCloudConnection
from repo_inventory.core.models.repository import ExternalService

NEXT_URL = "https://api.bitbucket.example.com/2.0/repositories?page={page}"


class FakeClient:
    """Remote client serving scripted pages per query.

    ``pages`` maps a query to its list of pages; a page is either a list of
    repositories or an exception raised when that page is requested.
    """

    def __init__(self, pages: dict[str, list], delay: float = 0.0) -> None:
        self._pages = pages
        self._delay = delay
        self.requests: list[tuple[str, int]] = []

    async def _serve(self, query: str, index: int, pagelen: int):
        self.requests.append((query, index))
        if self._delay:
            await asyncio.sleep(self._delay)
        page = self._pages[query][index]
        if isinstance(page, BaseException):
            raise page
        has_next = index + 1 < len(self._pages[query])
        token = PageToken(
            pagelen=pagelen,
            page=index + 1,
            next=f"{NEXT_URL.format(page=index + 2)}&q={query}" if has_next else None,
        )
        return list(page), token

    async def first_page(self, query: str, token: PageToken):
        return await self._serve(query, 0, token.pagelen)

    async def next_page(self, token: PageToken):
        query = token.next.rsplit("&q=", 1)[1]
        return await self._serve(query, token.page, token.pagelen)


@pytest.fixture
def make_repo():
    """Build provider repositories with sensible defaults."""

    def _make(**kwargs) -> BitbucketRepo:
        return BitbucketRepoFactory(**kwargs)

    return _make


@pytest.fixture
def connection() -> BitbucketCloudConnection:
    """Create an HTTPS connection with credentials."""
    return BitbucketCloudConnectionFactory()


@pytest.fixture
def external_service() -> ExternalService:
    """Create the external service owning the connection."""
    return ExternalServiceFactory(id=7)


@pytest.fixture
def fake_client():
    """Return the scripted remote client class."""
    return FakeClient
