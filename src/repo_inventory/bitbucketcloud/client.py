"""Async client for the Bitbucket Cloud REST API 2.0."""

from typing import Any

import httpx
import structlog
from pydantic import ValidationError

from repo_inventory.bitbucketcloud.models import BitbucketRepo, PageToken, RepoPage
from repo_inventory.core.exceptions import BitbucketCloudAPIError

logger = structlog.get_logger(__name__)

DEFAULT_API_URL = "https://api.bitbucket.org"


class BitbucketCloudClient:
    """Issues authenticated page requests against Bitbucket Cloud.

    Authenticates with HTTP basic auth using a username and an app
    password. The underlying ``httpx.AsyncClient`` is created on demand
    unless one is passed in, in which case the caller owns it.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        username: str = "",
        app_password: str = "",
        http_client: httpx.AsyncClient | None = None,
        timeout: float | None = 60.0,
        idle_conn_timeout: float = 30.0,
    ) -> None:
        self._api_url = api_url.rstrip("/")
        self.username = username
        self.app_password = app_password
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=timeout,
            limits=httpx.Limits(keepalive_expiry=idle_conn_timeout),
            headers={"Accept": "application/json"},
        )

    @property
    def api_url(self) -> str:
        return self._api_url

    def _auth(self) -> httpx.BasicAuth | None:
        if not self.username and not self.app_password:
            return None
        return httpx.BasicAuth(self.username, self.app_password)

    async def _get_json(self, url: str, params: dict[str, str] | None = None) -> Any:
        """Send a GET request and decode its JSON body."""
        response = await self._http.get(url, params=params, auth=self._auth())
        if response.is_error:
            raise BitbucketCloudAPIError(
                f"Bitbucket Cloud API error: HTTP {response.status_code}",
                status_code=response.status_code,
                url=str(response.url),
                details={"body": response.text[:500]},
            )
        try:
            return response.json()
        except ValueError as e:
            raise BitbucketCloudAPIError(
                f"Bitbucket Cloud API returned invalid JSON: {e}",
                status_code=response.status_code,
                url=str(response.url),
            ) from e

    async def _get_page(
        self, url: str, pagelen: int, params: dict[str, str] | None = None
    ) -> tuple[list[BitbucketRepo], PageToken]:
        data = await self._get_json(url, params)
        try:
            page = RepoPage.model_validate(data)
            repos = page.repos()
        except ValidationError as e:
            raise BitbucketCloudAPIError(
                f"Unexpected Bitbucket Cloud page payload: {e}",
                url=url,
            ) from e

        logger.debug("Page fetched", url=url, page=page.page, count=len(repos))
        return repos, page.token(pagelen)

    async def repos(
        self, token: PageToken, query: str = ""
    ) -> tuple[list[BitbucketRepo], PageToken]:
        """Request the first page of repositories the user is a member of.

        ``query`` is a Bitbucket query language filter; an empty query lists
        every accessible repository.
        """
        params = {"role": "member", **token.values()}
        if query:
            params["q"] = query
        return await self._get_page(f"{self._api_url}/2.0/repositories", token.pagelen, params)

    async def req_page(self, token: PageToken) -> tuple[list[BitbucketRepo], PageToken]:
        """Follow the continuation link of ``token``."""
        if not token.has_more():
            raise ValueError("page token has no next page")
        return await self._get_page(token.next, token.pagelen)

    # Remote client contract used by the fetch pipeline
    async def first_page(
        self, query: str, token: PageToken
    ) -> tuple[list[BitbucketRepo], PageToken]:
        return await self.repos(token, query)

    async def next_page(self, token: PageToken) -> tuple[list[BitbucketRepo], PageToken]:
        return await self.req_page(token)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> "BitbucketCloudClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
