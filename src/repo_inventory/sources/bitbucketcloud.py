"""Bitbucket Cloud repository source."""

import json5
import structlog
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from repo_inventory.bitbucketcloud.client import BitbucketCloudClient
from repo_inventory.core.exceptions import AggregatedError, ConfigurationError
from repo_inventory.core.models.connection import BitbucketCloudConnection
from repo_inventory.core.models.repository import ExternalService, Repo
from repo_inventory.pipelines.fetch.exclusion import ExclusionFilter
from repo_inventory.pipelines.fetch.mapper import RepoMapper
from repo_inventory.pipelines.fetch.pipeline import (
    DEFAULT_PAGE_SIZE,
    FetchPipeline,
    RemoteClient,
)
from repo_inventory.utils.urls import normalize_base_url

logger = structlog.get_logger(__name__)


class ListReposResult(BaseModel):
    """Repositories listed from a source.

    A result can carry an error next to a non-empty list of repositories:
    that is a partial success, and the repositories are still valid.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    repos: list[Repo] = Field(default_factory=list)
    error: AggregatedError | None = None

    @property
    def partial(self) -> bool:
        return self.error is not None

    def raise_for_errors(self) -> None:
        if self.error is not None:
            raise self.error


class BitbucketCloudSource:
    """Yields repositories from a single Bitbucket Cloud connection.

    Everything that can be wrong with the configuration is checked here, so
    listing never fails on a bad host URL or exclusion pattern.
    """

    def __init__(
        self,
        svc: ExternalService,
        connection: BitbucketCloudConnection,
        client: RemoteClient | None = None,
        queries: list[str] | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        request_timeout: float | None = 60.0,
        idle_conn_timeout: float = 30.0,
    ) -> None:
        self._svc = svc
        self._connection = connection
        self._queries = list(queries) if queries else list(connection.repository_queries)
        self._page_size = page_size

        if page_size < 1:
            raise ConfigurationError(
                f"Invalid page size {page_size}, must be a positive integer",
                details={"external_service_id": svc.id, "page_size": page_size},
            )

        try:
            host = normalize_base_url(connection.url)
        except ValueError as e:
            raise ConfigurationError(
                f"Malformed Bitbucket Cloud config, invalid URL: {connection.url!r}, error: {e}",
                details={"external_service_id": svc.id, "url": connection.url},
            ) from e

        self._exclusion = ExclusionFilter(connection.exclude)
        self._mapper = RepoMapper(connection, host, svc.urn)

        self._owns_client = client is None
        if client is None:
            try:
                client = BitbucketCloudClient(
                    api_url=connection.api_url,
                    username=connection.username,
                    app_password=connection.app_password,
                    timeout=request_timeout,
                    idle_conn_timeout=idle_conn_timeout,
                )
            except Exception as e:
                raise ConfigurationError(
                    f"Failed to create Bitbucket Cloud client: {e}",
                    details={"external_service_id": svc.id},
                ) from e
        self._client = client

    @classmethod
    def from_external_service(cls, svc: ExternalService, **kwargs) -> "BitbucketCloudSource":
        """Create a source from the configuration held by ``svc``.

        The configuration is JSON with comments and trailing commas allowed.
        """
        try:
            connection = BitbucketCloudConnection.model_validate(json5.loads(svc.config))
        except (ValueError, ValidationError) as e:
            raise ConfigurationError(
                f"external service id={svc.id} config error: {e}",
                details={"external_service_id": svc.id},
            ) from e
        return cls(svc, connection, **kwargs)

    @property
    def connection(self) -> BitbucketCloudConnection:
        return self._connection

    def external_services(self) -> list[ExternalService]:
        return [self._svc]

    def pipeline(self) -> FetchPipeline:
        return FetchPipeline(
            self._client,
            queries=self._queries,
            page_size=self._page_size,
            exclusion=self._exclusion,
        )

    async def list_repos(self) -> ListReposResult:
        """List every repository reachable from this connection."""
        logger.debug("Listing repositories", external_service=self._svc.urn, queries=len(self._queries))
        fetched = await self.pipeline().run()
        repos = [self._mapper.map(repo) for repo in fetched.repos]
        return ListReposResult(repos=repos, error=fetched.error)

    async def aclose(self) -> None:
        if self._owns_client and isinstance(self._client, BitbucketCloudClient):
            await self._client.aclose()

    async def __aenter__(self) -> "BitbucketCloudSource":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
