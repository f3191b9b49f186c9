"""Inventory service."""

from pathlib import Path

import structlog

from repo_inventory.config.settings import Settings
from repo_inventory.core.exceptions import ConfigurationError
from repo_inventory.core.models.repository import ExternalService
from repo_inventory.sources.bitbucketcloud import BitbucketCloudSource, ListReposResult

logger = structlog.get_logger(__name__)


class InventoryService:
    """Service for listing the repositories of a connection."""

    def __init__(self, source: BitbucketCloudSource) -> None:
        self._source = source

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        config_path: str | None = None,
        service_id: int | None = None,
        queries: list[str] | None = None,
    ) -> "InventoryService":
        """Build the service for the connection described by ``settings``.

        ``config_path``, ``service_id`` and ``queries`` override the values
        found in settings and in the connection file.
        """
        path = config_path or settings.connection_config_path
        if not path:
            raise ConfigurationError("No connection configuration file configured")
        try:
            config = Path(path).expanduser().read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(
                f"Cannot read connection configuration: {e}",
                details={"path": str(path)},
            ) from e

        svc = ExternalService(
            id=service_id if service_id is not None else settings.external_service_id,
            display_name=settings.external_service_name,
            config=config,
        )
        source = BitbucketCloudSource.from_external_service(
            svc,
            queries=queries,
            page_size=settings.page_size,
            request_timeout=settings.request_timeout,
            idle_conn_timeout=settings.idle_conn_timeout,
        )
        return cls(source)

    @property
    def source(self) -> BitbucketCloudSource:
        return self._source

    async def list_repos(self) -> ListReposResult:
        """List repositories and log a summary of the run."""
        result = await self._source.list_repos()
        svc = self._source.external_services()[0]
        if result.error is not None:
            logger.warning(
                "Repositories listed with errors",
                external_service=svc.urn,
                repos=len(result.repos),
                errors=len(result.error),
            )
        else:
            logger.info("Repositories listed", external_service=svc.urn, repos=len(result.repos))
        return result

    async def close(self) -> None:
        await self._source.aclose()
