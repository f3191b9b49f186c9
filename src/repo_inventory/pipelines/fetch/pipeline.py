"""Concurrent paginated fetch of provider repositories."""

import asyncio
from collections.abc import AsyncIterator, Sequence
from typing import Protocol

import structlog
from pydantic import BaseModel, ConfigDict, Field

from repo_inventory.bitbucketcloud.models import BitbucketRepo, PageToken
from repo_inventory.core.exceptions import AggregatedError, PageFetchError
from repo_inventory.pipelines.fetch.exclusion import ExclusionFilter

logger = structlog.get_logger(__name__)

DEFAULT_PAGE_SIZE = 100

# Only git repositories can be listed; Mercurial ones are discarded
SUPPORTED_SCM = "git"


class RemoteClient(Protocol):
    """Page-level contract of the remote API client."""

    async def first_page(
        self, query: str, token: PageToken
    ) -> tuple[list[BitbucketRepo], PageToken]: ...

    async def next_page(self, token: PageToken) -> tuple[list[BitbucketRepo], PageToken]: ...


class FetchBatch(BaseModel):
    """One page of repositories, or the error that ended a query stream."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    query: str
    repos: list[BitbucketRepo] = Field(default_factory=list)
    error: PageFetchError | None = None


class FetchResult(BaseModel):
    """Retained repositories and the errors collected while fetching them."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    repos: list[BitbucketRepo]
    error: AggregatedError | None = None

    @property
    def partial(self) -> bool:
        return self.error is not None


class FetchPipeline:
    """Fetches repositories for a set of queries concurrently.

    Runs one worker task per query. Each worker walks its page token to
    exhaustion and puts one batch per page on a shared queue; a coordinator
    closes the queue once every worker has returned. The consumer of the
    queue is the only place where state is kept:

    1. Errors are collected, they never stop sibling workers
    2. Non-git repositories are discarded
    3. Repositories already seen in this run are discarded
    4. Excluded repositories are discarded
    """

    def __init__(
        self,
        client: RemoteClient,
        queries: Sequence[str] | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        exclusion: ExclusionFilter | None = None,
        scm: str = SUPPORTED_SCM,
    ) -> None:
        self._client = client
        self._queries = list(queries) if queries is not None else [""]
        self._page_size = page_size
        self._exclusion = exclusion if exclusion is not None else ExclusionFilter()
        self._scm = scm

    @property
    def queries(self) -> list[str]:
        return list(self._queries)

    async def _walk(self, query: str, queue: "asyncio.Queue[FetchBatch | None]") -> None:
        """Walk every page of one query, emitting a batch per page."""
        token = PageToken(pagelen=self._page_size)
        try:
            repos, token = await self._client.first_page(query, token)
        except Exception as e:
            await self._fail(queue, query, token, e)
            return
        await self._emit(queue, query, repos, token)

        while token.has_more():
            try:
                repos, token = await self._client.next_page(token)
            except Exception as e:
                await self._fail(queue, query, token, e)
                return
            await self._emit(queue, query, repos, token)

    @staticmethod
    async def _emit(
        queue: "asyncio.Queue[FetchBatch | None]",
        query: str,
        repos: list[BitbucketRepo],
        token: PageToken,
    ) -> None:
        logger.debug("Page received", query=query, page=token.page, count=len(repos))
        if repos:
            await queue.put(FetchBatch(query=query, repos=repos))

    @staticmethod
    async def _fail(
        queue: "asyncio.Queue[FetchBatch | None]",
        query: str,
        token: PageToken | None,
        cause: BaseException,
    ) -> None:
        logger.warning("Page fetch failed", query=query, page=repr(token), error=str(cause))
        await queue.put(FetchBatch(query=query, error=PageFetchError(query, token, cause)))

    async def batches(self) -> AsyncIterator[FetchBatch]:
        """Yield batches from all query streams as they arrive.

        Batches of one query keep page order; batches of different queries
        interleave in arrival order.
        """
        queue: asyncio.Queue[FetchBatch | None] = asyncio.Queue(maxsize=max(1, len(self._queries)))
        workers = [
            asyncio.create_task(self._walk(query, queue), name=f"fetch-query-{i}")
            for i, query in enumerate(self._queries)
        ]

        async def close_when_done() -> None:
            results = await asyncio.gather(*workers, return_exceptions=True)
            # A worker that was cancelled or crashed still ends its stream with an error
            for query, result in zip(self._queries, results):
                if isinstance(result, BaseException):
                    await self._fail(queue, query, None, result)
            await queue.put(None)

        coordinator = asyncio.create_task(close_when_done(), name="fetch-coordinator")
        try:
            while (batch := await queue.get()) is not None:
                yield batch
        finally:
            for task in (*workers, coordinator):
                task.cancel()
            await asyncio.gather(*workers, coordinator, return_exceptions=True)

    async def run(self) -> FetchResult:
        """Fetch, deduplicate and filter repositories for every query."""
        seen: set[str] = set()
        errors: list[Exception] = []
        repos: list[BitbucketRepo] = []
        skipped_scm = excluded = 0

        async for batch in self.batches():
            if batch.error is not None:
                errors.append(batch.error)
                continue

            for repo in batch.repos:
                if repo.scm != self._scm:
                    skipped_scm += 1
                    continue
                if repo.uuid in seen:
                    continue
                seen.add(repo.uuid)

                if self._exclusion.should_exclude(repo):
                    excluded += 1
                    continue
                repos.append(repo)

        logger.info(
            "Fetch complete",
            queries=len(self._queries),
            repos=len(repos),
            excluded=excluded,
            skipped_scm=skipped_scm,
            errors=len(errors),
        )
        return FetchResult(repos=repos, error=AggregatedError.from_errors(errors))
