"""Exception hierarchy for repo-inventory."""

from collections.abc import Iterator
from typing import Any


class RepoInventoryError(Exception):
    """Base exception for all repo-inventory errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(RepoInventoryError):
    """Invalid connection or application configuration.

    Raised while building a source, before any page is fetched.
    """


class BitbucketCloudAPIError(RepoInventoryError):
    """The Bitbucket Cloud API answered with an error or an unreadable body."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code
        self.url = url


class PageFetchError(RepoInventoryError):
    """A page request failed and terminated its query stream."""

    def __init__(self, query: str, page: Any, cause: BaseException) -> None:
        super().__init__(
            f"bitbucketcloud.repositoryQuery: item={query!r}, page={page!r}: {cause}",
            details={"query": query, "page": repr(page)},
        )
        self.query = query
        self.page = page
        self.cause = cause


class AggregatedError(RepoInventoryError):
    """Independent failure causes collected from concurrent streams.

    Holding one of these does not mean the whole operation failed; the
    results produced alongside it are still valid.
    """

    def __init__(self, errors: list[Exception]) -> None:
        self.errors = list(errors)
        super().__init__(self._format(self.errors), details={"count": len(self.errors)})

    @staticmethod
    def _format(errors: list[Exception]) -> str:
        if len(errors) == 1:
            return f"1 error occurred:\n\t* {errors[0]}"
        lines = "\n".join(f"\t* {err}" for err in errors)
        return f"{len(errors)} errors occurred:\n{lines}"

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self) -> Iterator[Exception]:
        return iter(self.errors)

    @classmethod
    def from_errors(cls, errors: list[Exception]) -> "AggregatedError | None":
        """Build an aggregated error, or None when there is nothing to report."""
        if not errors:
            return None
        return cls(errors)
