"""Core domain models and interfaces for repo-inventory."""

from repo_inventory.core.exceptions import (
    AggregatedError,
    BitbucketCloudAPIError,
    ConfigurationError,
    PageFetchError,
    RepoInventoryError,
)
from repo_inventory.core.models import (
    BitbucketCloudConnection,
    ExclusionRule,
    ExternalRepoSpec,
    ExternalService,
    GitURLType,
    Repo,
    SourceInfo,
)

__all__ = [
    # Models
    "BitbucketCloudConnection",
    "ExclusionRule",
    "GitURLType",
    "ExternalService",
    "ExternalRepoSpec",
    "Repo",
    "SourceInfo",
    # Exceptions
    "RepoInventoryError",
    "ConfigurationError",
    "BitbucketCloudAPIError",
    "PageFetchError",
    "AggregatedError",
]
