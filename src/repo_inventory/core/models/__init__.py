"""Domain models for repo-inventory."""

from repo_inventory.core.models.connection import (
    BitbucketCloudConnection,
    ExclusionRule,
    GitURLType,
)
from repo_inventory.core.models.repository import (
    ExternalRepoSpec,
    ExternalService,
    Repo,
    SourceInfo,
)

__all__ = [
    "BitbucketCloudConnection",
    "ExclusionRule",
    "GitURLType",
    "ExternalService",
    "ExternalRepoSpec",
    "Repo",
    "SourceInfo",
]
