"""Bitbucket Cloud API integration."""

from repo_inventory.bitbucketcloud.client import BitbucketCloudClient
from repo_inventory.bitbucketcloud.models import (
    SERVICE_TYPE,
    BitbucketRepo,
    CloneLinks,
    Link,
    PageToken,
    RepoLinks,
)

__all__ = [
    "SERVICE_TYPE",
    "BitbucketCloudClient",
    "BitbucketRepo",
    "CloneLinks",
    "Link",
    "PageToken",
    "RepoLinks",
]
