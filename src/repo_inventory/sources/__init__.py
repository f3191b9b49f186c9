"""Code host sources."""

from repo_inventory.sources.bitbucketcloud import BitbucketCloudSource, ListReposResult

__all__ = ["BitbucketCloudSource", "ListReposResult"]
