"""Processing pipelines for repo-inventory."""

from repo_inventory.pipelines.fetch import FetchPipeline, RepoMapper

__all__ = ["FetchPipeline", "RepoMapper"]
