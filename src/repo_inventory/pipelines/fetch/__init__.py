"""Repository fetch pipeline."""

from repo_inventory.pipelines.fetch.exclusion import ExclusionFilter
from repo_inventory.pipelines.fetch.mapper import RepoMapper
from repo_inventory.pipelines.fetch.pipeline import (
    FetchBatch,
    FetchPipeline,
    FetchResult,
    RemoteClient,
)

__all__ = [
    "ExclusionFilter",
    "FetchBatch",
    "FetchPipeline",
    "FetchResult",
    "RemoteClient",
    "RepoMapper",
]
