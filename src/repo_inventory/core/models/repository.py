"""Canonical repository and external service models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ExternalService(BaseModel):
    """A configured code host connection."""

    id: int
    kind: str = "BITBUCKETCLOUD"
    display_name: str = ""
    config: str = "{}"  # raw JSON connection configuration

    @property
    def urn(self) -> str:
        """Unique identifier of this service among all configured sources."""
        return f"extsvc:{self.kind.lower()}:{self.id}"


class ExternalRepoSpec(BaseModel):
    """Identity of a repository on its code host."""

    model_config = ConfigDict(frozen=True)

    id: str
    service_type: str
    service_id: str


class SourceInfo(BaseModel):
    """Where a repository can be cloned from for a given connection."""

    id: str
    clone_url: str


class Repo(BaseModel):
    """A repository record normalized across code hosts."""

    name: str
    uri: str = ""
    description: str = ""
    external_repo: ExternalRepoSpec
    fork: bool = False
    enabled: bool = True
    sources: dict[str, SourceInfo] = Field(default_factory=dict)

    # Provider-native representation
    metadata: Any = None

    def clone_url(self, urn: str) -> str | None:
        info = self.sources.get(urn)
        return info.clone_url if info else None
