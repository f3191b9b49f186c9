"""Bitbucket Cloud connection configuration models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class GitURLType(str, Enum):
    """How clone URLs are produced for a connection."""

    HTTP = "http"
    SSH = "ssh"


class ExclusionRule(BaseModel):
    """A repository exclusion rule.

    Any populated field is enough for the rule to match. A rule with no
    populated field matches nothing.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = Field(default=None, description="Full name, compared case-insensitively")
    id: int | None = Field(default=None, description="Repository identifier")
    pattern: str | None = Field(default=None, description="Regex searched in the full name")

    @property
    def is_empty(self) -> bool:
        return not (self.name or self.id or self.pattern)


class BitbucketCloudConnection(BaseModel):
    """Configuration for one Bitbucket Cloud account."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(default="https://bitbucket.org", description="Bitbucket Cloud host URL")
    api_url: str = Field(
        default="https://api.bitbucket.org",
        alias="apiUrl",
        description="Bitbucket Cloud REST API base URL",
    )
    username: str = ""
    app_password: str = Field(default="", alias="appPassword")
    git_url_type: GitURLType = Field(default=GitURLType.HTTP, alias="gitURLType")
    repository_path_pattern: str = Field(default="", alias="repositoryPathPattern")
    repository_queries: list[str] = Field(
        default_factory=lambda: [""],
        alias="repositoryQueries",
        description="Bitbucket query filters; an empty string lists every accessible repository",
    )
    exclude: list[ExclusionRule] = Field(default_factory=list)
