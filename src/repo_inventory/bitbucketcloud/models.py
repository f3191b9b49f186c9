"""Bitbucket Cloud API 2.0 models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator

# Service type recorded in the external identity of every repository
SERVICE_TYPE = "bitbucketCloud"


class Link(BaseModel):
    """A single hyperlink in an API resource."""

    model_config = ConfigDict(frozen=True)

    href: str
    name: str | None = None


class CloneLinks(BaseModel):
    """Clone links of a repository, one per protocol."""

    model_config = ConfigDict(frozen=True)

    links: list[Link] = Field(default_factory=list)

    def https(self) -> str:
        """Return the HTTPS clone link.

        Raises LookupError when the repository does not advertise one.
        """
        for link in self.links:
            if link.name == "https":
                return link.href
        raise LookupError("HTTPS clone link not found")


class RepoLinks(BaseModel):
    model_config = ConfigDict(frozen=True)

    clone: CloneLinks = Field(default_factory=CloneLinks)
    html: Link | None = None

    @field_validator("clone", mode="before")
    @classmethod
    def _wrap_clone_list(cls, value: Any) -> Any:
        # The API sends clone links as a bare list
        if isinstance(value, list):
            return {"links": value}
        return value


class BitbucketRepo(BaseModel):
    """A repository as returned by the Bitbucket Cloud API."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    uuid: str
    slug: str = ""
    name: str = ""
    full_name: str
    scm: str = "git"
    description: str | None = ""
    is_private: bool = False
    parent: "BitbucketRepo | None" = None
    links: RepoLinks = Field(default_factory=RepoLinks)

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "BitbucketRepo":
        """Build a repository from an API payload."""
        return cls.model_validate(data)


class PageToken(BaseModel):
    """Continuation state for paginated API retrieval.

    Tokens are replaced, never mutated, as a walk advances.
    """

    model_config = ConfigDict(frozen=True)

    pagelen: PositiveInt = 100
    next: str | None = None
    size: int | None = None
    page: int | None = None

    def has_more(self) -> bool:
        return bool(self.next)

    def values(self) -> dict[str, str]:
        """Query parameters for the first request of a walk."""
        params = {"pagelen": str(self.pagelen)}
        if self.page:
            params["page"] = str(self.page)
        return params

    def __repr__(self) -> str:
        return f"PageToken(pagelen={self.pagelen}, page={self.page}, next={self.next!r})"


class RepoPage(BaseModel):
    """One page of the paginated repositories listing."""

    model_config = ConfigDict(extra="ignore")

    pagelen: PositiveInt = 100
    next: str | None = None
    size: int | None = None
    page: int | None = None
    values: list[dict[str, Any]] = Field(default_factory=list)

    def token(self, pagelen: int) -> PageToken:
        # Keep the requested page size; the walk never renegotiates it
        return PageToken(pagelen=pagelen, next=self.next, size=self.size, page=self.page)

    def repos(self) -> list[BitbucketRepo]:
        return [BitbucketRepo.from_api(value) for value in self.values]
