"""Repository listing endpoints."""

from fastapi import APIRouter
from pydantic import BaseModel, Field

from repo_inventory.api.dependencies import InventoryServiceDep
from repo_inventory.core.models.repository import ExternalRepoSpec, Repo

router = APIRouter(prefix="/repos")


# --- Response models ---

class RepoResponse(BaseModel):
    """A listed repository, without clone credentials."""

    name: str
    uri: str
    description: str
    external_repo: ExternalRepoSpec
    fork: bool
    enabled: bool

    @classmethod
    def from_repo(cls, repo: Repo) -> "RepoResponse":
        return cls(
            name=repo.name,
            uri=repo.uri,
            description=repo.description,
            external_repo=repo.external_repo,
            fork=repo.fork,
            enabled=repo.enabled,
        )


class ListReposResponse(BaseModel):
    """Repositories of the configured connection.

    ``partial`` is set when some pages could not be fetched; ``repos``
    still holds everything that was.
    """

    repos: list[RepoResponse] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    partial: bool = False


@router.get("", response_model=ListReposResponse)
async def list_repos(service: InventoryServiceDep) -> ListReposResponse:
    """List every repository reachable from the configured connection."""
    result = await service.list_repos()
    errors = [str(err) for err in result.error] if result.error is not None else []
    return ListReposResponse(
        repos=[RepoResponse.from_repo(repo) for repo in result.repos],
        errors=errors,
        partial=result.partial,
    )
