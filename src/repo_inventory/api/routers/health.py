"""Health check endpoint."""

from fastapi import APIRouter

from repo_inventory import __version__

router = APIRouter()


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness probe."""
    return {"status": "ok", "version": __version__}
