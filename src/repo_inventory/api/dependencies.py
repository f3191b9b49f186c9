"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from repo_inventory.config import get_settings
from repo_inventory.core.exceptions import ConfigurationError
from repo_inventory.services.inventory import InventoryService


async def get_inventory_service(request: Request) -> InventoryService:
    """Get the inventory service from app state."""
    if hasattr(request.app.state, "inventory_service"):
        return request.app.state.inventory_service

    # Initialize on first request from the configured connection file
    try:
        service = InventoryService.from_settings(get_settings())
    except ConfigurationError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=e.message,
        ) from e
    request.app.state.inventory_service = service
    return service


# Type aliases for dependency injection
InventoryServiceDep = Annotated[InventoryService, Depends(get_inventory_service)]
