"""Business logic services for repo-inventory."""

from repo_inventory.services.inventory import InventoryService

__all__ = ["InventoryService"]
