from enum import Enum


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    INVENTORY_MANAGER = "INVENTORY_MANAGER"
    ASSET_RESPONSIBLE = "ASSET_RESPONSIBLE"


ROLE_LABELS = {
    UserRole.ADMIN: "Administrator",
    UserRole.INVENTORY_MANAGER: "Inventory manager",
    UserRole.ASSET_RESPONSIBLE: "Asset responsible",
}

ROLE_DESCRIPTIONS = {
    UserRole.ADMIN: "Full management of the system, users and assets",
    UserRole.INVENTORY_MANAGER: "Registers, updates and decommissions assets; runs the inventory",
    UserRole.ASSET_RESPONSIBLE: "Sees the assets in their custody and reports maintenance needs",
}
