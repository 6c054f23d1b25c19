# frota/models/__init__.py
from frota.models.Fleet import Document, Driver, MaintenanceSchedule, PreDepartureChecklist, Vehicle
from frota.models.Permissions import Action, InvalidPermissionKey, PermissionRule, Resource, Role
from frota.models.Users import User

__all__ = [
    "Action",
    "Document",
    "Driver",
    "InvalidPermissionKey",
    "MaintenanceSchedule",
    "PermissionRule",
    "PreDepartureChecklist",
    "Resource",
    "Role",
    "User",
    "Vehicle",
]
