"""Domain layer definitions."""

from .resources import IN_STOCK, OUT_OF_STOCK, Material, Notification, Project, Worker

__all__ = [
    "IN_STOCK",
    "OUT_OF_STOCK",
    "Material",
    "Notification",
    "Project",
    "Worker",
]
