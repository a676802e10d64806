"""Database models."""
from .installation import Installation, InstallationSubscription

__all__ = ["Installation", "InstallationSubscription"]
