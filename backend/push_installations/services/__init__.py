"""Services for storing and locating installations."""
from .store import InstallationStore
from .finder import InstallationFinder

__all__ = ["InstallationStore", "InstallationFinder"]
