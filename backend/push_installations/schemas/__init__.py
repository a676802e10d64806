"""Pydantic schemas for API request/response models."""
from .installation import (
    InstallationCreate,
    InstallationUpdate,
    InstallationResponse,
)

__all__ = [
    "InstallationCreate",
    "InstallationUpdate",
    "InstallationResponse",
]
