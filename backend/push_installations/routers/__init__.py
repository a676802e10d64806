"""API routers."""
from .installations import router as installations_router

__all__ = ["installations_router"]
