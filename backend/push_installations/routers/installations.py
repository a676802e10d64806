"""Installation API endpoints: push-target lookups and registration."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..database import get_db
from ..remoting import (
    FIND_BY_APP,
    FIND_BY_SUBSCRIPTIONS,
    FIND_BY_USER,
    REMOTE_METHODS,
    RemoteMethod,
)
from ..schemas.installation import (
    InstallationCreate,
    InstallationUpdate,
    InstallationResponse,
)
from ..services.finder import InstallationFinder
from ..services.store import InstallationStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix=settings.api_prefix, tags=["installations"])


def get_store(db: AsyncSession = Depends(get_db)) -> InstallationStore:
    return InstallationStore(db)


def get_finder(store: InstallationStore = Depends(get_store)) -> InstallationFinder:
    return InstallationFinder(store)


def _query(method: RemoteMethod, arg: str):
    """Build a FastAPI query parameter from a remote method's declaration."""
    declared = method.param(arg)
    return Query(
        ... if declared.required else None,
        alias=declared.arg,
        description=declared.description,
    )


async def find_by_app(
    device_type: str = _query(FIND_BY_APP, "deviceType"),
    app_id: str = _query(FIND_BY_APP, "appId"),
    app_version: Optional[str] = _query(FIND_BY_APP, "appVersion"),
    finder: InstallationFinder = Depends(get_finder),
):
    return await finder.find_by_app(device_type, app_id, app_version)


async def find_by_user(
    device_type: str = _query(FIND_BY_USER, "deviceType"),
    user_id: str = _query(FIND_BY_USER, "userId"),
    finder: InstallationFinder = Depends(get_finder),
):
    return await finder.find_by_user(device_type, user_id)


async def find_by_subscriptions(
    device_type: str = _query(FIND_BY_SUBSCRIPTIONS, "deviceType"),
    subscriptions: str = _query(FIND_BY_SUBSCRIPTIONS, "subscriptions"),
    finder: InstallationFinder = Depends(get_finder),
):
    return await finder.find_by_subscriptions(device_type, subscriptions)


ENDPOINTS = {
    FIND_BY_APP.name: find_by_app,
    FIND_BY_USER.name: find_by_user,
    FIND_BY_SUBSCRIPTIONS.name: find_by_subscriptions,
}

# Registered before "/{installation_id}" so the literal paths win
for method in REMOTE_METHODS:
    if not method.shared:
        continue
    router.add_api_route(
        method.http.path,
        ENDPOINTS[method.name],
        methods=[method.http.verb.upper()],
        response_model=List[InstallationResponse],
        name=method.name,
        summary=method.description,
        description=method.description,
    )


@router.post("", response_model=InstallationResponse, status_code=201)
async def create_installation(
    request: InstallationCreate,
    store: InstallationStore = Depends(get_store),
):
    """Register an installation for push notifications."""
    return await store.create(request.model_dump())


@router.get("/{installation_id}", response_model=InstallationResponse)
async def get_installation(
    installation_id: int,
    store: InstallationStore = Depends(get_store),
):
    """Get a specific installation by ID."""
    installation = await store.get(installation_id)
    if not installation:
        raise HTTPException(status_code=404, detail="Installation not found")
    return installation


@router.patch("/{installation_id}", response_model=InstallationResponse)
async def update_installation(
    installation_id: int,
    update: InstallationUpdate,
    store: InstallationStore = Depends(get_store),
):
    """Partially update an installation.

    Only fields present in the request body are written.
    """
    installation = await store.update(installation_id, update.model_dump(exclude_unset=True))
    if not installation:
        raise HTTPException(status_code=404, detail="Installation not found")
    return installation
