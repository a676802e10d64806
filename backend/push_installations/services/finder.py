"""Finders that locate installations for push delivery."""
import logging
from typing import List, Optional, Sequence, Union

from .. import filters
from ..models import Installation

logger = logging.getLogger(__name__)


class InstallationFinder:
    """Read-only lookups of installations.

    ``store`` is anything with an awaitable ``find(filter)`` returning a list
    of installations, normally an ``InstallationStore``. Each lookup makes
    exactly one ``find`` call and lets its errors propagate unchanged.
    """

    def __init__(self, store):
        self._store = store

    async def find_by_app(
        self,
        device_type: str,
        app_id: str,
        app_version: Optional[str] = None,
    ) -> List[Installation]:
        """Find installations by application id and, optionally, version."""
        filter_ = filters.by_app(device_type, app_id, app_version)
        logger.debug(f"find_by_app: {filter_}")
        return await self._store.find(filter_)

    async def find_by_user(self, device_type: str, user_id: str) -> List[Installation]:
        """Find installations owned by a user."""
        filter_ = filters.by_user(device_type, user_id)
        logger.debug(f"find_by_user: {filter_}")
        return await self._store.find(filter_)

    async def find_by_subscriptions(
        self,
        device_type: str,
        subscriptions: Union[str, Sequence[str]],
    ) -> List[Installation]:
        """Find installations subscribed to at least one of ``subscriptions``.

        A string is split on commas and whitespace.
        """
        filter_ = filters.by_subscriptions(device_type, subscriptions)
        logger.debug(f"find_by_subscriptions: {filter_}")
        return await self._store.find(filter_)
