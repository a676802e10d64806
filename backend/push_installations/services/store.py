"""SQLAlchemy-backed persistence for installations."""
import logging
from typing import Awaitable, Callable, List, Optional, TypeVar

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..filters import compile_where
from ..hooks import stamp_modified
from ..models import Installation, InstallationSubscription
from ..utils.db_utils import retry_on_lock

logger = logging.getLogger(__name__)

T = TypeVar("T")


class InstallationStore:
    """Executes installation filters and writes against one session."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def find(self, filter_: dict) -> List[Installation]:
        """Return installations matching ``filter_`` ordered by id."""
        stmt = (
            select(Installation)
            .where(*compile_where(filter_))
            .order_by(Installation.id)
        )
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def get(self, installation_id: int) -> Optional[Installation]:
        result = await self._session.execute(
            select(Installation)
            .where(Installation.id == installation_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def _write(self, work: Callable[[], Awaitable[T]]) -> T:
        """Run ``work`` and commit, retrying the whole write on transient errors.

        A failed attempt is rolled back before the next one starts, so ``work``
        must rebuild everything it adds to the session.
        """
        async def attempt() -> T:
            try:
                result = await work()
                await self._session.commit()
            except SQLAlchemyError:
                await self._session.rollback()
                raise
            return result

        return await retry_on_lock(attempt)

    async def create(self, data: dict) -> Installation:
        """Insert a new installation.

        ``modified`` (and ``created`` when unset) are stamped by the model's
        ``before_insert`` listener during flush.
        """
        async def insert() -> Installation:
            installation = Installation(**data)
            self._session.add(installation)
            return installation

        installation = await self._write(insert)
        await self._session.refresh(installation)

        logger.info(f"Installation created: {installation.device_token[:16]}...")
        return installation

    async def update(self, installation_id: int, patch: dict) -> Optional[Installation]:
        """Apply a partial update and return the refreshed installation.

        Returns None when no installation has ``installation_id``.
        """
        exists = await self._session.execute(
            select(Installation.id).where(Installation.id == installation_id)
        )
        if exists.scalar_one_or_none() is None:
            return None

        async def apply() -> dict:
            values = stamp_modified(dict(patch))
            subscriptions = values.pop("subscriptions", None)

            await self._session.execute(
                update(Installation)
                .where(Installation.id == installation_id)
                .values(**values)
            )
            if subscriptions is not None:
                await self._session.execute(
                    delete(InstallationSubscription)
                    .where(InstallationSubscription.installation_id == installation_id)
                )
                self._session.add_all([
                    InstallationSubscription(installation_id=installation_id, topic=topic)
                    for topic in subscriptions
                ])
            return values

        values = await self._write(apply)

        logger.info(f"Installation {installation_id} updated: {sorted(values)}")
        return await self.get(installation_id)
