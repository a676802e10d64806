"""Tests for the SQLAlchemy installation store."""
import asyncio
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from push_installations.database import Base
from push_installations.models import Installation
from push_installations.services.store import InstallationStore
from push_installations.utils.db_utils import retry_on_lock


@pytest.mark.asyncio
async def test_find_propagates_session_errors_once() -> None:
    error = OperationalError("SELECT", {}, Exception("connection refused"))
    session = AsyncMock()
    session.execute.side_effect = error
    store = InstallationStore(session)

    with pytest.raises(OperationalError) as excinfo:
        await store.find({"where": {"deviceType": "ios"}})

    assert excinfo.value is error
    assert session.execute.await_count == 1


@pytest.mark.asyncio
async def test_retry_on_lock_retries_transient_errors() -> None:
    commit = AsyncMock(side_effect=[
        OperationalError("COMMIT", {}, Exception("database is locked")),
        None,
    ])

    await retry_on_lock(commit, base_delay=0)

    assert commit.await_count == 2


@pytest.mark.asyncio
async def test_retry_on_lock_reraises_other_errors() -> None:
    commit = AsyncMock(side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error")))

    with pytest.raises(OperationalError):
        await retry_on_lock(commit, base_delay=0)

    assert commit.await_count == 1


@pytest.mark.asyncio
async def test_instance_update_refreshes_modified(tmp_path) -> None:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'instances.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    try:
        async with session_factory() as session:
            installation = Installation(
                app_id="com.example.news", device_token="tok", device_type="ios"
            )
            session.add(installation)
            await session.commit()
            first_modified = installation.modified
            assert installation.created <= first_modified

            await asyncio.sleep(0.01)
            installation.badge = 9
            await session.commit()
            await session.refresh(installation)

            assert installation.badge == 9
            assert installation.modified > first_modified
            assert installation.created <= first_modified
    finally:
        await engine.dispose()
