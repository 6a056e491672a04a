"""Database session manager — error mapping and health checks on SQLite."""

import pytest
from sqlalchemy import text

from gym_tracker.core.errors import ConflictError
from gym_tracker.db.base import Base
from gym_tracker.infrastructure.database import DatabaseSessionManager
import gym_tracker.models  # noqa: F401
from gym_tracker.models import User


@pytest.fixture
async def manager():
    mgr = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    async with mgr.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield mgr
    await mgr.dispose()


async def test_health_check(manager):
    assert await manager.health_check() is True


async def test_integrity_error_becomes_conflict(manager):
    async with manager.session() as db:
        db.add(User(email="dup@example.com", password_hash="x"))
        await db.commit()

    with pytest.raises(ConflictError):
        async with manager.session() as db:
            db.add(User(email="dup@example.com", password_hash="y"))
            await db.commit()


async def test_session_executes_queries(manager):
    async with manager.session() as db:
        assert (await db.execute(text("SELECT 1"))).scalar() == 1
