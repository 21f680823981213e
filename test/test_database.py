"""
Tests for database session management and column types.
"""

from pathlib import Path

import pytest
from sqlalchemy import Enum as SQLEnum, func, select
from sqlalchemy.dialects import postgresql
from sqlalchemy.schema import CreateTable

from fish_follow.contacts.models import Contact
from fish_follow.organizations.models import Organization
from fish_follow.shared.database import DatabaseManager
from fish_follow.users.models import UserRole


@pytest.fixture
def manager(tmp_path: Path) -> DatabaseManager:
    return DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'fish_follow.db'}")


async def _count(manager: DatabaseManager) -> int:
    async with manager.session() as session:
        return (await session.execute(select(func.count(Organization.id)))).scalar_one()


class TestDatabaseManager:
    @pytest.mark.asyncio
    async def test_session_commits_on_success(self, manager: DatabaseManager) -> None:
        await manager.create_all()

        async with manager.session() as session:
            session.add(Organization(name="Committed"))

        assert await _count(manager) == 1
        await manager.close()

    @pytest.mark.asyncio
    async def test_session_rolls_back_on_error(self, manager: DatabaseManager) -> None:
        await manager.create_all()

        with pytest.raises(RuntimeError):
            async with manager.session() as session:
                session.add(Organization(name="Discarded"))
                await session.flush()
                raise RuntimeError("boom")

        assert await _count(manager) == 0
        await manager.close()

    @pytest.mark.asyncio
    async def test_close_resets_engine(self, manager: DatabaseManager) -> None:
        first = manager.engine
        await manager.close()

        assert manager.engine is not first
        await manager.close()


class TestEnumColumns:
    @pytest.mark.parametrize(
        "column",
        [Contact.__table__.c.year, Contact.__table__.c.gender, UserRole.__table__.c.role],
    )
    def test_stored_as_plain_strings(self, column) -> None:
        assert isinstance(column.type, SQLEnum)
        assert column.type.native_enum is False

    def test_postgres_ddl_has_no_enum_type(self) -> None:
        ddl = str(CreateTable(Contact.__table__).compile(dialect=postgresql.dialect()))

        assert "year_enum" not in ddl
        assert "gender_enum" not in ddl
        assert "VARCHAR(6)" in ddl
