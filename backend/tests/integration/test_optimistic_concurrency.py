"""
Concurrent writers against one club on a file-backed SQLite: exactly one update wins.
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

_backend = Path(__file__).resolve().parent.parent.parent
if str(_backend) not in sys.path:
    sys.path.insert(0, str(_backend))

import pytest
import pytest_asyncio

from core.database import dispose_database, init_database
from core.errors import VersionOutdated
from repositories.club_repo import ClubRepository
from services.club_write_service import ClubWriteService


@pytest_asyncio.fixture
async def file_db(tmp_path: Path):
    """SQLite file so that every session gets its own connection."""
    manager = await init_database(f"sqlite+aiosqlite:///{tmp_path / 'clubs.db'}")
    await manager.create_schema()
    yield manager
    await dispose_database()


async def _update(db, id, name, token):
    async with db.session() as session:
        return await ClubWriteService.for_session(session).update(id, {"name": name}, token)


@pytest.mark.asyncio
async def test_second_writer_with_same_version_is_rejected(file_db, club_data) -> None:
    async with file_db.session() as session:
        club_id = await ClubWriteService.for_session(session).create(club_data())

    # Both writers saw version 0; the first one commits.
    assert await _update(file_db, club_id, "Writer A", '"0"') == 1
    with pytest.raises(VersionOutdated):
        await _update(file_db, club_id, "Writer B", '"0"')

    async with file_db.session() as session:
        club = await ClubRepository(session).find_unique(club_id)
    assert club.version == 1
    assert club.name == "Writer A"


@pytest.mark.asyncio
async def test_parallel_writers_exactly_one_succeeds(file_db, club_data) -> None:
    async with file_db.session() as session:
        club_id = await ClubWriteService.for_session(session).create(club_data())

    results = await asyncio.gather(
        *(_update(file_db, club_id, f"Writer {i}", '"0"') for i in range(4)),
        return_exceptions=True,
    )

    successes = [r for r in results if r == 1]
    conflicts = [r for r in results if isinstance(r, VersionOutdated)]
    assert len(successes) == 1
    assert len(conflicts) == 3

    async with file_db.session() as session:
        assert await ClubRepository(session).current_version(club_id) == 1
