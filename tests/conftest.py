"""
Shared fixtures for pagination tests.

Provides:
- The person/initials data set with duplicate runs around page breaks
- In-memory and SQLite-backed ordered record sources over that data
"""
import random

import pytest
import pytest_asyncio

from stablepage.core.logging import configure_logging
from stablepage.core.ordering import Record, SortSpecification
from stablepage.db.database import create_engine, create_session_factory, dispose_engine, init_db
from stablepage.models.record import RecordRow
from stablepage.repositories.memory_source import InMemoryRecordSource
from stablepage.repositories.sql_source import SqlRecordSource

KIND = "Person"
PROPERTY_NAME = "initials"
DATA_SIZE = 80
PAGE_SIZE = 30

configure_logging()


def make_person_records(seed: int = 20120215) -> list[Record]:
    """4 x "BD", 4 x "BC", then 80 two-letter codes AA..DB.

    The duplicates land on the first page break, so page 1 ends inside
    the "BC" run.
    """
    initials = ["BD"] * 4 + ["BC"] * 4
    for i in range(DATA_SIZE):
        j = i // 26
        initials.append(chr(ord("A") + (j % 26)) + chr(ord("A") + (i % 26)))

    rng = random.Random(seed)
    ids = rng.sample(range(1, 100_000), len(initials))
    return [
        Record(identifier, {PROPERTY_NAME: value, "kind": KIND})
        for identifier, value in zip(ids, initials)
    ]


def expected_order(records: list[Record], sort_spec: SortSpecification) -> list[tuple[str, str]]:
    ordered = sorted(records, key=sort_spec.sort_key)
    return [(r.values[PROPERTY_NAME], r.identifier) for r in ordered]


@pytest.fixture
def person_records() -> list[Record]:
    return make_person_records()


@pytest.fixture
def ascending() -> SortSpecification:
    return SortSpecification.build(PROPERTY_NAME, "asc")


@pytest.fixture
def memory_source(person_records) -> InMemoryRecordSource:
    return InMemoryRecordSource(person_records)


@pytest_asyncio.fixture
async def session_factory():
    engine = create_engine("sqlite+aiosqlite:///:memory:")
    await init_db(engine)
    try:
        yield create_session_factory(engine)
    finally:
        await dispose_engine(engine)


async def populate(session_factory, person_records) -> SqlRecordSource:
    async with session_factory() as session:
        session.add_all(
            RecordRow(id=r.identifier, kind=KIND, initials=r.values[PROPERTY_NAME])
            for r in person_records
        )
        # A different kind sharing the table must never leak into scans
        session.add(RecordRow(id="0", kind="Robot", initials="AA"))
        await session.commit()
    return SqlRecordSource(session_factory, RecordRow, filters={"kind": KIND})


@pytest_asyncio.fixture
async def sql_source(session_factory, person_records) -> SqlRecordSource:
    return await populate(session_factory, person_records)


@pytest_asyncio.fixture(params=["memory", "sql"])
async def record_source(request, session_factory, person_records):
    """Both source implementations over the same person data."""
    if request.param == "memory":
        return InMemoryRecordSource(person_records)
    return await populate(session_factory, person_records)
