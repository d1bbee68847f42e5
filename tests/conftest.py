"""Shared fixtures: an in-memory catalog database and a GraphQL context over it."""

import os
from datetime import date
from typing import AsyncGenerator, List

import pytest

os.environ.setdefault("SEED_ENABLED", "false")

from sqlalchemy.ext.asyncio import AsyncSession

from api.graphql.context import CatalogServices, build_context
from catalog.config import DatabaseConfig, PaginationConfig, SeedConfig, Settings
from catalog.db import Database
from catalog.db.models import AuthorModel, BookModel
from catalog.pagination import CursorCodec


def make_settings(**overrides) -> Settings:
    values = {
        "db": DatabaseConfig(driver="sqlite+aiosqlite", database=":memory:"),
        "pagination": PaginationConfig(window_size=5, max_page_size=50),
        "seed": SeedConfig(enabled=False),
    }
    values.update(overrides)
    return Settings(**values)


# Seven books with out-of-order dates; book-002 and book-005 share a date.
BOOK_ROWS = [
    ("book-000", "The Silent River", date(2001, 5, 1), "author-0"),
    ("book-001", "A Distant Harbor", date(1999, 1, 15), "author-1"),
    ("book-002", "The Golden Garden", date(2010, 7, 30), "author-2"),
    ("book-003", "Under the Quiet Tide", date(1985, 3, 3), "author-0"),
    ("book-004", "The Last Lantern", date(2020, 11, 11), "author-1"),
    ("book-005", "Songs of the Winter", date(2010, 7, 30), "author-2"),
    ("book-006", "Beyond the Orchard", date(1992, 9, 9), "author-0"),
]


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
async def database(settings: Settings) -> AsyncGenerator[Database, None]:
    database = Database(settings.db)
    await database.initialize()
    await database.create_tables()
    try:
        yield database
    finally:
        await database.close()


@pytest.fixture
async def session(database: Database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session() as session:
        yield session


@pytest.fixture
async def catalog(session: AsyncSession) -> List[BookModel]:
    """Three authors and the seven books of ``BOOK_ROWS``."""
    session.add_all([
        AuthorModel(id="author-0", first_name="Ursula", last_name="Le Guin"),
        AuthorModel(id="author-1", first_name="Octavia", last_name="Butler"),
        AuthorModel(id="author-2", first_name="Italo", last_name="Calvino"),
    ])
    books = [
        BookModel(id=book_id, title=title, isbn10=f"isbn{index:06d}", publication_date=published, author_id=author)
        for index, (book_id, title, published, author) in enumerate(BOOK_ROWS)
    ]
    session.add_all(books)
    await session.flush()
    return books


@pytest.fixture
def services(settings: Settings, database: Database) -> CatalogServices:
    return CatalogServices(settings=settings, database=database, codec=CursorCodec())


@pytest.fixture
def graphql_context(services: CatalogServices, session: AsyncSession) -> dict:
    return build_context(services, session)
