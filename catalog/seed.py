"""
Sample data for the catalog.

Generates authors and books with plausible names, titles and dates. Runs once
at application startup (when enabled) or from ``catalog.cli.seed_cli``.

Responsibility: Populate an empty catalog
"""

import logging
import random
import uuid
from dataclasses import dataclass
from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.db.models import AuthorModel, BookModel
from catalog.db.repositories import AuthorRepository, BookRepository

logger = logging.getLogger(__name__)

FIRST_NAMES = [
    "Sarah", "Michael", "Emma", "James", "Olivia", "William", "Ava", "Benjamin",
    "Sophie", "Daniel", "Ursula", "Octavia", "Ray", "Italo", "Zadie", "Kazuo",
]
LAST_NAMES = [
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis",
    "Le Guin", "Butler", "Bradbury", "Calvino", "Ishiguro", "Morrison",
]
TITLE_OPENINGS = ["The", "A", "Beyond the", "Under the", "Of", "The Last", "Songs of the"]
TITLE_ADJECTIVES = ["Silent", "Broken", "Golden", "Hidden", "Distant", "Crimson", "Endless", "Quiet"]
TITLE_NOUNS = ["River", "Garden", "Empire", "Mirror", "Harbor", "Winter", "Orchard", "Lantern", "Tide"]

MAX_PUBLICATION_AGE_DAYS = 5000


@dataclass
class SeedResult:
    """Outcome of a seeding run."""

    authors_created: int = 0
    books_created: int = 0
    skipped: bool = False


def author_id(index: int) -> str:
    return f"author-{index}"


def book_id(index: int) -> str:
    return f"book-{index:03d}"


class CatalogSeeder:
    """
    Create sample authors and books.

    Example:
        async with database.session() as session:
            result = await CatalogSeeder(session, random.Random(42)).seed(authors=10, books=100)
    """

    def __init__(self, session: AsyncSession, rng: Optional[random.Random] = None) -> None:
        self.session = session
        self.rng = rng or random.Random()
        self.authors = AuthorRepository(session)
        self.books = BookRepository(session)

    def _title(self) -> str:
        return " ".join([
            self.rng.choice(TITLE_OPENINGS),
            self.rng.choice(TITLE_ADJECTIVES),
            self.rng.choice(TITLE_NOUNS),
        ])

    def _isbn10(self) -> str:
        return str(uuid.UUID(int=self.rng.getrandbits(128)))[:10]

    def _publication_date(self, today: date) -> date:
        return today - timedelta(days=self.rng.randint(1, MAX_PUBLICATION_AGE_DAYS))

    def build_authors(self, count: int) -> List[AuthorModel]:
        return [
            AuthorModel(
                id=author_id(index),
                first_name=self.rng.choice(FIRST_NAMES),
                last_name=self.rng.choice(LAST_NAMES),
            )
            for index in range(count)
        ]

    def build_books(self, count: int, author_count: int, today: Optional[date] = None) -> List[BookModel]:
        today = today or date.today()
        return [
            BookModel(
                id=book_id(index),
                title=self._title(),
                isbn10=self._isbn10(),
                publication_date=self._publication_date(today),
                author_id=author_id(self.rng.randrange(author_count)),
            )
            for index in range(count)
        ]

    async def reset(self) -> None:
        """Delete every book and author."""
        await self.session.execute(delete(BookModel))
        await self.session.execute(delete(AuthorModel))
        await self.session.flush()
        logger.warning("Catalog data deleted")

    async def seed(self, authors: int = 10, books: int = 100, reset: bool = False) -> SeedResult:
        """
        Insert ``authors`` authors and ``books`` books.

        Does nothing when the catalog already holds books, unless ``reset``.
        """
        if authors < 1:
            raise ValueError("At least one author is required to seed books")

        if reset:
            await self.reset()
        elif await self.books.count() > 0:
            logger.info("Catalog already populated; skipping seed")
            return SeedResult(skipped=True)

        created_authors = await self.authors.save_all(self.build_authors(authors))
        created_books = await self.books.save_all(self.build_books(books, authors))

        logger.info(
            f"Seeded catalog with {len(created_authors)} authors and {len(created_books)} books"
        )
        return SeedResult(authors_created=len(created_authors), books_created=len(created_books))
