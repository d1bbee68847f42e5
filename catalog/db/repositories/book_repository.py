"""
Repository for book database operations.

Finder operations over the ``books`` table in three access modes: full
lists, offset pages and keyset windows.

Responsibility: Data access layer for the ``books`` table.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from catalog.db.models import TITLE_LENGTH, AuthorModel, BookModel, BookView
from catalog.errors import NotFoundError, PagingValidationError
from catalog.pagination import (
    INITIAL,
    NaturalKeyPosition,
    Page,
    PageRequest,
    PublicationDatePosition,
    ScrollPosition,
    SortOrder,
    Window,
    ensure_compatible,
    position_after,
)

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_SIZE = 5


class BookRepository:
    """Repository encapsulating queries for ``BookModel`` records."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _title_filter(stmt: Select, title: Optional[str]) -> Select:
        if title is None:
            return stmt
        return stmt.where(BookModel.title.contains(title, autoescape=True))

    async def find_by_id(self, book_id: str) -> BookModel:
        """Fetch a single book by primary key."""
        book = await self.session.get(BookModel, book_id)
        if book is None:
            raise NotFoundError("Book", book_id)
        return book

    async def find_all(self) -> List[BookModel]:
        """Return every book ordered by id."""
        result = await self.session.execute(select(BookModel).order_by(BookModel.id))
        return list(result.scalars().all())

    async def find_by_title_contains(self, title: str) -> List[BookModel]:
        """Return books whose title contains ``title``."""
        stmt = self._title_filter(select(BookModel), title).order_by(BookModel.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, title: Optional[str] = None) -> int:
        stmt = self._title_filter(select(func.count()).select_from(BookModel), title)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def find_page(
        self,
        page_request: PageRequest,
        title: Optional[str] = None,
    ) -> Page[BookModel]:
        """
        Offset/limit paging.

        Skips ``page * size`` rows in id order and returns the next ``size``
        rows together with the total number of matching rows.
        """
        total = await self.count(title)

        stmt = (
            self._title_filter(select(BookModel), title)
            .order_by(BookModel.id)
            .offset(page_request.offset)
            .limit(page_request.size)
        )
        result = await self.session.execute(stmt)
        items = list(result.scalars().all())

        logger.debug(
            f"Fetched page {page_request.page} (size={page_request.size}, title={title!r}): "
            f"{len(items)} of {total} books"
        )
        return Page(items=items, page=page_request.page, size=page_request.size, total=total)

    async def find_window(
        self,
        order: SortOrder,
        position: ScrollPosition = INITIAL,
        title: Optional[str] = None,
        limit: int = DEFAULT_WINDOW_SIZE,
    ) -> Window[BookModel]:
        """
        Keyset scrolling.

        Returns at most ``limit`` books strictly after ``position`` in
        ``order``. One extra row is fetched to tell whether another window
        follows.

        Raises:
            PagingValidationError: ``limit`` is not positive, the title
                ordering is requested without a title, or the title is longer
                than the title column.
            IncompatibleCursorError: ``position`` belongs to another ordering.
        """
        if limit < 1:
            raise PagingValidationError("Window size must not be less than one")
        if order is SortOrder.NATURAL_TITLE and title is None:
            raise PagingValidationError("A title is required for title ordering")
        if order is SortOrder.NATURAL_TITLE and len(title) > TITLE_LENGTH:
            raise PagingValidationError(f"Title filter must not exceed {TITLE_LENGTH} characters")
        if order is not SortOrder.NATURAL_TITLE:
            title = None

        ensure_compatible(order, position, title)

        stmt = self._title_filter(select(BookModel), title)

        if order is SortOrder.PUBLICATION_DATE:
            stmt = stmt.order_by(BookModel.publication_date, BookModel.id)
            if isinstance(position, PublicationDatePosition):
                stmt = stmt.where(
                    or_(
                        BookModel.publication_date > position.publication_date,
                        and_(
                            BookModel.publication_date == position.publication_date,
                            BookModel.id > position.id,
                        ),
                    )
                )
        else:
            stmt = stmt.order_by(BookModel.id)
            if isinstance(position, NaturalKeyPosition):
                stmt = stmt.where(BookModel.id > position.id)

        result = await self.session.execute(stmt.limit(limit + 1))
        rows = list(result.scalars().all())

        items = rows[:limit]
        window = Window(
            items=items,
            positions=[position_after(order, book, title) for book in items],
            has_next=len(rows) > limit,
        )
        logger.debug(
            f"Fetched {order.value} window after {position.kind}: "
            f"{len(window)} books, has_next={window.has_next}"
        )
        return window

    async def find_views(self) -> List[BookView]:
        """Return books joined with their author's names, ordered by id."""
        stmt = (
            select(
                BookModel.id,
                BookModel.title,
                BookModel.isbn10,
                BookModel.publication_date,
                BookModel.author_id,
                AuthorModel.first_name,
                AuthorModel.last_name,
            )
            .outerjoin(AuthorModel, AuthorModel.id == BookModel.author_id)
            .order_by(BookModel.id)
        )
        result = await self.session.execute(stmt)
        return [
            BookView(
                id=row.id,
                title=row.title,
                isbn10=row.isbn10,
                publication_date=row.publication_date,
                author_id=row.author_id,
                author_first_name=row.first_name,
                author_last_name=row.last_name,
            )
            for row in result.all()
        ]

    async def save_all(self, books: Iterable[BookModel]) -> List[BookModel]:
        models = list(books)
        self.session.add_all(models)
        await self.session.flush()
        logger.debug(f"Saved {len(models)} books")
        return models
