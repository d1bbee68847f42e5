"""
GraphQL Resolvers and DataLoaders
==================================
Query functions behind the schema's root fields, plus the author DataLoader.

Features:
    - Batched author lookups for ``Book.author`` (one query per request)
    - Offset paging with argument validation before any query runs
    - Keyset windows driven by opaque cursors

Responsibility: GraphQL data fetching and batching
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession
from strawberry.dataloader import DataLoader

from catalog.db.models import AuthorModel, BookModel, BookView
from catalog.db.repositories import AuthorRepository, BookRepository
from catalog.pagination import (
    INITIAL,
    CursorCodec,
    Page,
    PageRequest,
    ScrollPosition,
    SortOrder,
    Window,
)

logger = logging.getLogger(__name__)

Context = Dict[str, Any]


def get_author_loader(db: AsyncSession) -> DataLoader:
    """Create DataLoader for authors by ID"""

    async def load_authors(ids: List[str]) -> List[Optional[AuthorModel]]:
        authors = await AuthorRepository(db).find_by_ids(ids)
        return [authors.get(author_id) for author_id in ids]

    return DataLoader(load_fn=load_authors)


def position_from_cursor(codec: CursorCodec, cursor: Optional[str]) -> ScrollPosition:
    """A blank or missing cursor starts at the beginning of the set."""
    if cursor is None or not cursor.strip():
        return INITIAL
    return codec.decode(cursor.strip())


# Query functions
async def get_book(context: Context, book_id: str) -> BookModel:
    return await BookRepository(context["db"]).find_by_id(book_id)


async def get_all_books(context: Context) -> List[BookModel]:
    return await BookRepository(context["db"]).find_all()


async def get_books_by_title(context: Context, title: str) -> List[BookModel]:
    return await BookRepository(context["db"]).find_by_title_contains(title)


async def get_book_views(context: Context) -> List[BookView]:
    return await BookRepository(context["db"]).find_views()


async def get_books_page(
    context: Context,
    page: int,
    size: int,
    title: Optional[str] = None,
) -> Page[BookModel]:
    """Offset page of books, optionally filtered by title"""
    settings = context["services"].settings
    page_request = PageRequest.of(page, size, max_size=settings.pagination.max_page_size)
    return await BookRepository(context["db"]).find_page(page_request, title=title)


async def scroll_books(
    context: Context,
    order: SortOrder,
    cursor: Optional[str],
    title: Optional[str] = None,
) -> Tuple[Window[BookModel], ScrollPosition]:
    """
    Keyset window of books.

    Returns the window and the position it started from so the caller can
    report whether earlier rows exist.
    """
    services = context["services"]
    position = position_from_cursor(services.codec, cursor)
    window = await BookRepository(context["db"]).find_window(
        order,
        position,
        title=title,
        limit=services.settings.pagination.window_size,
    )
    return window, position
