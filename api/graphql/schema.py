"""
GraphQL Schema
==============
Strawberry GraphQL schema over the catalog's SQLAlchemy models.

The ``Query`` root is the fixed table of operations the API answers. Windowed
fields return a connection whose cursors feed the next request.

Responsibility: GraphQL type definitions and resolvers.
"""

from datetime import date
from typing import List, Optional

import strawberry
from strawberry.types import Info

from catalog.db.models import AuthorModel, BookModel, BookView as BookViewRow
from catalog.errors import NotFoundError
from catalog.pagination import CursorCodec, InitialPosition, Page, ScrollPosition, SortOrder, Window


# --------------------------------------------------------------------------- #
# GraphQL Types
# --------------------------------------------------------------------------- #


@strawberry.type
class Author:
    """Author GraphQL type."""

    id: str
    first_name: str
    last_name: str

    @classmethod
    def from_model(cls, model: AuthorModel) -> "Author":
        return cls(
            id=model.id,
            first_name=model.first_name,
            last_name=model.last_name,
        )


@strawberry.type
class Book:
    """Book GraphQL type that mirrors the persisted schema."""

    id: str
    title: str
    isbn10: str
    publication_date: date
    author_id: str

    @strawberry.field
    async def author(self, info: Info) -> Optional[Author]:
        """Resolve the author for this book. A dangling reference fails this field only."""
        author = await info.context["author_loader"].load(self.author_id)
        if author is None:
            raise NotFoundError("Author", self.author_id)
        return Author.from_model(author)

    @classmethod
    def from_model(cls, model: BookModel) -> "Book":
        """Convert SQLAlchemy model to GraphQL type."""
        return cls(
            id=model.id,
            title=model.title,
            isbn10=model.isbn10,
            publication_date=model.publication_date,
            author_id=model.author_id,
        )


@strawberry.type
class BookView:
    """Book flattened together with its author's names."""

    id: str
    title: str
    isbn10: str
    publication_date: date
    author_id: str
    author_first_name: Optional[str]
    author_last_name: Optional[str]

    @classmethod
    def from_row(cls, row: BookViewRow) -> "BookView":
        return cls(
            id=row.id,
            title=row.title,
            isbn10=row.isbn10,
            publication_date=row.publication_date,
            author_id=row.author_id,
            author_first_name=row.author_first_name,
            author_last_name=row.author_last_name,
        )


@strawberry.type
class BookPage:
    """One offset page of books."""

    items: List[Book]
    page: int
    size: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def from_page(cls, page: Page[BookModel]) -> "BookPage":
        return cls(
            items=[Book.from_model(book) for book in page.items],
            page=page.page,
            size=page.size,
            total_count=page.total,
            total_pages=page.total_pages,
            has_next_page=page.has_next,
            has_previous_page=page.has_previous,
        )


@strawberry.type
class PageInfo:
    """Continuation metadata of a keyset window."""

    has_next_page: bool
    has_previous_page: bool
    start_cursor: Optional[str]
    end_cursor: Optional[str]


@strawberry.type
class BookEdge:
    node: Book
    cursor: str


@strawberry.type
class BookConnection:
    """A keyset window of books."""

    edges: List[BookEdge]
    page_info: PageInfo

    @strawberry.field
    def items(self) -> List[Book]:
        """The books of this window, without cursors."""
        return [edge.node for edge in self.edges]

    @classmethod
    def from_window(
        cls,
        window: Window[BookModel],
        codec: CursorCodec,
        started_at: ScrollPosition,
    ) -> "BookConnection":
        edges = [
            BookEdge(node=Book.from_model(book), cursor=codec.encode(position))
            for book, position in zip(window.items, window.positions)
        ]
        return cls(
            edges=edges,
            page_info=PageInfo(
                has_next_page=window.has_next,
                has_previous_page=not isinstance(started_at, InitialPosition),
                start_cursor=edges[0].cursor if edges else None,
                end_cursor=edges[-1].cursor if edges else None,
            ),
        )


# --------------------------------------------------------------------------- #
# Query Root
# --------------------------------------------------------------------------- #


async def _connection(
    info: Info,
    order: SortOrder,
    cursor: Optional[str],
    title: Optional[str] = None,
) -> BookConnection:
    from api.graphql.resolvers import scroll_books

    window, position = await scroll_books(info.context, order, cursor, title=title)
    return BookConnection.from_window(window, info.context["services"].codec, position)


@strawberry.type
class Query:
    """GraphQL Query root."""

    @strawberry.field
    async def book_by_id(self, info: Info, id: str) -> Optional[Book]:
        """Fetch a single book."""
        from api.graphql.resolvers import get_book

        return Book.from_model(await get_book(info.context, id))

    @strawberry.field
    async def all_books(self, info: Info) -> List[Book]:
        """Every book, ordered by id."""
        from api.graphql.resolvers import get_all_books

        return [Book.from_model(book) for book in await get_all_books(info.context)]

    @strawberry.field
    async def all_books_paged(self, info: Info, page: int = 0, size: int = 5) -> BookPage:
        """Offset/limit page through all books."""
        from api.graphql.resolvers import get_books_page

        return BookPage.from_page(await get_books_page(info.context, page, size))

    @strawberry.field
    async def books_by_title(self, info: Info, title: str) -> List[Book]:
        """Books whose title contains ``title``."""
        from api.graphql.resolvers import get_books_by_title

        return [Book.from_model(book) for book in await get_books_by_title(info.context, title)]

    @strawberry.field
    async def books_by_title_paged(
        self,
        info: Info,
        title: str,
        page: int = 0,
        size: int = 5,
    ) -> BookPage:
        """Offset/limit page through books with a matching title."""
        from api.graphql.resolvers import get_books_page

        return BookPage.from_page(await get_books_page(info.context, page, size, title=title))

    @strawberry.field
    async def all_books_windowed(self, info: Info, cursor: Optional[str] = None) -> BookConnection:
        """Scroll through all books in id order."""
        return await _connection(info, SortOrder.NATURAL, cursor)

    @strawberry.field
    async def books_by_title_windowed(
        self,
        info: Info,
        title: str,
        cursor: Optional[str] = None,
    ) -> BookConnection:
        """Scroll through books with a matching title in id order."""
        return await _connection(info, SortOrder.NATURAL_TITLE, cursor, title=title)

    @strawberry.field
    async def books_ordered_by_date(self, info: Info, cursor: Optional[str] = None) -> BookConnection:
        """Scroll through all books ordered by publication date."""
        return await _connection(info, SortOrder.PUBLICATION_DATE, cursor)

    @strawberry.field
    async def all_book_views(self, info: Info) -> List[BookView]:
        """Books joined with their author's names."""
        from api.graphql.resolvers import get_book_views

        return [BookView.from_row(row) for row in await get_book_views(info.context)]


# --------------------------------------------------------------------------- #
# Schema
# --------------------------------------------------------------------------- #


schema = strawberry.Schema(query=Query)
