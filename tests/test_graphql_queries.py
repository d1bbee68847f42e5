"""Tests for GraphQL query resolvers."""

from datetime import date

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from api.graphql.context import build_context
from api.graphql.schema import schema
from catalog.db.models import TITLE_LENGTH, BookModel

pytestmark = pytest.mark.asyncio

BOOK_QUERY = """
query bookDetails($id: String!) {
  bookById(id: $id) {
    id
    title
    isbn10
    publicationDate
    author { firstName lastName }
  }
}
"""

ALL_BOOKS_QUERY = """
query { allBooks { id author { id lastName } } }
"""

PAGED_QUERY = """
query paged($page: Int!, $size: Int!) {
  allBooksPaged(page: $page, size: $size) {
    items { id }
    totalCount
    totalPages
    hasNextPage
  }
}
"""

WINDOWED_QUERY = """
query windowed($cursor: String) {
  allBooksWindowed(cursor: $cursor) {
    items { id }
    edges { cursor node { id } }
    pageInfo { startCursor endCursor hasNextPage hasPreviousPage }
  }
}
"""

TITLE_WINDOWED_QUERY = """
query windowed($title: String!, $cursor: String) {
  booksByTitleWindowed(title: $title, cursor: $cursor) {
    items { id }
    pageInfo { endCursor hasNextPage }
  }
}
"""

DATE_WINDOWED_QUERY = """
query windowed($cursor: String) {
  booksOrderedByDate(cursor: $cursor) {
    items { id publicationDate }
    pageInfo { endCursor hasNextPage }
  }
}
"""


async def _execute(context, query, **variables):
    return await schema.execute(query, variable_values=variables, context_value=context)


async def test_book_by_id_resolves_author(graphql_context, catalog) -> None:
    result = await _execute(graphql_context, BOOK_QUERY, id="book-001")

    assert result.errors is None
    assert result.data["bookById"] == {
        "id": "book-001",
        "title": "A Distant Harbor",
        "isbn10": "isbn000001",
        "publicationDate": "1999-01-15",
        "author": {"firstName": "Octavia", "lastName": "Butler"},
    }


async def test_book_by_id_missing_is_field_error(graphql_context, catalog) -> None:
    result = await _execute(graphql_context, BOOK_QUERY, id="book-404")

    assert result.data == {"bookById": None}
    assert len(result.errors) == 1
    assert result.errors[0].path == ["bookById"]
    assert result.errors[0].extensions == {"code": "NOT_FOUND"}


async def test_dangling_author_fails_only_its_field(
    graphql_context, session: AsyncSession, catalog
) -> None:
    session.add(BookModel(
        id="book-007", title="Orphan", isbn10="0000000000",
        publication_date=date(2000, 1, 1), author_id="author-99",
    ))
    await session.flush()

    result = await _execute(graphql_context, ALL_BOOKS_QUERY)

    books = result.data["allBooks"]
    assert len(books) == 8
    assert [book["author"] is not None for book in books].count(True) == 7
    assert books[7] == {"id": "book-007", "author": None}
    assert len(result.errors) == 1
    assert result.errors[0].path == ["allBooks", 7, "author"]
    assert result.errors[0].extensions == {"code": "NOT_FOUND"}


async def test_books_by_title(graphql_context, catalog) -> None:
    result = await _execute(graphql_context, 'query { booksByTitle(title: "Harbor") { id } }')

    assert result.errors is None
    assert result.data["booksByTitle"] == [{"id": "book-001"}]


async def test_books_by_title_paged(graphql_context, catalog) -> None:
    result = await _execute(
        graphql_context,
        'query { booksByTitlePaged(title: "e", page: 1, size: 4) { items { id } totalCount page size hasPreviousPage } }',
    )

    assert result.errors is None
    assert result.data["booksByTitlePaged"] == {
        "items": [{"id": "book-005"}, {"id": "book-006"}],
        "totalCount": 6,
        "page": 1,
        "size": 4,
        "hasPreviousPage": True,
    }


async def test_all_books_paged(graphql_context, catalog) -> None:
    result = await _execute(graphql_context, PAGED_QUERY, page=0, size=5)

    assert result.errors is None
    assert result.data["allBooksPaged"] == {
        "items": [{"id": f"book-00{i}"} for i in range(5)],
        "totalCount": 7,
        "totalPages": 2,
        "hasNextPage": True,
    }


@pytest.mark.parametrize("page,size", [(-1, 5), (0, 0), (0, 500)])
async def test_paging_arguments_are_validated(graphql_context, catalog, page, size) -> None:
    result = await _execute(graphql_context, PAGED_QUERY, page=page, size=size)

    assert result.data is None
    assert result.errors[0].extensions == {"code": "BAD_USER_INPUT"}


@pytest.mark.parametrize("first_cursor", [None, ""])
async def test_windowed_pages_follow_end_cursor(graphql_context, catalog, first_cursor) -> None:
    first = await _execute(graphql_context, WINDOWED_QUERY, cursor=first_cursor)

    assert first.errors is None
    window = first.data["allBooksWindowed"]
    assert [item["id"] for item in window["items"]] == [f"book-00{i}" for i in range(5)]
    assert [edge["node"]["id"] for edge in window["edges"]] == [f"book-00{i}" for i in range(5)]
    assert window["pageInfo"]["hasNextPage"] is True
    assert window["pageInfo"]["hasPreviousPage"] is False
    assert window["pageInfo"]["startCursor"] == window["edges"][0]["cursor"]
    assert window["pageInfo"]["endCursor"] == window["edges"][-1]["cursor"]

    second = await _execute(graphql_context, WINDOWED_QUERY, cursor=window["pageInfo"]["endCursor"])

    assert second.errors is None
    window = second.data["allBooksWindowed"]
    assert [item["id"] for item in window["items"]] == ["book-005", "book-006"]
    assert window["pageInfo"]["hasNextPage"] is False
    assert window["pageInfo"]["hasPreviousPage"] is True


async def test_edge_cursor_resumes_after_its_node(graphql_context, catalog) -> None:
    first = await _execute(graphql_context, WINDOWED_QUERY)
    cursor = first.data["allBooksWindowed"]["edges"][1]["cursor"]

    resumed = await _execute(graphql_context, WINDOWED_QUERY, cursor=cursor)

    assert resumed.data["allBooksWindowed"]["items"][0] == {"id": "book-002"}


async def test_malformed_cursor_is_request_error(graphql_context, catalog) -> None:
    result = await _execute(graphql_context, WINDOWED_QUERY, cursor="not-a-real-cursor")

    assert result.data is None
    assert len(result.errors) == 1
    assert result.errors[0].path == ["allBooksWindowed"]
    assert result.errors[0].extensions == {"code": "INVALID_CURSOR"}


async def test_cursor_from_other_ordering_is_rejected(graphql_context, catalog) -> None:
    natural = await _execute(graphql_context, WINDOWED_QUERY)
    cursor = natural.data["allBooksWindowed"]["pageInfo"]["endCursor"]

    by_date = await _execute(graphql_context, DATE_WINDOWED_QUERY, cursor=cursor)
    by_title = await _execute(graphql_context, TITLE_WINDOWED_QUERY, title="e", cursor=cursor)

    assert by_date.data is None
    assert by_date.errors[0].extensions == {"code": "INVALID_CURSOR"}
    assert by_title.data is None
    assert by_title.errors[0].extensions == {"code": "INVALID_CURSOR"}


async def test_books_by_title_windowed(graphql_context, catalog) -> None:
    first = await _execute(graphql_context, TITLE_WINDOWED_QUERY, title="e")
    window = first.data["booksByTitleWindowed"]
    assert [item["id"] for item in window["items"]] == [
        "book-000", "book-002", "book-003", "book-004", "book-005",
    ]

    second = await _execute(
        graphql_context, TITLE_WINDOWED_QUERY, title="e", cursor=window["pageInfo"]["endCursor"]
    )

    assert second.errors is None
    assert second.data["booksByTitleWindowed"]["items"] == [{"id": "book-006"}]
    assert second.data["booksByTitleWindowed"]["pageInfo"]["hasNextPage"] is False


async def test_long_multibyte_title_scrolls_to_the_end(graphql_context, session: AsyncSession) -> None:
    title = "é" * 400
    session.add_all([
        BookModel(
            id=f"book-{i:03d}", title=title, isbn10="0000000000",
            publication_date=date(2000, 1, 1), author_id="author-0",
        )
        for i in range(7)
    ])
    await session.flush()

    first = await _execute(graphql_context, TITLE_WINDOWED_QUERY, title=title)
    cursor = first.data["booksByTitleWindowed"]["pageInfo"]["endCursor"]
    assert len(cursor) > 1024

    second = await _execute(graphql_context, TITLE_WINDOWED_QUERY, title=title, cursor=cursor)

    assert second.errors is None
    assert second.data["booksByTitleWindowed"]["items"] == [{"id": "book-005"}, {"id": "book-006"}]


async def test_title_filter_longer_than_column_is_bad_input(graphql_context, catalog) -> None:
    result = await _execute(graphql_context, TITLE_WINDOWED_QUERY, title="e" * (TITLE_LENGTH + 1))

    assert result.data is None
    assert result.errors[0].extensions == {"code": "BAD_USER_INPUT"}


async def test_books_ordered_by_date(graphql_context, catalog) -> None:
    collected = []
    cursor = None
    while True:
        result = await _execute(graphql_context, DATE_WINDOWED_QUERY, cursor=cursor)
        assert result.errors is None
        window = result.data["booksOrderedByDate"]
        collected.extend(window["items"])
        if not window["pageInfo"]["hasNextPage"]:
            break
        cursor = window["pageInfo"]["endCursor"]

    dates = [item["publicationDate"] for item in collected]
    assert dates == sorted(dates)
    assert [item["id"] for item in collected] == [
        "book-003", "book-006", "book-001", "book-000", "book-002", "book-005", "book-004",
    ]


async def test_empty_catalog_window(graphql_context) -> None:
    result = await _execute(graphql_context, WINDOWED_QUERY)

    assert result.errors is None
    assert result.data["allBooksWindowed"] == {
        "items": [],
        "edges": [],
        "pageInfo": {
            "startCursor": None,
            "endCursor": None,
            "hasNextPage": False,
            "hasPreviousPage": False,
        },
    }


async def test_all_book_views(graphql_context, catalog) -> None:
    result = await _execute(
        graphql_context, "query { allBookViews { id authorFirstName authorLastName } }"
    )

    assert result.errors is None
    assert result.data["allBookViews"][0] == {
        "id": "book-000",
        "authorFirstName": "Ursula",
        "authorLastName": "Le Guin",
    }


async def test_authors_are_loaded_in_one_batch(services, session: AsyncSession, catalog) -> None:
    context = build_context(services, session)
    loader = context["author_loader"]
    calls = []
    original = loader.load_fn

    async def counting(keys):
        calls.append(list(keys))
        return await original(keys)

    loader.load_fn = counting

    result = await _execute(context, ALL_BOOKS_QUERY)

    assert result.errors is None
    assert len(calls) == 1
    assert sorted(calls[0]) == ["author-0", "author-1", "author-2"]
