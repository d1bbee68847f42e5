"""
Scroll positions for keyset pagination.

A position marks the last row a client has seen in one specific ordering.
The populated variants are pydantic models tagged by ``kind`` so the cursor
codec can validate a decoded payload against this closed set and nothing else.
"""

from datetime import date
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from catalog.db.models import ID_LENGTH, TITLE_LENGTH
from catalog.errors import IncompatibleCursorError


class SortOrder(str, Enum):
    """Orderings supported by windowed book queries."""

    NATURAL = "natural"
    NATURAL_TITLE = "natural_title"
    PUBLICATION_DATE = "publication_date"


class _Position(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class InitialPosition(_Position):
    """Start of the result set. Never encoded into a cursor."""

    kind: Literal["initial"] = "initial"


class NaturalKeyPosition(_Position):
    """Resume strictly after ``id`` in primary key order.

    ``title`` is the substring filter the position was produced under, or
    ``None`` for the unfiltered listing. It is bounded by the title column
    width, which keeps every issued cursor under ``MAX_TOKEN_LENGTH``.
    """

    kind: Literal["natural"] = "natural"
    id: str = Field(min_length=1, max_length=ID_LENGTH)
    title: Optional[str] = Field(default=None, max_length=TITLE_LENGTH)


class PublicationDatePosition(_Position):
    """Resume strictly after ``(publication_date, id)``."""

    kind: Literal["publication_date"] = "publication_date"
    publication_date: date
    id: str = Field(min_length=1, max_length=ID_LENGTH)


KeysetPosition = Annotated[
    Union[NaturalKeyPosition, PublicationDatePosition],
    Field(discriminator="kind"),
]

ScrollPosition = Union[InitialPosition, NaturalKeyPosition, PublicationDatePosition]

INITIAL = InitialPosition()


def position_after(order: SortOrder, book, title: Optional[str] = None) -> ScrollPosition:
    """Build the position that resumes after ``book`` in ``order``."""
    if order is SortOrder.PUBLICATION_DATE:
        return PublicationDatePosition(publication_date=book.publication_date, id=book.id)
    if order is SortOrder.NATURAL_TITLE:
        return NaturalKeyPosition(id=book.id, title=title)
    return NaturalKeyPosition(id=book.id)


def ensure_compatible(
    order: SortOrder,
    position: ScrollPosition,
    title: Optional[str] = None,
) -> None:
    """Reject a position that was produced under another ordering or filter."""
    if isinstance(position, InitialPosition):
        return

    if order is SortOrder.PUBLICATION_DATE:
        if not isinstance(position, PublicationDatePosition):
            raise IncompatibleCursorError("Cursor was not issued for publication date ordering")
        return

    if not isinstance(position, NaturalKeyPosition):
        raise IncompatibleCursorError("Cursor was not issued for id ordering")

    expected_title = title if order is SortOrder.NATURAL_TITLE else None
    if position.title != expected_title:
        raise IncompatibleCursorError("Cursor was issued for a different title filter")
