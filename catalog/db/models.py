"""
SQLAlchemy database models for the Book Catalog.

ORM models that map to database tables with indexes on the columns used
for keyset ordering.

Responsibility: Define database schema and ORM mappings
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from sqlalchemy import String, Date, Index
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

ID_LENGTH = 50
TITLE_LENGTH = 500


class Base(DeclarativeBase):
    """Base class for all ORM models"""
    pass


class AuthorModel(Base):
    """
    Database model for authors.

    Maps to the 'authors' table.
    """

    __tablename__ = "authors"

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<AuthorModel(id={self.id!r}, name={self.first_name} {self.last_name})>"


class BookModel(Base):
    """
    Database model for books.

    ``author_id`` is a plain reference column, not a foreign key: a book may
    point at an author that does not exist, and resolving it then fails for
    that book only.
    """

    __tablename__ = "books"

    id: Mapped[str] = mapped_column(String(ID_LENGTH), primary_key=True)
    title: Mapped[str] = mapped_column(String(TITLE_LENGTH), nullable=False, index=True)
    isbn10: Mapped[str] = mapped_column(String(10), nullable=False)
    publication_date: Mapped[date] = mapped_column(Date, nullable=False)
    author_id: Mapped[str] = mapped_column(String(ID_LENGTH), nullable=False, index=True)

    __table_args__ = (
        Index("ix_books_publication_date_id", "publication_date", "id"),
    )

    def __repr__(self) -> str:
        return f"<BookModel(id={self.id!r}, title={self.title!r})>"


@dataclass(frozen=True)
class BookView:
    """Book row joined with its author's names (null when the author is missing)."""

    id: str
    title: str
    isbn10: str
    publication_date: date
    author_id: str
    author_first_name: Optional[str]
    author_last_name: Optional[str]
