"""
Database package for the Book Catalog.

Provides ORM models, session management, and repository pattern
for data access.
"""

from .models import Base, AuthorModel, BookModel, BookView
from .session import Database

__all__ = [
    "Base",
    "AuthorModel",
    "BookModel",
    "BookView",
    "Database",
]
