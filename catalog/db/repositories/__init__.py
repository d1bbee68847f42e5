"""
Repository package for data access operations.

Implements repository pattern for abstracting database operations.
"""

from .author_repository import AuthorRepository
from .book_repository import BookRepository

__all__ = [
    "AuthorRepository",
    "BookRepository",
]
