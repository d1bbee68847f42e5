"""
GraphQL API Package
===================
Strawberry GraphQL schema for the book catalog.
"""

from .schema import schema

__all__ = ["schema"]
