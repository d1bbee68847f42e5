"""
Repository for author database operations.

Responsibility: Data access layer for the ``authors`` table.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.db.models import AuthorModel
from catalog.errors import NotFoundError

logger = logging.getLogger(__name__)


class AuthorRepository:
    """Repository encapsulating queries for ``AuthorModel`` records."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, author_id: str) -> AuthorModel:
        """Fetch a single author by primary key."""
        author = await self.session.get(AuthorModel, author_id)
        if author is None:
            raise NotFoundError("Author", author_id)
        return author

    async def find_by_ids(self, author_ids: Sequence[str]) -> Dict[str, AuthorModel]:
        """Batch lookup keyed by id. Missing ids are simply absent."""
        if not author_ids:
            return {}
        stmt = select(AuthorModel).where(AuthorModel.id.in_(set(author_ids)))
        result = await self.session.execute(stmt)
        return {author.id: author for author in result.scalars().all()}

    async def find_all(self) -> List[AuthorModel]:
        result = await self.session.execute(select(AuthorModel).order_by(AuthorModel.id))
        return list(result.scalars().all())

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(AuthorModel))
        return int(result.scalar_one())

    async def save_all(self, authors: Iterable[AuthorModel]) -> List[AuthorModel]:
        models = list(authors)
        self.session.add_all(models)
        await self.session.flush()
        logger.debug(f"Saved {len(models)} authors")
        return models
