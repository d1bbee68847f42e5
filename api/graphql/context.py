"""
GraphQL request context.

``CatalogServices`` holds the collaborators shared by every request. It is
built once at startup and handed to each request by reference; the per-request
context adds a database session and fresh DataLoaders.

Responsibility: Wire process-wide services into per-request context
"""

from dataclasses import dataclass
from typing import Any, AsyncGenerator, Dict, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.config import Settings
from catalog.db import Database
from catalog.pagination import CursorCodec
from api.graphql.resolvers import get_author_loader


@dataclass(frozen=True)
class CatalogServices:
    """Read-only collaborators shared across requests."""

    settings: Settings
    database: Database
    codec: CursorCodec


def build_services(settings: Settings) -> CatalogServices:
    return CatalogServices(
        settings=settings,
        database=Database(settings.db),
        codec=CursorCodec(),
    )


def build_context(
    services: CatalogServices,
    session: AsyncSession,
    request: Optional[Request] = None,
) -> Dict[str, Any]:
    """Context dictionary passed to resolvers as ``info.context``."""
    return {
        "request": request,
        "db": session,
        "services": services,
        "author_loader": get_author_loader(session),
    }


def get_services(request: Request) -> CatalogServices:
    return request.app.state.services


async def get_db(
    services: CatalogServices = Depends(get_services),
) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""
    async with services.database.session() as session:
        yield session


async def get_context(
    request: Request,
    session: AsyncSession = Depends(get_db),
    services: CatalogServices = Depends(get_services),
) -> Dict[str, Any]:
    """Context getter for the Strawberry router"""
    return build_context(services, session, request)
