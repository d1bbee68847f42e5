"""
Pagination package.

Offset pages, keyset windows, scroll positions and the cursor codec that
carries a position through the client between requests.
"""

from .cursor import CursorCodec
from .positions import (
    INITIAL,
    InitialPosition,
    NaturalKeyPosition,
    PublicationDatePosition,
    ScrollPosition,
    SortOrder,
    ensure_compatible,
    position_after,
)
from .window import Page, PageRequest, Window

__all__ = [
    "INITIAL",
    "CursorCodec",
    "InitialPosition",
    "NaturalKeyPosition",
    "Page",
    "PageRequest",
    "PublicationDatePosition",
    "ScrollPosition",
    "SortOrder",
    "Window",
    "ensure_compatible",
    "position_after",
]
