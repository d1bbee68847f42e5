"""
Cursor codec.

Turns a populated scroll position into an opaque token and back. The token is
compact JSON wrapped in unpadded base64url, so it only contains
``[A-Za-z0-9_-]`` and survives GraphQL string literals and URLs unchanged.

Decoding validates against the known position variants only. Anything else,
including structurally valid JSON with unexpected keys, is a
``CursorDecodeError``.
"""

import base64
import binascii
import logging
import re

from pydantic import TypeAdapter, ValidationError

from catalog.db.models import ID_LENGTH, TITLE_LENGTH
from catalog.errors import CursorDecodeError
from catalog.pagination.positions import InitialPosition, KeysetPosition, ScrollPosition

logger = logging.getLogger(__name__)

# Worst case per character is a six byte JSON escape such as "\u001f".
_MAX_PAYLOAD_BYTES = 64 + 6 * (ID_LENGTH + TITLE_LENGTH)
MAX_TOKEN_LENGTH = -(-_MAX_PAYLOAD_BYTES // 3) * 4
TOKEN_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


class CursorCodec:
    """Encode and decode keyset scroll positions."""

    def __init__(self) -> None:
        self._adapter: TypeAdapter = TypeAdapter(KeysetPosition)

    def encode(self, position: ScrollPosition) -> str:
        if isinstance(position, InitialPosition):
            raise ValueError("The initial position has no cursor representation")

        payload = position.model_dump_json(exclude_none=True).encode("utf-8")
        return base64.urlsafe_b64encode(payload).rstrip(b"=").decode("ascii")

    def decode(self, token: str) -> ScrollPosition:
        if not isinstance(token, str) or not token:
            raise CursorDecodeError("Cursor is empty")
        if len(token) > MAX_TOKEN_LENGTH:
            raise CursorDecodeError("Cursor is too long")
        if not TOKEN_PATTERN.fullmatch(token):
            raise CursorDecodeError("Cursor contains unexpected characters")

        try:
            padded = token + "=" * (-len(token) % 4)
            raw = base64.b64decode(padded.encode("ascii"), altchars=b"-_", validate=True)
        except (binascii.Error, UnicodeEncodeError, ValueError) as exc:
            logger.debug(f"Rejected cursor with invalid encoding: {exc}")
            raise CursorDecodeError("Cursor is not a valid token") from exc

        try:
            return self._adapter.validate_json(raw)
        except ValidationError as exc:
            logger.debug(f"Rejected cursor with unexpected payload: {exc.errors()}")
            raise CursorDecodeError("Cursor is not a valid token") from exc
