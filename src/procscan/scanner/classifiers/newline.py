"""Newline classifier mixin."""

from __future__ import annotations

from collections.abc import Container

from procscan.cursor import Cursor
from procscan.tokens import Token, TokenType


class NewlineClassifierMixin:
    """Mixin providing NEWLINE recognition (one character, no lookahead)."""

    def _emit(self, cursor: Cursor, token_type: TokenType) -> Token:
        """Commit the scanned span as a token. Implemented by Scanner."""
        raise NotImplementedError

    def _try_scan_newline(self, cursor: Cursor, valid: Container[TokenType]) -> Token | None:
        if TokenType.NEWLINE not in valid or cursor.lookahead != "\n":
            return None
        cursor.advance()
        return self._emit(cursor, TokenType.NEWLINE)
