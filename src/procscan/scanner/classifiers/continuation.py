"""Line continuation classifier mixin."""

from __future__ import annotations

from collections.abc import Container

from procscan.charsets import HORIZONTAL_WHITESPACE
from procscan.cursor import Cursor
from procscan.tokens import Token, TokenType


class LineContinuationClassifierMixin:
    """Mixin providing backslash-newline splicing.

    A continuation joins two physical lines into one logical line. It spans
    the backslash, any spaces after it, the newline and the next line's
    leading whitespace, and never produces a NEWLINE of its own.

    """

    def _emit(self, cursor: Cursor, token_type: TokenType) -> Token:
        """Commit the scanned span as a token. Implemented by Scanner."""
        raise NotImplementedError

    def _at_line_continuation(self, cursor: Cursor) -> bool:
        """Consume a backslash and trailing spaces; report whether a newline follows.

        Leaves the cursor after the spaces either way. Callers that only
        probe must rewind.
        """
        if cursor.lookahead != "\\":
            return False
        cursor.advance()
        while cursor.lookahead in HORIZONTAL_WHITESPACE:
            cursor.advance()
        return cursor.lookahead == "\n"

    def _try_scan_line_continuation(
        self, cursor: Cursor, valid: Container[TokenType]
    ) -> Token | None:
        """Try to scan ``\\ <spaces> <newline> <indent>``.

        Returns:
            LINE_CONTINUATION token, or None when no newline follows the
            backslash (the backslash is then ordinary content).
        """
        if TokenType.LINE_CONTINUATION not in valid:
            return None
        if not self._at_line_continuation(cursor):
            return None

        cursor.advance()
        while cursor.lookahead in HORIZONTAL_WHITESPACE:
            cursor.advance()
        return self._emit(cursor, TokenType.LINE_CONTINUATION)
