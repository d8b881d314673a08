"""Command text classifier mixin (inline and block lines)."""

from __future__ import annotations

from collections.abc import Container

from procscan.charsets import HORIZONTAL_WHITESPACE
from procscan.cursor import Cursor
from procscan.tokens import Token, TokenType


class CommandClassifierMixin:
    """Mixin providing command text scanning.

    Inline commands (after ``name:`` on the same line) stop before a line
    continuation so the splice is tokenized separately. Block lines are
    taken verbatim: a trailing backslash inside a block is part of the
    command.

    """

    def _emit(self, cursor: Cursor, token_type: TokenType) -> Token:
        """Commit the scanned span as a token. Implemented by Scanner."""
        raise NotImplementedError

    def _at_line_continuation(self, cursor: Cursor) -> bool:
        """Probe for a continuation. Implemented by LineContinuationClassifierMixin."""
        raise NotImplementedError

    def _try_scan_command_text(
        self, cursor: Cursor, valid: Container[TokenType]
    ) -> Token | None:
        """Try to scan the command on a declaration line.

        Leading whitespace is skipped. The token ends at the last
        non-whitespace character before end of line, end of input, or a
        confirmed line continuation. Trailing blanks stay unconsumed; the
        host skips them like any other separator.

        Returns:
            COMMAND_TEXT token, or None if nothing but whitespace remains.
        """
        if TokenType.COMMAND_TEXT not in valid:
            return None

        while cursor.lookahead in HORIZONTAL_WHITESPACE:
            cursor.advance(skip=True)

        has_content = False
        while cursor.lookahead != "\n" and not cursor.eof():
            char = cursor.lookahead
            if char == "\\":
                probe = cursor.checkpoint()
                if self._at_line_continuation(cursor):
                    break
                cursor.rewind(probe)
            cursor.advance()
            has_content = True
            if char not in HORIZONTAL_WHITESPACE:
                cursor.mark_end()

        if not has_content:
            return None
        return self._emit(cursor, TokenType.COMMAND_TEXT)

    def _try_scan_multiline_command_text(
        self, cursor: Cursor, valid: Container[TokenType]
    ) -> Token | None:
        """Try to scan one line of an indented block, verbatim to end of line."""
        if TokenType.MULTILINE_COMMAND_TEXT not in valid:
            return None

        while cursor.lookahead in HORIZONTAL_WHITESPACE:
            cursor.advance(skip=True)
        if cursor.lookahead == "\n" or cursor.eof():
            return None

        while cursor.lookahead != "\n" and not cursor.eof():
            cursor.advance()
        cursor.mark_end()
        return self._emit(cursor, TokenType.MULTILINE_COMMAND_TEXT)
