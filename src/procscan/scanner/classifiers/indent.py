"""Indentation classifier mixin (INDENT/DEDENT).

Procfile blocks nest exactly one level deep, so a single width is enough
state: the indentation of the block's first line. Width is a raw count of
spaces and tabs; a tab is one column, not a tab stop. Changing that would
silently reclassify files that parse today.
"""

from __future__ import annotations

from collections.abc import Container

from procscan.charsets import HORIZONTAL_WHITESPACE
from procscan.cursor import Cursor
from procscan.state import ScannerState
from procscan.tokens import Token, TokenType


class IndentClassifierMixin:
    """Mixin providing block open/close detection at the start of a line.

    Both tokens are zero-width and sit after the line's leading
    whitespace, which is skipped rather than tokenized.

    """

    # Set by the Scanner class
    _state: ScannerState

    def _emit(self, cursor: Cursor, token_type: TokenType) -> Token:
        """Commit the scanned span as a token. Implemented by Scanner."""
        raise NotImplementedError

    def _skip_indentation(self, cursor: Cursor) -> int:
        """Skip leading spaces and tabs.

        Returns:
            Number of characters skipped.
        """
        indent = 0
        while cursor.lookahead in HORIZONTAL_WHITESPACE:
            cursor.advance(skip=True)
            indent += 1
        return indent

    def _try_scan_dedent(self, cursor: Cursor, valid: Container[TokenType]) -> Token | None:
        """Try to close the open block.

        Closes at end of input (from any column, so the block can always be
        closed before the stream ends) or at a non-blank line indented less
        than the block. Blank lines never close a block.
        """
        if TokenType.DEDENT not in valid or not self._state.in_block:
            return None

        if not cursor.eof():
            if cursor.column != 0:
                return None
            indent = self._skip_indentation(cursor)
            if not cursor.eof():
                if cursor.lookahead == "\n" or indent >= self._state.block_indent:
                    return None

        self._state.close_block()
        return self._emit(cursor, TokenType.DEDENT)

    def _try_scan_indent(self, cursor: Cursor, valid: Container[TokenType]) -> Token | None:
        """Try to open a block at an indented, non-blank line."""
        if TokenType.INDENT not in valid or self._state.in_block or cursor.column != 0:
            return None

        indent = self._skip_indentation(cursor)
        if indent == 0 or cursor.lookahead == "\n" or cursor.eof():
            return None

        self._state.open_block(indent)
        return self._emit(cursor, TokenType.INDENT)
