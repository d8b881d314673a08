"""Option key / bare glob classifier mixin.

In a declaration ``worker ready=5432 *.log Procfile`` both ``ready`` and
``Procfile`` start the same way. Only the character after the identifier
tells them apart: ``=`` makes an option key, anything else a glob. The
grammar cannot backtrack across external tokens, so the decision is made
here with forward lookahead before anything is committed.
"""

from __future__ import annotations

from collections.abc import Container

from procscan.charsets import (
    HORIZONTAL_WHITESPACE,
    IDENTIFIER_CHARS,
    IDENTIFIER_START,
    is_glob_char,
    is_plain_identifier,
)
from procscan.cursor import Cursor
from procscan.tokens import Token, TokenType


class OptionGlobClassifierMixin:
    """Mixin providing OPTION_KEY / BARE_GLOB disambiguation."""

    def _emit(self, cursor: Cursor, token_type: TokenType) -> Token:
        """Commit the scanned span as a token. Implemented by Scanner."""
        raise NotImplementedError

    def _try_scan_option_or_glob(
        self, cursor: Cursor, valid: Container[TokenType]
    ) -> Token | None:
        """Try to scan an option key or a bare glob.

        An identifier followed by ``=`` is an OPTION_KEY (the ``=`` stays
        for the grammar). Otherwise, if globs are acceptable, the identifier
        is extended with glob characters into a BARE_GLOB.

        Returns:
            OPTION_KEY or BARE_GLOB token, or None.
        """
        want_key = TokenType.OPTION_KEY in valid
        want_glob = TokenType.BARE_GLOB in valid
        if not (want_key or want_glob):
            return None

        while cursor.lookahead in HORIZONTAL_WHITESPACE:
            cursor.advance(skip=True)

        if cursor.lookahead not in IDENTIFIER_START:
            if not want_glob:
                return None
            return self._scan_bare_glob(cursor)

        while cursor.lookahead in IDENTIFIER_CHARS:
            cursor.advance()

        if cursor.lookahead == "=" and want_key:
            cursor.mark_end()
            return self._emit(cursor, TokenType.OPTION_KEY)

        if not want_glob:
            return None

        while is_glob_char(cursor.lookahead):
            cursor.advance()
        cursor.mark_end()
        return self._emit(cursor, TokenType.BARE_GLOB)

    def _scan_bare_glob(self, cursor: Cursor) -> Token | None:
        """Scan a glob that does not start like an identifier.

        A run that still looks like a plain identifier and is followed by
        ``=`` is left for a position where an option key can apply.
        """
        run: list[str] = []
        while is_glob_char(cursor.lookahead):
            run.append(cursor.lookahead)
            cursor.advance()

        if not run:
            return None
        if is_plain_identifier("".join(run)) and cursor.lookahead == "=":
            return None

        cursor.mark_end()
        return self._emit(cursor, TokenType.BARE_GLOB)
