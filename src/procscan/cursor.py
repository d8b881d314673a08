"""Character cursor handed to the scanner.

The scanner never indexes the source directly. It sees a cursor with one
character of lookahead, the ability to consume (or skip) that character, the
current column, and a way to mark where the token being scanned ends. This
mirrors the lexer interface a grammar runtime offers an external scanner.

Token boundaries:
    begin_token()   start a token at the current position
    advance(skip)   consume one character; while no content has been
                    consumed, skipped characters move the token start
    mark_end()      remember the current position as the token end
    commit(type)    build the Token over [start, end) and move the
                    position back to end (characters scanned past the
                    mark are not retained)

Speculative scanning uses checkpoint()/rewind(); the dispatcher rewinds a
classifier that declines so its lookahead leaves no trace.

Thread Safety:
StringCursor instances are single-use. Create one per source string.

"""

from __future__ import annotations

from typing import NamedTuple, Protocol

from procscan.tokens import Token, TokenType


class Position(NamedTuple):
    """Absolute offset with its 1-indexed line and 0-indexed column."""

    offset: int
    lineno: int
    column: int


class Checkpoint(NamedTuple):
    """Everything rewind() needs to restore."""

    position: Position
    token_start: Position
    token_end: Position | None
    has_content: bool


class Cursor(Protocol):
    """Interface the scanner requires from its host."""

    @property
    def lookahead(self) -> str: ...

    @property
    def column(self) -> int: ...

    def eof(self) -> bool: ...

    def advance(self, skip: bool = False) -> None: ...

    def mark_end(self) -> None: ...

    def checkpoint(self) -> Checkpoint: ...

    def rewind(self, checkpoint: Checkpoint) -> None: ...

    def begin_token(self) -> None: ...

    def commit(self, token_type: TokenType) -> Token: ...


class StringCursor:
    """Cursor over an in-memory string.

    Usage:
            >>> cursor = StringCursor("web: node app.js\\n")
            >>> cursor.lookahead
            'w'
            >>> cursor.column
            0

    """

    __slots__ = (
        "_source",
        "_source_len",
        "_source_file",
        "_pos",
        "_lineno",
        "_col",
        "_token_start",
        "_token_end",  # Position from mark_end(), None if never marked
        "_has_content",  # True once a non-skip advance happened
    )

    def __init__(self, source: str, source_file: str | None = None, offset: int = 0) -> None:
        """Initialize cursor.

        Args:
            source: Procfile source text
            source_file: Optional source file path for token locations
            offset: Start position; line and column are derived from it
        """
        self._source = source
        self._source_len = len(source)
        self._source_file = source_file

        offset = max(0, min(offset, self._source_len))
        self._pos = offset
        self._lineno = source.count("\n", 0, offset) + 1
        self._col = offset - (source.rfind("\n", 0, offset) + 1)

        self._token_start = self.position
        self._token_end: Position | None = None
        self._has_content = False

    # =========================================================================
    # Lookahead
    # =========================================================================

    @property
    def source(self) -> str:
        return self._source

    @property
    def source_file(self) -> str | None:
        return self._source_file

    @property
    def position(self) -> Position:
        return Position(self._pos, self._lineno, self._col)

    @property
    def offset(self) -> int:
        return self._pos

    @property
    def lookahead(self) -> str:
        """Current character, or empty string at end of input."""
        if self._pos >= self._source_len:
            return ""
        return self._source[self._pos]

    @property
    def column(self) -> int:
        """Column of the current character (0-indexed, raw characters)."""
        return self._col

    def eof(self) -> bool:
        return self._pos >= self._source_len

    def peek(self, distance: int = 0) -> str:
        """Character ``distance`` places past the current one."""
        pos = self._pos + distance
        if pos >= self._source_len:
            return ""
        return self._source[pos]

    # =========================================================================
    # Consumption
    # =========================================================================

    def advance(self, skip: bool = False) -> None:
        """Consume one character.

        Args:
            skip: Treat the character as separator whitespace. Skipped
                characters before any content are excluded from the token.
        """
        if self._pos >= self._source_len:
            return

        char = self._source[self._pos]
        self._pos += 1
        if char == "\n":
            self._lineno += 1
            self._col = 0
        else:
            self._col += 1

        if skip and not self._has_content:
            self._token_start = self.position
        elif not skip:
            self._has_content = True

    def mark_end(self) -> None:
        """Mark the current position as the end of the token."""
        self._token_end = self.position

    def begin_token(self) -> None:
        """Start a new token at the current position."""
        self._token_start = self.position
        self._token_end = None
        self._has_content = False

    def checkpoint(self) -> Checkpoint:
        return Checkpoint(self.position, self._token_start, self._token_end, self._has_content)

    def rewind(self, checkpoint: Checkpoint) -> None:
        """Restore a position captured by checkpoint()."""
        self._pos, self._lineno, self._col = checkpoint.position
        self._token_start = checkpoint.token_start
        self._token_end = checkpoint.token_end
        self._has_content = checkpoint.has_content

    def _move_to(self, position: Position) -> None:
        self._pos, self._lineno, self._col = position

    # =========================================================================
    # Token construction
    # =========================================================================

    def commit(self, token_type: TokenType) -> Token:
        """Build a token over the scanned span and retain nothing past it.

        The token ends at the last mark_end() position, or at the current
        position when the token was never marked. The cursor then rests at
        that end, ready for the next token.

        Args:
            token_type: Kind of the token

        Returns:
            The committed Token.
        """
        start = self._token_start
        end = self._token_end if self._token_end is not None else self.position
        if end.offset < start.offset:
            end = start

        self._move_to(end)
        token = Token(
            type=token_type,
            value=self._source[start.offset : end.offset],
            _lineno=start.lineno,
            _col=start.column + 1,
            _start_offset=start.offset,
            _end_offset=end.offset,
            _end_lineno=end.lineno,
            _end_col=end.column + 1,
            _source_file=self._source_file,
        )
        self.begin_token()
        return token

    def consume_while(self, chars: frozenset[str]) -> int:
        """Consume characters in ``chars``; return how many were consumed."""
        count = 0
        while self.lookahead in chars:
            self.advance()
            count += 1
        return count
