"""Token and TokenType definitions for procscan.

The scanner produces the external token kinds a Procfile grammar cannot
express with regular terminals (indentation, line splicing, option/glob
lookahead). The reference host adds the literal kinds it matches itself so
the whole file can be viewed as one token stream.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from procscan.location import SourceLocation


class TokenType(Enum):
    """Token kinds.

    The first eight are produced by the external scanner; the rest belong to
    the grammar layer and are only produced by the reference host.

    """

    # External scanner
    NEWLINE = auto()
    INDENT = auto()
    DEDENT = auto()
    LINE_CONTINUATION = auto()  # \ <newline> <indent>
    OPTION_KEY = auto()  # key in key=value
    BARE_GLOB = auto()  # *.log, Procfile, src/**
    COMMAND_TEXT = auto()  # command after ':' on the same line
    MULTILINE_COMMAND_TEXT = auto()  # one line of an indented block

    # Grammar literals
    PROCESS_NAME = auto()
    COLON = auto()
    EQUALS = auto()
    BANG = auto()  # exclusion marker
    OPTION_VALUE = auto()
    QUOTED_STRING = auto()
    ENV_KEY = auto()
    ENV_VALUE = auto()
    COMMENT = auto()


EXTERNAL_TOKEN_TYPES: frozenset[TokenType] = frozenset(
    {
        TokenType.NEWLINE,
        TokenType.INDENT,
        TokenType.DEDENT,
        TokenType.LINE_CONTINUATION,
        TokenType.OPTION_KEY,
        TokenType.BARE_GLOB,
        TokenType.COMMAND_TEXT,
        TokenType.MULTILINE_COMMAND_TEXT,
    }
)


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the scanner or the reference host.

    Attributes:
        type: The token type (from TokenType enum)
        value: The raw source text covered by the token (empty for
            INDENT and DEDENT)
        _lineno: Start line number (1-indexed)
        _col: Start column offset (1-indexed)
        _start_offset: Absolute start position in source
        _end_offset: Absolute end position in source
        _end_lineno: End line number (differs for LINE_CONTINUATION)
        _end_col: End column offset
        _source_file: Optional source file path

    """

    type: TokenType
    value: str
    _lineno: int
    _col: int
    _start_offset: int
    _end_offset: int
    _end_lineno: int | None = None
    _end_col: int | None = None
    _source_file: str | None = None
    _location_cache: SourceLocation | None = field(
        default=None, repr=False, compare=False, hash=False
    )

    @property
    def location(self) -> SourceLocation:
        """Get source location (lazily created and cached)."""
        if self._location_cache is not None:
            return self._location_cache

        from procscan.location import SourceLocation

        loc = SourceLocation(
            lineno=self._lineno,
            col_offset=self._col,
            offset=self._start_offset,
            end_offset=self._end_offset,
            end_lineno=self._end_lineno,
            end_col_offset=self._end_col,
            source_file=self._source_file,
        )
        object.__setattr__(self, "_location_cache", loc)
        return loc

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        return f"Token({self.type.name}, {val!r}, {self._lineno}:{self._col})"

    @property
    def lineno(self) -> int:
        """Line number (convenience accessor)."""
        return self._lineno

    @property
    def col(self) -> int:
        """Column offset (convenience accessor)."""
        return self._col

    @property
    def span(self) -> tuple[int, int]:
        """Absolute ``(start, end)`` offsets."""
        return self._start_offset, self._end_offset

    @property
    def is_external(self) -> bool:
        """True for kinds produced by the external scanner."""
        return self.type in EXTERNAL_TOKEN_TYPES
