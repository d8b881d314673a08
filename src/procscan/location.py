"""Source location tracking for error messages and debugging.

Thread Safety:
SourceLocation is frozen (immutable) and safe to share across threads.

"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SourceLocation:
    """Source location of a token.

    Line and column are 1-indexed; offsets are absolute positions in the
    source string.

    Examples:
            >>> loc = SourceLocation(lineno=2, col_offset=3, source_file="Procfile")
            >>> str(loc)
            'Procfile:2:3'

    """

    lineno: int
    col_offset: int
    offset: int = 0
    end_offset: int = 0
    end_lineno: int | None = None
    end_col_offset: int | None = None
    source_file: str | None = None

    def __str__(self) -> str:
        """Format location for error messages.

        Returns:
            Formatted string like "Procfile:10:5" or "10:5"
        """
        if self.source_file:
            return f"{self.source_file}:{self.lineno}:{self.col_offset}"
        return f"{self.lineno}:{self.col_offset}"

    @property
    def length(self) -> int:
        """Number of source characters covered."""
        return self.end_offset - self.offset
