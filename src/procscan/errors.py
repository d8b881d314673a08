"""Exception classes for procscan.

The scanner itself never raises: every scan call either yields a token or
declines. Errors surface from the reference host when the token stream
cannot continue.
"""

from __future__ import annotations


class ProcscanError(Exception):
    """Base exception for all procscan errors."""

    pass


class ParseError(ProcscanError):
    """Unexpected input met while driving the scanner over a Procfile.

    Raised by the reference host in strict mode; collected on
    ``TokenStream.errors`` otherwise.
    """

    def __init__(
        self,
        message: str,
        lineno: int | None = None,
        col_offset: int | None = None,
        source_file: str | None = None,
    ) -> None:
        """Initialize parse error with optional location.

        Args:
            message: Error description
            lineno: Line number where error occurred (1-indexed)
            col_offset: Column offset where error occurred (1-indexed)
            source_file: Path to source file (optional)
        """
        self.message = message
        self.lineno = lineno
        self.col_offset = col_offset
        self.source_file = source_file

        location = ""
        if source_file:
            location = f"{source_file}:"
        if lineno is not None:
            location += f"{lineno}:"
            if col_offset is not None:
                location += f"{col_offset}:"
        if location:
            location = location.rstrip(":") + " "

        super().__init__(f"{location}{message}")
