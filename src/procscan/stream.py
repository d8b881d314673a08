"""Reference host: drive the scanner over a whole Procfile.

The scanner only answers "can one of these kinds be read here?". Something
has to ask the question with the right set of kinds at the right time and
match the grammar's own literals (process names, ``:``, ``=``, ``!``, option
values, quoted strings, env assignments, comments). TokenStream does that
for the lexical layer of the Procfile grammar and yields one flat token
stream. It builds no syntax tree.

Example:
    >>> from procscan.stream import tokenize
    >>> [t.type.name for t in tokenize("web: node app.js\\n")]
    ['PROCESS_NAME', 'COLON', 'COMMAND_TEXT', 'NEWLINE']

Incremental resume:
    Every line start is recorded as a LineSnapshot holding the serialized
    scanner state. ``tokenize(source, resume=snapshot)`` restarts there and
    yields exactly the tokens a full run yields after that point.

Thread Safety:
TokenStream instances are single-use. Create one per source string.

"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass

from procscan.charsets import HORIZONTAL_WHITESPACE, QUOTE_CHARS
from procscan.config import get_scan_config
from procscan.cursor import StringCursor
from procscan.errors import ParseError
from procscan.scanner import Scanner
from procscan.tokens import Token, TokenType
from procscan.utils.logger import get_logger

logger = get_logger(__name__)

_PROCESS_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*!?")
_OPTION_VALUE = re.compile(r"[^\s:]+")
_ENV_KEY = re.compile(r"[A-Z_][A-Z0-9_]*(?==)")
_ENV_VALUE = re.compile(r"\S+")
_COMMENT = re.compile(r"#[^\n]*")
_SINGLE_QUOTED = re.compile(r"'[^']*'")
_DOUBLE_QUOTED = re.compile(r'"(?:[^"\\]|\\.)*"')

# Acceptable external kinds per grammar position
_LINE_START = frozenset({TokenType.LINE_CONTINUATION, TokenType.NEWLINE})
_LINE_START_AFTER_DEFINITION = _LINE_START | {TokenType.INDENT}
_DECLARATION = frozenset(
    {TokenType.LINE_CONTINUATION, TokenType.OPTION_KEY, TokenType.BARE_GLOB}
)
_EXCLUSION = frozenset({TokenType.LINE_CONTINUATION, TokenType.BARE_GLOB})
_EXECUTION = frozenset(
    {TokenType.LINE_CONTINUATION, TokenType.NEWLINE, TokenType.COMMAND_TEXT}
)
_BLOCK_LINE = frozenset(
    {TokenType.NEWLINE, TokenType.DEDENT, TokenType.MULTILINE_COMMAND_TEXT}
)
_LINE_END = frozenset({TokenType.NEWLINE})


@dataclass(frozen=True, slots=True)
class LineSnapshot:
    """Resume point recorded at the start of each line.

    Attributes:
        offset: Source position of the line start
        token_index: Number of tokens emitted before this point
        state: Serialized scanner state (5 bytes)
        expect_block: True if an INDENT may open a block here

    """

    offset: int
    token_index: int
    state: bytes
    expect_block: bool


class TokenStream:
    """Token stream for one Procfile source.

    Usage:
            >>> stream = TokenStream("web:\\n  echo one\\n")
            >>> [t.type.name for t in stream]
            ['PROCESS_NAME', 'COLON', 'NEWLINE', 'INDENT', 'MULTILINE_COMMAND_TEXT', 'NEWLINE', 'DEDENT']

    Attributes:
        errors: ParseErrors recovered from in non-strict mode
        snapshots: One LineSnapshot per line start, in source order

    """

    __slots__ = (
        "_cursor",
        "_scanner",
        "_strict",
        "_expect_block",
        "_emitted",
        "errors",
        "snapshots",
    )

    def __init__(
        self,
        source: str,
        *,
        source_file: str | None = None,
        resume: LineSnapshot | None = None,
    ) -> None:
        """Initialize the stream.

        Args:
            source: Procfile source text
            source_file: Optional source file path for locations and errors
            resume: Snapshot from an earlier run over the same source
        """
        self._cursor = StringCursor(
            source, source_file, offset=resume.offset if resume is not None else 0
        )
        self._scanner = Scanner()
        self._strict = get_scan_config().strict
        self._expect_block = False
        self._emitted = 0
        self.errors: list[ParseError] = []
        self.snapshots: list[LineSnapshot] = []

        if resume is not None:
            self._scanner.deserialize(resume.state)
            self._expect_block = resume.expect_block
            self._emitted = resume.token_index

    def __iter__(self) -> Iterator[Token]:
        return self.tokenize()

    def tokenize(self) -> Iterator[Token]:
        """Tokenize the source.

        Yields:
            Token objects one at a time

        Raises:
            ParseError: On unexpected input, when the config is strict.
        """
        cursor = self._cursor
        while not cursor.eof() or self._scanner.state.in_block:
            self._record_snapshot()
            if self._scanner.state.in_block:
                routine = self._scan_block_line
            else:
                routine = self._scan_line
            for token in self._guarded(routine):
                self._emitted += 1
                yield token

    def _record_snapshot(self) -> None:
        """Snapshot the first step at each physical line start.

        Steps that begin mid-line (after a zero-width INDENT) or at an
        offset already recorded (after a DEDENT) are not resume points.
        """
        cursor = self._cursor
        if cursor.column != 0:
            return
        if self.snapshots and self.snapshots[-1].offset == cursor.offset:
            return
        self.snapshots.append(
            LineSnapshot(
                offset=cursor.offset,
                token_index=self._emitted,
                state=self._scanner.serialize(),
                expect_block=self._expect_block,
            )
        )

    def _guarded(self,routine: Callable[[], Iterator[Token]]) -> Iterator[Token]:
        """Run one line routine, recovering from ParseError when not strict."""
        if self._strict:
            yield from routine()
            return
        try:
            yield from routine()
        except ParseError as error:
            logger.warning("%s", error)
            self.errors.append(error)
            self._recover()

    def _recover(self) -> None:
        """Discard the rest of the physical line, keeping its newline."""
        cursor = self._cursor
        while cursor.lookahead != "\n" and not cursor.eof():
            cursor.advance(skip=True)
        self._expect_block = False
        logger.debug("Resuming at %d:%d", cursor.position.lineno, cursor.column + 1)

    # =========================================================================
    # Line routines
    # =========================================================================

    def _scan_line(self) -> Iterator[Token]:
        """Top-level line: blank line, comment, or process definition."""
        valid = _LINE_START_AFTER_DEFINITION if self._expect_block else _LINE_START
        self._expect_block = False

        token = self._scanner.scan(self._cursor, valid)
        if token is not None:
            yield token
            return

        self._skip_spaces()
        char = self._cursor.lookahead
        if not char:
            return
        if char == "\n":
            yield from self._expect_line_end()
        elif char == "#":
            yield self._literal_match(_COMMENT, TokenType.COMMENT)
            yield from self._expect_line_end()
        else:
            yield from self._scan_definition()

    def _scan_block_line(self) -> Iterator[Token]:
        """One line inside an indented block, or the DEDENT that closes it."""
        token = self._scanner.scan(self._cursor, _BLOCK_LINE)
        if token is None:
            # Whitespace-only line: the block stays open
            self._skip_spaces()
            token = self._scanner.scan(self._cursor, _BLOCK_LINE)
            if token is None:
                raise self._error("unexpected input in command block")

        yield token
        if token.type is TokenType.MULTILINE_COMMAND_TEXT:
            yield from self._expect_line_end()

    def _scan_definition(self) -> Iterator[Token]:
        name = self._literal_match(_PROCESS_NAME, TokenType.PROCESS_NAME)
        if name is None:
            raise self._error("expected process name")
        yield name
        yield from self._scan_declaration_items()
        yield from self._scan_execution()
        self._expect_block = True

    def _scan_declaration_items(self) -> Iterator[Token]:
        """Options, globs and exclusions up to and including the ':'."""
        cursor = self._cursor
        excluding = False
        while True:
            self._skip_spaces()
            char = cursor.lookahead

            if char in QUOTE_CHARS:
                yield self._quoted_string()
                excluding = False
                continue

            if excluding:
                token = self._scanner.scan(cursor, _EXCLUSION)
                if token is None:
                    raise self._error("expected pattern after '!'")
                yield token
                excluding = token.type is TokenType.LINE_CONTINUATION
                continue

            if char == ":":
                yield self._literal(TokenType.COLON, 1)
                return
            if char == "!":
                yield self._literal(TokenType.BANG, 1)
                excluding = True
                continue

            token = self._scanner.scan(cursor, _DECLARATION)
            if token is None:
                raise self._error("expected ':' after declaration")
            yield token
            if token.type is TokenType.OPTION_KEY:
                yield self._literal(TokenType.EQUALS, 1)
                yield self._option_value()

    def _scan_execution(self) -> Iterator[Token]:
        """Env assignments, then the command, through the line's NEWLINE.

        Assignments may continue past a line continuation until the first
        COMMAND_TEXT; after it everything is command.
        """
        cursor = self._cursor
        in_command = False
        while True:
            self._skip_spaces()
            if not in_command:
                key = self._literal_match(_ENV_KEY, TokenType.ENV_KEY)
                if key is not None:
                    yield key
                    yield self._literal(TokenType.EQUALS, 1)
                    yield self._env_value()
                    continue

            token = self._scanner.scan(cursor, _EXECUTION)
            if token is None:
                if cursor.eof():
                    return
                raise self._error("unexpected input after command")
            yield token
            if token.type is TokenType.NEWLINE:
                return
            if token.type is TokenType.COMMAND_TEXT:
                in_command = True

    def _expect_line_end(self) -> Iterator[Token]:
        """NEWLINE, or nothing at end of input."""
        token = self._scanner.scan(self._cursor, _LINE_END)
        if token is not None:
            yield token
        elif not self._cursor.eof():
            raise self._error("expected end of line")

    # =========================================================================
    # Grammar literals
    # =========================================================================

    def _option_value(self) -> Token:
        self._skip_spaces()
        if self._cursor.lookahead in QUOTE_CHARS:
            return self._quoted_string()
        token = self._literal_match(_OPTION_VALUE, TokenType.OPTION_VALUE)
        if token is None:
            raise self._error("expected option value")
        return token

    def _env_value(self) -> Token:
        self._skip_spaces()
        if self._cursor.lookahead in QUOTE_CHARS:
            return self._quoted_string()
        token = self._literal_match(_ENV_VALUE, TokenType.ENV_VALUE)
        if token is None:
            raise self._error("expected environment value")
        return token

    def _quoted_string(self) -> Token:
        pattern = _SINGLE_QUOTED if self._cursor.lookahead == "'" else _DOUBLE_QUOTED
        token = self._literal_match(pattern, TokenType.QUOTED_STRING)
        if token is None:
            raise self._error("unterminated quoted string")
        return token

    def _literal_match(self, pattern: re.Pattern[str], token_type: TokenType) -> Token | None:
        match = pattern.match(self._cursor.source, self._cursor.offset)
        if match is None or not match.group():
            return None
        return self._literal(token_type, len(match.group()))

    def _literal(self, token_type: TokenType, length: int) -> Token:
        cursor = self._cursor
        cursor.begin_token()
        for _ in range(length):
            cursor.advance()
        return cursor.commit(token_type)

    def _skip_spaces(self) -> None:
        self._cursor.consume_while(HORIZONTAL_WHITESPACE)

    def _error(self, message: str) -> ParseError:
        position = self._cursor.position
        return ParseError(
            message,
            lineno=position.lineno,
            col_offset=position.column + 1,
            source_file=self._cursor.source_file,
        )


def tokenize(
    source: str,
    *,
    source_file: str | None = None,
    resume: LineSnapshot | None = None,
) -> list[Token]:
    """Tokenize a Procfile into scanner and grammar-literal tokens.

    Args:
        source: Procfile source text
        source_file: Optional source file path for locations and errors
        resume: Restart from a snapshot of an earlier TokenStream

    Returns:
        List of tokens in source order.

    Raises:
        ParseError: On unexpected input, when the active ScanConfig is strict.
    """
    return list(TokenStream(source, source_file=source_file, resume=resume))
