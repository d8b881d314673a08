"""External scanner for Procfile grammars.

The grammar asks, at each step, whether any of a set of token kinds can be
read at the current position. The scanner tries its classifiers in a fixed
priority order and commits the first token one of them accepts, or
declines. A decline is a normal answer: it lets the grammar's own literal
matching proceed.

Priority (load-bearing, not configurable):
    1. line continuation
    2. newline
    3. dedent          (column 0, or end of input)
    4. indent          (column 0)
    5. option key / bare glob
    6. inline command text
    7. block command text

Thread Safety:
A Scanner owns its ScannerState and belongs to one parse session. Nothing
is shared between instances.

"""

from __future__ import annotations

from collections.abc import Callable, Container

from procscan.config import get_scan_config
from procscan.cursor import Cursor
from procscan.scanner.classifiers import (
    CommandClassifierMixin,
    IndentClassifierMixin,
    LineContinuationClassifierMixin,
    NewlineClassifierMixin,
    OptionGlobClassifierMixin,
)
from procscan.state import ScannerState, deserialize_state, serialize_state
from procscan.tokens import Token, TokenType
from procscan.utils.logger import get_logger, trace_token

logger = get_logger(__name__)

Classifier = Callable[[Cursor, Container[TokenType]], Token | None]


class Scanner(
    LineContinuationClassifierMixin,
    NewlineClassifierMixin,
    IndentClassifierMixin,
    OptionGlobClassifierMixin,
    CommandClassifierMixin,
):
    """Stateful external scanner.

    Usage:
            >>> from procscan.cursor import StringCursor
            >>> scanner = Scanner()
            >>> cursor = StringCursor("web: node app.js\\n", offset=4)
            >>> scanner.scan(cursor, {TokenType.COMMAND_TEXT})
            Token(COMMAND_TEXT, 'node app.js', 1:6)

    """

    __slots__ = ("_state", "_classifiers")

    def __init__(self, state: ScannerState | None = None) -> None:
        """Initialize scanner.

        Args:
            state: Initial state; a fresh not-in-block state if omitted
        """
        self._state = state if state is not None else ScannerState()
        self._classifiers: tuple[Classifier, ...] = (
            self._try_scan_line_continuation,
            self._try_scan_newline,
            self._try_scan_dedent,
            self._try_scan_indent,
            self._try_scan_option_or_glob,
            self._try_scan_command_text,
            self._try_scan_multiline_command_text,
        )

    @property
    def state(self) -> ScannerState:
        return self._state

    def scan(self, cursor: Cursor, valid: Container[TokenType]) -> Token | None:
        """Read at most one token at the cursor.

        Args:
            cursor: Host cursor positioned where the grammar stopped
            valid: Token kinds acceptable at this grammar position

        Returns:
            The committed token, or None if no acceptable kind matches. On
            None the cursor is exactly where it was.
        """
        cursor.begin_token()
        for classify in self._classifiers:
            checkpoint = cursor.checkpoint()
            token = classify(cursor, valid)
            if token is not None:
                return token
            cursor.rewind(checkpoint)
        return None

    def _emit(self, cursor: Cursor, token_type: TokenType) -> Token:
        token = cursor.commit(token_type)
        if get_scan_config().trace:
            trace_token(logger, token, self._state)
        return token

    # =========================================================================
    # State persistence
    # =========================================================================

    def serialize(self) -> bytes:
        """Snapshot state for a later incremental reparse."""
        return serialize_state(self._state)

    def deserialize(self, buffer: bytes | bytearray | memoryview) -> None:
        """Restore state from serialize(); short buffers reset to default."""
        restored = deserialize_state(buffer)
        self._state.in_block = restored.in_block
        self._state.block_indent = restored.block_indent
