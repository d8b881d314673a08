"""Logging for procscan.

All loggers live under the ``procscan`` namespace, so one level or handler
set on ``logging.getLogger("procscan")`` covers both the scanner's token
traces and the stream's recovery warnings. The package root carries a
NullHandler; nothing is printed unless the application configures logging.

Token traces are emitted only when ``ScanConfig.trace`` is set. The record
keeps its arguments, so handlers format lazily:

    COMMAND_TEXT 'node app.js' at 1:6 (in_block=False, block_indent=0)

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from procscan.state import ScannerState
    from procscan.tokens import Token

NAMESPACE = "procscan"

_TRACE_FORMAT = "%s %r at %d:%d (in_block=%s, block_indent=%d)"

logging.getLogger(NAMESPACE).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name`` inside the procscan namespace.

    Example:
        >>> get_logger("stream").name
        'procscan.stream'
        >>> get_logger("procscan.scanner.core").name
        'procscan.scanner.core'
    """
    if name != NAMESPACE and not name.startswith(NAMESPACE + "."):
        name = f"{NAMESPACE}.{name}"
    return logging.getLogger(name)


def trace_token(logger: logging.Logger, token: Token, state: ScannerState) -> None:
    """Log one emitted token with the scanner state after it, at DEBUG."""
    logger.debug(
        _TRACE_FORMAT,
        token.type.name,
        token.value,
        token.lineno,
        token.col,
        state.in_block,
        state.block_indent,
    )
