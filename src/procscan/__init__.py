"""
procscan: external scanner for Procfile grammars

The lexical core behind a parser for indentation-sensitive process
definitions: process declarations with options and glob patterns, followed by
an inline command or an indented block of commands.

    web: node app.js
    worker ready=5432 *.log !vendor/**: bin/worker
    build:
      make deps
      make all

The scanner resolves what a context-free grammar cannot: block indentation,
backslash line splicing, and whether a bare word is an option key or a glob.

Quick Start:
    >>> from procscan import tokenize
    >>> [t.value for t in tokenize("worker ready=5432 *.log: run\\n")]
    ['worker', 'ready', '=', '5432', '*.log', ':', 'run', '\\n']

    >>> # Drive the scanner directly from your own grammar host
    >>> from procscan import Scanner, StringCursor, TokenType
    >>> scanner = Scanner()
    >>> cursor = StringCursor("build: make\\n", offset=6)
    >>> scanner.scan(cursor, {TokenType.COMMAND_TEXT}).value
    'make'

Installation:
    pip install procscan             # zero runtime dependencies
"""

from procscan.config import (
    ScanConfig,
    get_scan_config,
    reset_scan_config,
    scan_config_context,
    set_scan_config,
)
from procscan.cursor import Cursor, StringCursor
from procscan.errors import ParseError, ProcscanError
from procscan.location import SourceLocation
from procscan.scanner import Scanner
from procscan.state import STATE_SIZE, ScannerState, deserialize_state, serialize_state
from procscan.stream import LineSnapshot, TokenStream, tokenize
from procscan.tokens import EXTERNAL_TOKEN_TYPES, Token, TokenType

__version__ = "0.1.0"

__all__ = [
    "EXTERNAL_TOKEN_TYPES",
    "STATE_SIZE",
    "Cursor",
    "LineSnapshot",
    "ParseError",
    "ProcscanError",
    "ScanConfig",
    "Scanner",
    "ScannerState",
    "SourceLocation",
    "StringCursor",
    "Token",
    "TokenStream",
    "TokenType",
    "__version__",
    "deserialize_state",
    "get_scan_config",
    "reset_scan_config",
    "scan_config_context",
    "serialize_state",
    "set_scan_config",
    "tokenize",
]
