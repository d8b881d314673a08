"""Stateful external scanner for Procfile grammars.

Architecture:
scanner/
├── __init__.py          # Re-exports Scanner
├── core.py              # Scanner class (mixin composition + dispatch)
└── classifiers/         # One mixin per token family
    ├── continuation.py  # LINE_CONTINUATION
    ├── newline.py       # NEWLINE
    ├── indent.py        # INDENT / DEDENT
    ├── option.py        # OPTION_KEY / BARE_GLOB
    └── command.py       # COMMAND_TEXT / MULTILINE_COMMAND_TEXT

Usage:
    >>> from procscan.cursor import StringCursor
    >>> from procscan.scanner import Scanner
    >>> from procscan.tokens import TokenType
    >>> cursor = StringCursor("worker ready=5432\\n", offset=6)
    >>> Scanner().scan(cursor, {TokenType.OPTION_KEY, TokenType.BARE_GLOB})
Token(OPTION_KEY, 'ready', 1:8)

"""

from procscan.scanner.core import Scanner

__all__ = ["Scanner"]
