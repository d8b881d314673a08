"""Character sets for O(1) classification.

All sets are frozensets for O(1) membership testing and module-level
caching. End of input is represented by the empty string, which is never a
member of any set here.

Usage:
    from procscan.charsets import HORIZONTAL_WHITESPACE

    if char in HORIZONTAL_WHITESPACE:
        ...
"""

import string

# Indentation and separators. Tabs and spaces each count as one column.
HORIZONTAL_WHITESPACE: frozenset[str] = frozenset(" \t")

# Option keys: [A-Za-z_][A-Za-z0-9_]*
# ASCII only, no hyphen.
IDENTIFIER_START: frozenset[str] = frozenset(string.ascii_letters + "_")
IDENTIFIER_CHARS: frozenset[str] = IDENTIFIER_START | frozenset(string.digits)

# Characters a "plain identifier" glob may contain (process-name alphabet)
PLAIN_IDENTIFIER_CHARS: frozenset[str] = IDENTIFIER_CHARS | frozenset("-")

# Characters that terminate a bare glob. '!' starts an exclusion pattern.
GLOB_TERMINATORS: frozenset[str] = frozenset(" \t\n:!\0")

# Host-owned literals
QUOTE_CHARS: frozenset[str] = frozenset("'\"")


def is_glob_char(char: str) -> bool:
    """Check if char belongs to the bare-glob alphabet.

    Anything but whitespace, ':', '!', NUL and end of input.
    """
    return bool(char) and char not in GLOB_TERMINATORS


def is_plain_identifier(text: str) -> bool:
    """Check if text looks like a plain identifier (letters, digits, '_', '-')."""
    if not text or text[0] not in IDENTIFIER_START:
        return False
    return all(char in PLAIN_IDENTIFIER_CHARS for char in text)
