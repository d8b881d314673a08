"""Token classifiers for the procscan scanner.

Each classifier is a mixin method ``_try_scan_*(cursor, valid)`` that either
commits exactly one token or returns None. Classifiers only mutate scanner
state when they succeed; the dispatcher rewinds the cursor after a decline.
"""

from procscan.scanner.classifiers.command import CommandClassifierMixin
from procscan.scanner.classifiers.continuation import (
    LineContinuationClassifierMixin,
)
from procscan.scanner.classifiers.indent import IndentClassifierMixin
from procscan.scanner.classifiers.newline import NewlineClassifierMixin
from procscan.scanner.classifiers.option import OptionGlobClassifierMixin

__all__ = [
    "CommandClassifierMixin",
    "IndentClassifierMixin",
    "LineContinuationClassifierMixin",
    "NewlineClassifierMixin",
    "OptionGlobClassifierMixin",
]
