"""Utility modules for procscan.

Provides:
- logger: namespaced loggers and the scanner's token trace
"""

from procscan.utils.logger import get_logger, trace_token

__all__ = ["get_logger", "trace_token"]
