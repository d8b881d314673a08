"""Persistent scanner state and its wire layout.

The scanner carries exactly one piece of state between calls: whether an
indented command block is open and, if so, the width of its first line. A
host that reparses incrementally stores this state with the tokens it has
produced and hands it back later, so it must survive a round trip through
bytes.

Layout (5 bytes):
    byte 0      in_block flag (0 or 1)
    bytes 1-4   block_indent, unsigned 32-bit little-endian

Buffers shorter than 5 bytes, or whose flag disagrees with the width,
decode to the default state. A host may replay state captured before an
edit invalidated it; that is not an error.

Thread Safety:
ScannerState is mutable and owned by a single Scanner. Do not share it
between sessions.

"""

from __future__ import annotations

import struct
from dataclasses import dataclass

_LAYOUT = struct.Struct("<?I")

STATE_SIZE: int = _LAYOUT.size  # 5

_MAX_INDENT = 0xFFFFFFFF


@dataclass(slots=True)
class ScannerState:
    """Open-block flag plus the block's indentation width.

    Invariant: ``block_indent > 0`` if and only if ``in_block``.

    Attributes:
        in_block: True while an indented block is open
        block_indent: Raw whitespace count of the block's first line

    """

    in_block: bool = False
    block_indent: int = 0

    def open_block(self, indent: int) -> None:
        """Enter a block whose lines are indented by ``indent`` characters."""
        self.in_block = True
        self.block_indent = indent

    def close_block(self) -> None:
        """Leave the current block."""
        self.in_block = False
        self.block_indent = 0

    def copy(self) -> ScannerState:
        return ScannerState(self.in_block, self.block_indent)


def serialize_state(state: ScannerState) -> bytes:
    """Encode state into its fixed 5-byte layout.

    Args:
        state: State to encode

    Returns:
        Exactly STATE_SIZE bytes.
    """
    return _LAYOUT.pack(state.in_block, min(state.block_indent, _MAX_INDENT))


def deserialize_state(buffer: bytes | bytearray | memoryview) -> ScannerState:
    """Decode state produced by serialize_state.

    Extra trailing bytes are ignored. Undersized or inconsistent buffers
    yield the default (not-in-block) state.

    Args:
        buffer: Bytes previously returned by serialize_state

    Returns:
        A fresh ScannerState.
    """
    if len(buffer) < STATE_SIZE:
        return ScannerState()

    raw = bytes(buffer[:STATE_SIZE])
    in_block = raw[0] != 0
    (block_indent,) = struct.unpack_from("<I", raw, 1)

    if in_block != (block_indent > 0):
        return ScannerState()
    return ScannerState(in_block, block_indent)
