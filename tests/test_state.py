"""Tests for scanner state persistence."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from procscan.cursor import StringCursor
from procscan.scanner import Scanner
from procscan.state import STATE_SIZE, ScannerState, deserialize_state, serialize_state
from procscan.tokens import TokenType


class TestScannerState:
    """Open/close transitions."""

    def test_default(self) -> None:
        state = ScannerState()
        assert state.in_block is False
        assert state.block_indent == 0

    def test_open_and_close(self) -> None:
        state = ScannerState()
        state.open_block(4)
        assert state == ScannerState(True, 4)
        state.close_block()
        assert state == ScannerState()

    def test_copy_is_independent(self) -> None:
        state = ScannerState(True, 2)
        clone = state.copy()
        state.close_block()
        assert clone == ScannerState(True, 2)


class TestSerialization:
    """Fixed 5-byte layout."""

    def test_size(self) -> None:
        assert STATE_SIZE == 5
        assert len(serialize_state(ScannerState())) == 5

    def test_layout(self) -> None:
        assert serialize_state(ScannerState()) == b"\x00\x00\x00\x00\x00"
        assert serialize_state(ScannerState(True, 4)) == b"\x01\x04\x00\x00\x00"
        assert serialize_state(ScannerState(True, 0x01020304)) == b"\x01\x04\x03\x02\x01"

    def test_fresh_state_round_trip(self) -> None:
        assert deserialize_state(serialize_state(ScannerState())) == ScannerState()

    @given(st.integers(min_value=1, max_value=0xFFFFFFFF))
    def test_open_block_round_trip(self, indent: int) -> None:
        state = ScannerState(True, indent)
        assert deserialize_state(serialize_state(state)) == state

    @pytest.mark.parametrize("buffer", [b"", b"\x01", b"\x01\x02", b"\x01\x02\x00\x00"])
    def test_short_buffer_resets(self, buffer: bytes) -> None:
        assert deserialize_state(buffer) == ScannerState()

    @pytest.mark.parametrize("buffer", [b"\x01\x00\x00\x00\x00", b"\x00\x05\x00\x00\x00"])
    def test_inconsistent_buffer_resets(self, buffer: bytes) -> None:
        assert deserialize_state(buffer) == ScannerState()

    def test_trailing_bytes_ignored(self) -> None:
        assert deserialize_state(b"\x01\x02\x00\x00\x00junk") == ScannerState(True, 2)

    def test_buffer_types(self) -> None:
        raw = serialize_state(ScannerState(True, 3))
        assert deserialize_state(bytearray(raw)) == ScannerState(True, 3)
        assert deserialize_state(memoryview(raw)) == ScannerState(True, 3)


class TestScannerPersistence:
    """Scanner.serialize / Scanner.deserialize across sessions."""

    def test_state_survives_new_scanner(self) -> None:
        first = Scanner()
        first.scan(StringCursor("   make\n"), {TokenType.INDENT})
        saved = first.serialize()

        second = Scanner()
        second.deserialize(saved)
        assert second.state == ScannerState(True, 3)

    def test_restored_state_drives_dedent(self) -> None:
        scanner = Scanner()
        scanner.deserialize(serialize_state(ScannerState(True, 2)))
        token = scanner.scan(StringCursor("web: x\n"), {TokenType.DEDENT})

        assert token is not None
        assert token.type == TokenType.DEDENT

    def test_stale_buffer_resets_open_block(self) -> None:
        scanner = Scanner(ScannerState(True, 8))
        scanner.deserialize(b"\x01")
        assert scanner.state == ScannerState()
