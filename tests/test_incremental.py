"""Tests for resuming a token stream from a line snapshot."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from procscan import LineSnapshot, ScanConfig, TokenStream, scan_config_context, tokenize
from procscan.state import STATE_SIZE

SOURCES = [
    "web: node app.js\nworker: bin/worker\n",
    "web:\n  echo one\n  echo two\nnext: run\n",
    "build:\n    make\n\n    make all\n  web: x\n",
    "a ready=1 *.log !tmp/*: x \\\n  y\nb:\n\tone\n",
    "# comment\nweb: PORT=1 run\n\nw:\n  x",
    "web: FOO=1 \\\nBAR=2 run\nw:\n  x\n",
]


def snapshots_for(source: str) -> tuple[list, list[LineSnapshot]]:
    stream = TokenStream(source)
    return list(stream), stream.snapshots


class TestResume:
    """Resuming from a snapshot reproduces the rest of a full run."""

    @pytest.mark.parametrize("source", SOURCES)
    def test_every_snapshot(self, source: str) -> None:
        full, snapshots = snapshots_for(source)

        assert snapshots
        for snapshot in snapshots:
            assert tokenize(source, resume=snapshot) == full[snapshot.token_index :]

    def test_snapshot_inside_block_carries_state(self) -> None:
        source = "web:\n  echo one\n  echo two\n"
        _, snapshots = snapshots_for(source)
        inside = [s for s in snapshots if s.state[0] == 1]

        assert inside
        assert all(s.state == b"\x01\x02\x00\x00\x00" for s in inside)

    def test_expect_block_recorded(self) -> None:
        _, snapshots = snapshots_for("web:\n  x\n")
        assert snapshots[1].offset == 5
        assert snapshots[1].expect_block is True

    def test_stale_state_is_tolerated(self) -> None:
        """An undersized state buffer resumes as if outside any block."""
        stale = LineSnapshot(offset=0, token_index=0, state=b"\x01", expect_block=False)
        assert tokenize("web: x\n", resume=stale) == tokenize("web: x\n")

    def test_snapshot_state_size(self) -> None:
        _, snapshots = snapshots_for(SOURCES[1])
        assert {len(s.state) for s in snapshots} == {STATE_SIZE}

    @given(st.text(alphabet="ab: \t\n\\=!*#", max_size=60))
    @settings(max_examples=100)
    def test_resume_matches_full_run(self, source: str) -> None:
        with scan_config_context(ScanConfig(strict=False)):
            full, snapshots = snapshots_for(source)
            for snapshot in snapshots:
                assert tokenize(source, resume=snapshot) == full[snapshot.token_index :]

    @given(st.text(alphabet="ab: \t\n\\=!*#", max_size=60))
    @settings(max_examples=100)
    def test_snapshots_are_distinct_line_starts(self, source: str) -> None:
        with scan_config_context(ScanConfig(strict=False)):
            _, snapshots = snapshots_for(source)
        offsets = [s.offset for s in snapshots]

        assert offsets == sorted(set(offsets))
        assert all(offset == 0 or source[offset - 1] == "\n" for offset in offsets)
