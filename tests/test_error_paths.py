"""Error-path and malformed input tests.

The scanner never raises; unexpected input surfaces from the reference host
as ParseError, or is recorded and skipped when the config is not strict.
"""

import logging

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from procscan import ScanConfig, TokenStream, scan_config_context, tokenize
from procscan.errors import ParseError, ProcscanError

# =========================================================================
# ParseError construction and formatting
# =========================================================================


class TestParseErrorFormatting:
    """Verify ParseError produces well-formatted messages."""

    def test_message_only(self) -> None:
        err = ParseError("unexpected token")
        assert str(err) == "unexpected token"
        assert err.lineno is None
        assert err.col_offset is None

    def test_with_line_and_column(self) -> None:
        err = ParseError("missing colon", lineno=10, col_offset=5)
        assert str(err) == "10:5 missing colon"

    def test_with_source_file(self) -> None:
        err = ParseError("bad", lineno=3, col_offset=1, source_file="Procfile")
        assert str(err) == "Procfile:3:1 bad"
        assert err.source_file == "Procfile"

    def test_hierarchy(self) -> None:
        assert issubclass(ParseError, ProcscanError)


# =========================================================================
# Strict mode
# =========================================================================


class TestStrict:
    """Default config raises on the first problem."""

    def test_missing_colon(self) -> None:
        with pytest.raises(ParseError, match="expected ':'") as info:
            tokenize("web run\n")
        assert (info.value.lineno, info.value.col_offset) == (1, 8)

    def test_bad_process_name(self) -> None:
        with pytest.raises(ParseError, match="expected process name"):
            tokenize("=web: run\n")

    def test_unterminated_quote(self) -> None:
        with pytest.raises(ParseError, match="unterminated"):
            tokenize('web "abc: run\n')

    def test_dangling_exclusion(self) -> None:
        with pytest.raises(ParseError, match="after '!'"):
            tokenize("web !: run\n")

    def test_missing_option_value(self) -> None:
        with pytest.raises(ParseError, match="option value"):
            tokenize("web ready=: run\n")

    def test_error_carries_source_file(self) -> None:
        with pytest.raises(ParseError) as info:
            tokenize("\n\nweb\n", source_file="Procfile.dev")
        assert str(info.value).startswith("Procfile.dev:3:4 ")


# =========================================================================
# Recovery
# =========================================================================


class TestRecovery:
    """strict=False records errors and resumes at the next line."""

    def test_skips_bad_line(self) -> None:
        with scan_config_context(ScanConfig(strict=False)):
            stream = TokenStream("=bad\nweb: run\n")
            tokens = list(stream)

        assert [t.type.name for t in tokens] == [
            "NEWLINE",
            "PROCESS_NAME",
            "COLON",
            "COMMAND_TEXT",
            "NEWLINE",
        ]
        assert len(stream.errors) == 1
        assert stream.errors[0].lineno == 1

    def test_tokens_before_error_are_kept(self) -> None:
        with scan_config_context(ScanConfig(strict=False)):
            stream = TokenStream("web run\nnext: x\n")
            values = [t.value for t in stream]

        assert values[:3] == ["web", "run", "\n"]
        assert values[3:] == ["next", ":", "x", "\n"]

    def test_error_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.WARNING, logger="procscan")
        with scan_config_context(ScanConfig(strict=False)):
            tokenize("web\n")

        warnings = [r for r in caplog.records if r.name == "procscan.stream"]
        assert len(warnings) == 1
        assert "expected ':'" in warnings[0].getMessage()

    def test_recovery_does_not_open_block(self) -> None:
        with scan_config_context(ScanConfig(strict=False)):
            names = [t.type.name for t in tokenize("web\n  x: y\n")]
        assert "INDENT" not in names

    @given(st.text(alphabet="ab_: \t\n\\=!*#'\"-.", max_size=80))
    @settings(max_examples=200)
    def test_always_terminates(self, source: str) -> None:
        """Any input is consumed to the end without raising."""
        with scan_config_context(ScanConfig(strict=False)):
            stream = TokenStream(source)
            tokens = list(stream)

        offsets = [t.span for t in tokens]
        assert offsets == sorted(offsets)
        assert all(start <= end for start, end in offsets)
