"""Tests for hex conversion helpers."""

import pytest

from hexview.core.formatter import CancellationToken, LineRecord
from hexview.utils.hex_utils import (
    abbreviate,
    bytes_to_printable,
    concat_raw,
    hex_to_bytes,
    hex_to_printable,
    human_size,
)


class TestHexToBytes:
    """Tests for hex_to_bytes."""

    def test_hello(self):
        assert hex_to_bytes("68656c6c6f") == b"hello"

    def test_case_insensitive(self):
        assert hex_to_bytes("DEADbeef") == b"\xde\xad\xbe\xef"

    def test_empty(self):
        assert hex_to_bytes("") == b""

    def test_odd_length_adds_zero_byte(self):
        assert hex_to_bytes("abc") == b"\xab\x00"

    def test_malformed_pair_is_zero(self):
        assert hex_to_bytes("zz12") == b"\x00\x12"


class TestPrintable:
    """Tests for printable ASCII mapping."""

    def test_printable_bytes_kept(self):
        assert bytes_to_printable(b"hello") == "hello"

    def test_boundaries(self):
        assert bytes_to_printable(b"\x1f\x20\x7e\x7f") == ". ~."

    def test_high_bytes(self):
        assert bytes_to_printable(b"\x80\xff\x00") == "..."

    def test_hex_to_printable_ignores_spaces(self):
        assert hex_to_printable("68 65 6c  6c 6f") == "hello"

    def test_hex_to_printable_drops_odd_digit(self):
        assert hex_to_printable("41424") == "AB"


class TestHumanSize:
    """Tests for human_size."""

    @pytest.mark.parametrize("size, expected", [
        (0, "0 o"),
        (500, "500 o"),
        (999, "999 o"),
        (1000, "0.97 Ko"),
        (1536, "1.5 Ko"),
        (1500, "1.46 Ko"),
        (2048, "2 Ko"),
        (3 * 1024 * 1024, "3 Mo"),
        (5 * 1024 ** 3, "5 Go"),
    ])
    def test_sizes(self, size, expected):
        assert human_size(size) == expected

    def test_rounds_down(self):
        # 1023.999 / 1024 would round up to 1 with half-up rounding
        assert human_size(1048575) == "0.99 Mo"


class TestConcatRaw:
    """Tests for concat_raw and abbreviate."""

    def test_concat_in_order(self):
        records = [LineRecord("a", b"\x01\x02"), LineRecord("b", b"\x03")]
        assert concat_raw(records) == b"\x01\x02\x03"

    def test_concat_cancelled(self):
        token = CancellationToken()
        token.cancel()
        assert concat_raw([LineRecord("a", b"\x01")], token) == b""

    def test_abbreviate(self):
        assert abbreviate("short", 10) == "short"
        assert abbreviate("a long filename", 6) == "a long..."
