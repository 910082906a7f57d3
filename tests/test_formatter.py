"""Tests for the hex dump formatter."""

import pytest

from hexview.core.exceptions import InvalidLengthError
from hexview.core.formatter import (
    ASCII_OFFSET,
    MAX_BY_LINE,
    ROW_WIDTH,
    CancellationToken,
    extract_hex,
    extract_hex_and_split,
    format_buffer,
    format_lines,
    format_plain,
)
from hexview.utils.hex_utils import bytes_to_printable, concat_raw, hex_to_bytes

from conftest import CountdownToken


def expected_ascii(raw):
    text = bytes_to_printable(raw[:8])
    if len(raw) > 8:
        text += " " + bytes_to_printable(raw[8:])
    return text


class TestFormatBuffer:
    """Tests for format_buffer layout."""

    def test_full_row(self, alphabet):
        lines = format_buffer(alphabet)

        assert len(lines) == 1
        assert lines[0].text == "41 42 43 44 45 46 47 48  49 4a 4b 4c 4d 4e 4f 50  ABCDEFGH IJKLMNOP"
        assert lines[0].raw == alphabet
        assert lines[0].updated is False

    def test_full_row_length(self, alphabet):
        assert len(format_buffer(alphabet)[0].text) == MAX_BY_LINE == 67

    def test_short_row(self):
        lines = format_buffer(b"hello")

        assert lines[0].text == "68 65 6c 6c 6f" + " " * 36 + "hello"
        assert lines[0].raw == b"hello"

    def test_row_ending_at_midpoint(self):
        lines = format_buffer(b"ABCDEFGH")

        assert lines[0].text == "41 42 43 44 45 46 47 48" + " " * 27 + "ABCDEFGH"

    def test_row_past_midpoint(self):
        lines = format_buffer(b"ABCDEFGHIJ")

        assert lines[0].text == "41 42 43 44 45 46 47 48  49 4a" + " " * 20 + "ABCDEFGH IJ"

    def test_single_byte_after_full_row(self, alphabet):
        lines = format_buffer(alphabet + b"Q")

        assert len(lines) == 2
        assert lines[1].text == "51" + " " * 48 + "Q"

    def test_final_row_ascii_trimmed(self):
        lines = format_buffer(b"ab ")

        assert lines[0].text == "61 62 20" + " " * 42 + "ab"

    def test_final_row_leading_space_trimmed(self):
        lines = format_buffer(b" a")

        assert lines[0].text[ASCII_OFFSET:] == "a"

    def test_full_row_ascii_not_trimmed(self):
        lines = format_buffer(b" " + bytes(range(0x41, 0x50)))

        assert lines[0].text[ASCII_OFFSET:] == " ABCDEFG HIJKLMNO"

    def test_empty_buffer(self):
        assert format_buffer(b"") == []

    def test_length_limits_input(self, sample_data):
        lines = format_buffer(sample_data, 20)

        assert concat_raw(lines) == sample_data[:20]

    def test_length_too_big(self):
        with pytest.raises(InvalidLengthError):
            format_buffer(b"abc", 4)

    def test_invalid_length_is_value_error(self):
        with pytest.raises(ValueError):
            format_buffer(b"", 1)

    def test_format_lines_recovers(self):
        assert format_lines(b"") == []

    def test_idempotent(self, sample_data):
        assert format_buffer(sample_data) == format_buffer(sample_data)


class TestLayoutProperties:
    """Layout invariants over many buffer sizes."""

    @pytest.mark.parametrize("size", [0, 1, 7, 8, 9, 15, 16, 17, 24, 31, 32, 33, 100, 256])
    def test_round_trip(self, size):
        data = bytes((i * 37) % 256 for i in range(size))

        assert concat_raw(format_buffer(data)) == data

    @pytest.mark.parametrize("size", range(1, 2 * ROW_WIDTH + 1))
    def test_ascii_column_alignment(self, size):
        data = bytes(range(0x20, 0x20 + size))

        for line in format_buffer(data):
            assert line.text[ASCII_OFFSET - 2:ASCII_OFFSET] == "  "
            ascii_text = expected_ascii(line.raw)
            if len(line.raw) < ROW_WIDTH:
                ascii_text = ascii_text.strip(" ")
            assert line.text[ASCII_OFFSET:] == ascii_text

    def test_full_rows_decode_back(self):
        data = bytes(range(256))

        for line in format_buffer(data):
            left, right = extract_hex_and_split(line.text)
            assert len(line.text) == MAX_BY_LINE
            assert hex_to_bytes((left + right).replace(" ", "")) == line.raw


class TestCancellation:
    """Tests for cooperative cancellation."""

    def test_cancelled_before_start(self, sample_data):
        token = CancellationToken()
        token.cancel()

        assert format_buffer(sample_data, cancel=token) == []

    def test_cancel_keeps_completed_rows_only(self):
        data = bytes(40)
        token = CountdownToken(20)

        lines = format_buffer(data, cancel=token)

        assert len(lines) == 1
        assert lines[0].raw == data[:16]

    def test_no_partial_row_when_cancelled(self):
        token = CountdownToken(3)

        assert format_buffer(b"abc", cancel=token) == []

    def test_token_reset(self):
        token = CancellationToken()
        token.cancel()
        token.reset()

        assert not token.is_cancelled()
        assert len(format_buffer(b"abc", cancel=token)) == 1


class TestExtractHex:
    """Tests for hex field extraction."""

    def test_split_full_row(self, alphabet):
        text = format_buffer(alphabet)[0].text

        assert extract_hex_and_split(text) == ("41 42 43 44 45 46 47 48", "49 4a 4b 4c 4d 4e 4f 50")

    def test_extract_full_row(self, alphabet):
        text = format_buffer(alphabet)[0].text

        assert extract_hex(text) == "41 42 43 44 45 46 47 48 49 4a 4b 4c 4d 4e 4f 50"

    def test_extract_short_row(self):
        text = format_buffer(b"hello")[0].text

        assert extract_hex_and_split(text) == ("68 65 6c 6c 6f", "")
        assert extract_hex(text) == "68 65 6c 6c 6f"


class TestFormatPlain:
    """Tests for the plain text view."""

    def test_chunks(self):
        lines = format_plain(b"a" * 150)

        assert [len(line) for line in lines] == [MAX_BY_LINE, MAX_BY_LINE, 16]

    def test_one_char_per_byte(self):
        assert format_plain(b"hi\xe9") == ["hi\xe9"]

    def test_cancelled(self):
        token = CancellationToken()
        token.cancel()

        assert format_plain(b"abc", token) == []
