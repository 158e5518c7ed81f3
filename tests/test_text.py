"""Tests for the WKT tokenizer."""

import io
import math

import pytest
from sf_wkt import TextReader, WKTParseError


class TestTokens:
    def test_punctuation_splits_tokens(self):
        reader = TextReader("POINT Z(1 2,3)")
        tokens = []
        while reader.peek_token() is not None:
            tokens.append(reader.read_token())
        assert tokens == ["POINT", "Z", "(", "1", "2", ",", "3", ")"]

    def test_whitespace_is_insignificant(self):
        reader = TextReader("\n\tLINESTRING   EMPTY  \n")
        assert reader.read_token() == "LINESTRING"
        assert reader.read_token() == "EMPTY"
        assert reader.peek_token() is None

    def test_peek_does_not_consume(self):
        reader = TextReader("POINT (1 2)")
        assert reader.peek_token() == "POINT"
        assert reader.peek_token() == "POINT"
        assert reader.read_token() == "POINT"
        assert reader.peek_token() == "("

    def test_read_past_end(self):
        reader = TextReader("")
        assert reader.peek_token() is None
        with pytest.raises(WKTParseError, match="Unexpected end of text"):
            reader.read_token()

    def test_stream_input(self):
        reader = TextReader(io.StringIO("POINT (1 2)"))
        assert reader.read_token() == "POINT"

    def test_context_manager_closes(self):
        with TextReader("POINT (1 2)") as reader:
            assert reader.read_token() == "POINT"
        assert reader.peek_token() is None


class TestNumbers:
    @pytest.mark.parametrize(
        "token,expected",
        [
            ("1", 1.0),
            ("-2.5", -2.5),
            ("+3.", 3.0),
            (".5", 0.5),
            ("1e3", 1000.0),
            ("-1.5E-2", -0.015),
            ("Infinity", math.inf),
            ("-Infinity", -math.inf),
            ("inf", math.inf),
        ],
    )
    def test_read_double(self, token, expected):
        assert TextReader(token).read_double() == expected

    def test_read_nan(self):
        assert math.isnan(TextReader("NaN").read_double())
        assert math.isnan(TextReader("nan").read_double())

    def test_full_precision(self):
        assert TextReader("0.30000000000000004").read_double() == 0.1 + 0.2

    @pytest.mark.parametrize("token", ["abc", "1_000", "0x10", "--1", "1e"])
    def test_invalid_number(self, token):
        with pytest.raises(WKTParseError, match="Invalid number"):
            TextReader(token).read_double()

    def test_invalid_number_details(self):
        with pytest.raises(WKTParseError) as exc_info:
            TextReader("abc").read_double()
        assert exc_info.value.token == "abc"
        assert exc_info.value.expected == ("number",)
