"""Tests for LSP semantic token decoding and encoding."""

from __future__ import annotations

import pytest

from tokenhue.semantic_tokens import (
    AbsoluteToken,
    SemanticTokenLegend,
    TokenRange,
    decode_modifiers,
    decode_semantic_tokens,
    encode_semantic_tokens,
)
from tokenhue.source import LinesSource, SourceUnavailable

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def protocol_legend() -> SemanticTokenLegend:
    """Legend from the LSP specification's encoding walkthrough."""
    return SemanticTokenLegend(
        token_types=("property", "type", "class"),
        token_modifiers=("private", "static"),
    )


@pytest.fixture()
def protocol_source() -> str:
    return "\n".join(
        [
            "",
            "",
            "     foo  Bars",
            "",
            "",
            "  Element",
        ]
    )


# ---------------------------------------------------------------------------
# Decoder tests
# ---------------------------------------------------------------------------


class TestDecodeSemanticTokens:
    def test_empty_data(self, protocol_legend):
        assert list(decode_semantic_tokens([], protocol_legend, LinesSource(""))) == []

    def test_protocol_example_positions(self, protocol_legend, protocol_source):
        data = [2, 5, 3, 0, 3, 0, 5, 4, 1, 0, 3, 2, 7, 2, 0]
        tokens = list(decode_semantic_tokens(data, protocol_legend, LinesSource(protocol_source)))

        assert [t.range for t in tokens] == [
            TokenRange(2, 5, 8),
            TokenRange(2, 10, 14),
            TokenRange(5, 2, 9),
        ]
        assert [t.token_type for t in tokens] == ["property", "type", "class"]
        assert [t.text for t in tokens] == ["foo", "Bars", "Element"]
        assert tokens[0].modifiers == frozenset({"private", "static"})
        assert tokens[1].modifiers == frozenset()

    def test_same_line_deltas_accumulate(self, protocol_legend):
        # Three tokens on one line, each offset from the previous start.
        data = [0, 0, 1, 0, 0, 0, 2, 1, 0, 0, 0, 2, 1, 0, 0]
        tokens = list(decode_semantic_tokens(data, protocol_legend, LinesSource("a b c")))
        assert [t.range.start_char for t in tokens] == [0, 2, 4]
        assert [t.text for t in tokens] == ["a", "b", "c"]

    def test_new_line_resets_column(self, protocol_legend):
        data = [0, 6, 3, 0, 0, 1, 1, 3, 0, 0]
        tokens = list(
            decode_semantic_tokens(data, protocol_legend, LinesSource("      abc\n xyz"))
        )
        assert tokens[1].range == TokenRange(1, 1, 4)
        assert tokens[1].text == "xyz"

    def test_range_accessors(self):
        token_range = TokenRange(3, 4, 9)
        assert token_range.start == (3, 4)
        assert token_range.end == (3, 9)
        assert token_range.length == 5
        assert str(token_range) == "3:4-9"

    def test_source_unavailable_propagates(self, protocol_legend):
        data = [0, 0, 3, 0, 0, 4, 0, 3, 0, 0]
        decoded = decode_semantic_tokens(data, protocol_legend, LinesSource("foo"))
        assert next(decoded).text == "foo"
        with pytest.raises(SourceUnavailable):
            next(decoded)

    def test_callback_receives_absolute_ranges(self, protocol_legend):
        seen: list[TokenRange] = []

        def text_of(token_range: TokenRange) -> str:
            seen.append(token_range)
            return "x" * token_range.length

        data = [1, 4, 2, 0, 0, 0, 3, 2, 0, 0]
        list(decode_semantic_tokens(data, protocol_legend, text_of))
        assert seen == [TokenRange(1, 4, 6), TokenRange(1, 7, 9)]


class TestDecodeModifiers:
    def test_zero_bits(self, protocol_legend):
        assert decode_modifiers(0, protocol_legend) == frozenset()

    def test_single_bit(self, protocol_legend):
        assert decode_modifiers(0b10, protocol_legend) == frozenset({"static"})

    def test_bits_beyond_legend_ignored(self, protocol_legend):
        assert decode_modifiers(0b101, protocol_legend) == frozenset({"private"})


# ---------------------------------------------------------------------------
# Encoder tests
# ---------------------------------------------------------------------------


class TestEncodeSemanticTokens:
    def test_protocol_example(self, protocol_legend):
        tokens = [
            AbsoluteToken(5, 2, 7, "class"),
            AbsoluteToken(2, 5, 3, "property", frozenset({"private", "static"})),
            AbsoluteToken(2, 10, 4, "type"),
        ]
        assert encode_semantic_tokens(tokens, protocol_legend) == [
            2, 5, 3, 0, 3,
            0, 5, 4, 1, 0,
            3, 2, 7, 2, 0,
        ]  # fmt: skip

    def test_empty(self, protocol_legend):
        assert encode_semantic_tokens([], protocol_legend) == []

    def test_unknown_type_rejected(self, protocol_legend):
        with pytest.raises(ValueError, match="type not in legend"):
            encode_semantic_tokens([AbsoluteToken(0, 0, 1, "macro")], protocol_legend)

    def test_unknown_modifier_rejected(self, protocol_legend):
        token = AbsoluteToken(0, 0, 1, "type", frozenset({"readonly"}))
        with pytest.raises(ValueError, match="modifier not in legend"):
            encode_semantic_tokens([token], protocol_legend)
