"""LSP semantic token decoding and encoding.

Decodes the flat integer array returned by ``textDocument/semanticTokens/full``
into structured token objects, resolving each token's text through a
caller-supplied accessor.  The inverse, :func:`encode_semantic_tokens`, builds
such an array from absolute positions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .source import SourceTextOf

logger = logging.getLogger(__name__)

RECORD_SIZE = 5


@dataclass(frozen=True)
class SemanticTokenLegend:
    """Server-advertised token type and modifier names."""

    token_types: tuple[str, ...]
    token_modifiers: tuple[str, ...]


@dataclass(frozen=True)
class TokenRange:
    """Single-line source span, 0-based with an exclusive end column."""

    line: int
    start_char: int
    end_char: int

    @property
    def start(self) -> tuple[int, int]:
        return (self.line, self.start_char)

    @property
    def end(self) -> tuple[int, int]:
        return (self.line, self.end_char)

    @property
    def length(self) -> int:
        return self.end_char - self.start_char

    def __str__(self) -> str:
        return f"{self.line}:{self.start_char}-{self.end_char}"


@dataclass(frozen=True)
class SemanticToken:
    """Single resolved semantic token with source text."""

    range: TokenRange
    token_type: str  # resolved name, e.g. "variable"
    modifiers: frozenset[str]  # e.g. {"declaration", "readonly"}
    text: str  # actual source text


def decode_modifiers(modifier_bits: int, legend: SemanticTokenLegend) -> frozenset[str]:
    """Resolve a modifier bitmask into the set of modifier names it carries."""
    if not modifier_bits:
        return frozenset()
    return frozenset(
        name
        for bit_pos, name in enumerate(legend.token_modifiers)
        if modifier_bits & (1 << bit_pos)
    )


def decode_semantic_tokens(
    data: list[int],
    legend: SemanticTokenLegend,
    source_text_of: SourceTextOf,
) -> Iterator[SemanticToken]:
    """Decode the flat ``data`` array into resolved :class:`SemanticToken` objects.

    The LSP protocol encodes tokens as groups of five integers:
    ``(deltaLine, deltaStartChar, length, tokenTypeIndex, modifierBitmask)``.
    Running line/char state is maintained across groups: a token on the same
    line as its predecessor is offset from the predecessor's start, while the
    first token on a new line carries an absolute start column.

    *data* is trusted to be well formed (length divisible by five, indices
    within *legend*).  Errors from *source_text_of* propagate unchanged.
    """
    current_line = 0
    current_char = 0

    for i in range(0, len(data), RECORD_SIZE):
        delta_line, delta_start, length, type_index, modifier_bits = data[i : i + RECORD_SIZE]

        if delta_line == 0:
            current_char += delta_start
        else:
            current_char = delta_start
        current_line += delta_line

        token_range = TokenRange(current_line, current_char, current_char + length)
        yield SemanticToken(
            range=token_range,
            token_type=legend.token_types[type_index],
            modifiers=decode_modifiers(modifier_bits, legend),
            text=source_text_of(token_range),
        )


@dataclass(frozen=True)
class AbsoluteToken:
    """Token described by absolute position, the input to the encoder."""

    line: int
    start_char: int
    length: int
    token_type: str
    modifiers: frozenset[str] = frozenset()


def encode_semantic_tokens(
    tokens: Iterable[AbsoluteToken],
    legend: SemanticTokenLegend,
) -> list[int]:
    """Encode absolute tokens into the flat relative ``data`` array.

    Tokens are sorted by position first.  Raises :class:`ValueError` for a
    token type or modifier the legend does not list.
    """
    type_index = {name: i for i, name in enumerate(legend.token_types)}
    modifier_bit = {name: 1 << i for i, name in enumerate(legend.token_modifiers)}

    data: list[int] = []
    prev_line = 0
    prev_char = 0
    for token in sorted(tokens, key=lambda t: (t.line, t.start_char)):
        if token.token_type not in type_index:
            raise ValueError(f"Token type not in legend: {token.token_type!r}")
        bits = 0
        for modifier in token.modifiers:
            if modifier not in modifier_bit:
                raise ValueError(f"Token modifier not in legend: {modifier!r}")
            bits |= modifier_bit[modifier]

        delta_line = token.line - prev_line
        delta_start = token.start_char - prev_char if delta_line == 0 else token.start_char
        data.extend((delta_line, delta_start, token.length, type_index[token.token_type], bits))
        prev_line = token.line
        prev_char = token.start_char

    logger.debug("Encoded %d semantic tokens", len(data) // RECORD_SIZE)
    return data
