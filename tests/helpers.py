"""Shared test utilities."""

from tokenhue.semantic_tokens import AbsoluteToken, SemanticTokenLegend, encode_semantic_tokens


def build_document(
    legend: SemanticTokenLegend,
    *tokens: tuple[int, int, str, str, set[str] | None],
) -> tuple[str, list[int]]:
    """Lay out ``(line, column, name, token_type, modifiers)`` tokens in a document.

    Returns the document text and its encoded semantic token data.
    """
    lines: dict[int, list[str]] = {}
    absolute = []
    for line, column, name, token_type, modifiers in tokens:
        chars = lines.setdefault(line, [])
        if len(chars) < column + len(name):
            chars.extend(" " * (column + len(name) - len(chars)))
        chars[column : column + len(name)] = name
        absolute.append(
            AbsoluteToken(line, column, len(name), token_type, frozenset(modifiers or ()))
        )

    last_line = max(lines, default=0)
    source = "\n".join("".join(lines.get(i, [])) for i in range(last_line + 1))
    return source, encode_semantic_tokens(absolute, legend)
