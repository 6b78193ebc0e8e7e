"""tokenhue - group LSP semantic tokens by identifier name for consistent highlighting."""

__version__ = "0.1.0"

from .classify import ClassificationState, classify_tokens, ranges_by_name, reconcile  # noqa: E402
from .config import HighlightOptions  # noqa: E402
from .semantic_tokens import (  # noqa: E402
    SemanticToken,
    SemanticTokenLegend,
    TokenRange,
    decode_semantic_tokens,
    encode_semantic_tokens,
)
from .source import FileSource, LinesSource, SourceUnavailable  # noqa: E402

__all__ = [
    "ClassificationState",
    "FileSource",
    "HighlightOptions",
    "LinesSource",
    "SemanticToken",
    "SemanticTokenLegend",
    "SourceUnavailable",
    "TokenRange",
    "classify_tokens",
    "decode_semantic_tokens",
    "encode_semantic_tokens",
    "ranges_by_name",
    "reconcile",
]
