"""JSON token dumps consumed by the CLI and the MCP tools."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .semantic_tokens import AbsoluteToken, SemanticTokenLegend, TokenRange

# File extension -> LSP languageId, used when a dump does not name its language.
_EXTENSION_LANGUAGE_IDS = {
    ".c": "c",
    ".h": "c",
    ".cc": "cpp",
    ".cpp": "cpp",
    ".cxx": "cpp",
    ".hpp": "cpp",
    ".hh": "cpp",
    ".go": "go",
    ".java": "java",
    ".js": "javascript",
    ".jsx": "javascriptreact",
    ".py": "python",
    ".pyi": "python",
    ".rs": "rust",
    ".ts": "typescript",
    ".tsx": "typescriptreact",
}


@dataclass(frozen=True)
class TokenDump:
    """Semantic token payload captured from an analysis service."""

    data: list[int]
    legend: SemanticTokenLegend
    language_id: str


def language_id_for_path(path: str | Path) -> str:
    """Infer an LSP languageId from a file extension ('' when unknown)."""
    return _EXTENSION_LANGUAGE_IDS.get(Path(path).suffix.lower(), "")


def parse_legend(payload: dict[str, Any]) -> SemanticTokenLegend:
    """Build a legend from ``{"tokenTypes": [...], "tokenModifiers": [...]}``."""
    if not isinstance(payload, dict) or "tokenTypes" not in payload:
        raise ValueError("Legend must be an object with a 'tokenTypes' list")
    return SemanticTokenLegend(
        token_types=tuple(str(t) for t in payload["tokenTypes"]),
        token_modifiers=tuple(str(m) for m in payload.get("tokenModifiers", ())),
    )


def load_token_dump(payload: dict[str, Any], default_language_id: str = "") -> TokenDump:
    """Parse a decoded JSON token dump."""
    if not isinstance(payload, dict):
        raise ValueError("Token dump must be a JSON object")
    if "legend" not in payload:
        raise ValueError("Token dump is missing 'legend'")
    if "data" not in payload:
        raise ValueError("Token dump is missing 'data'")
    data = [int(v) for v in payload["data"]]
    return TokenDump(
        data=data,
        legend=parse_legend(payload["legend"]),
        language_id=str(payload.get("languageId") or default_language_id),
    )


def read_token_dump(path: str | Path, default_language_id: str = "") -> TokenDump:
    """Read and parse a token dump file."""
    return load_token_dump(json.loads(Path(path).read_text()), default_language_id)


def load_absolute_tokens(payload: dict[str, Any]) -> tuple[SemanticTokenLegend, list[AbsoluteToken]]:
    """Parse ``{"legend": ..., "tokens": [...]}`` for the encoder."""
    if not isinstance(payload, dict) or "legend" not in payload:
        raise ValueError("Token list is missing 'legend'")
    tokens = []
    for item in payload.get("tokens", []):
        modifiers = item.get("tokenModifiers", [])
        if not isinstance(modifiers, list):
            raise ValueError(f"'tokenModifiers' must be a list, got {modifiers!r}")
        tokens.append(
            AbsoluteToken(
                line=int(item["line"]),
                start_char=int(item["startChar"]),
                length=int(item["length"]),
                token_type=str(item["tokenType"]),
                modifiers=frozenset(str(m) for m in modifiers),
            )
        )
    return parse_legend(payload["legend"]), tokens


def ranges_to_json(groups: dict[str, list[TokenRange]]) -> dict[str, Any]:
    """Serialize a name -> ranges grouping as ``{"names": {name: [[l, s, e], ...]}}``."""
    return {
        "names": {
            name: [[r.line, r.start_char, r.end_char] for r in ranges]
            for name, ranges in groups.items()
        }
    }
