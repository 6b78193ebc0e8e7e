"""Tool implementations behind the MCP server."""

from __future__ import annotations

import json
import logging
from typing import Any

from . import __version__
from .classify import ranges_by_name
from .config import HighlightOptions
from .dump import ranges_to_json
from .language_policies import registered_languages
from .semantic_tokens import SemanticTokenLegend, decode_semantic_tokens
from .source import LinesSource, SourceUnavailable

logger = logging.getLogger(__name__)


class ToolResult:
    """Result from a tool invocation."""

    def __init__(self, text: str) -> None:
        self.text = text


def _legend_from_arguments(arguments: dict[str, Any]) -> SemanticTokenLegend:
    return SemanticTokenLegend(
        token_types=tuple(arguments["token_types"]),
        token_modifiers=tuple(arguments.get("token_modifiers", ())),
    )


class TokenHueTools:
    """Semantic token grouping tools.

    Highlight flags default to the environment configuration captured at
    construction and can be overridden per call.
    """

    def __init__(self, options: HighlightOptions | None = None) -> None:
        self.options = options if options is not None else HighlightOptions.from_env()

    def ranges_by_name(
        self,
        source: str,
        data: list[int],
        legend: SemanticTokenLegend,
        language_id: str | None = None,
        highlight_globals: bool | None = None,
        highlight_classes: bool | None = None,
    ) -> ToolResult:
        options = self.options.override(
            highlight_globals=highlight_globals,
            highlight_classes=highlight_classes,
        )
        groups = ranges_by_name(
            data,
            legend,
            LinesSource(source),
            highlight_globals=options.highlight_globals,
            highlight_classes=options.highlight_classes,
            language_id=language_id,
        )
        return ToolResult(json.dumps(ranges_to_json(groups), indent=2))

    def decode_tokens(self, source: str, data: list[int], legend: SemanticTokenLegend) -> ToolResult:
        tokens = [
            {
                "range": [t.range.line, t.range.start_char, t.range.end_char],
                "text": t.text,
                "type": t.token_type,
                "modifiers": sorted(t.modifiers),
            }
            for t in decode_semantic_tokens(data, legend, LinesSource(source))
        ]
        return ToolResult(json.dumps({"tokens": tokens}, indent=2))

    def status(self) -> ToolResult:
        return ToolResult(
            json.dumps(
                {
                    "version": __version__,
                    "highlight_globals": self.options.highlight_globals,
                    "highlight_classes": self.options.highlight_classes,
                    "language_policies": registered_languages(),
                },
                indent=2,
            )
        )

    def _call_tool_unlocked(self, name: str, arguments: dict[str, Any]) -> ToolResult:
        if name == "ranges_by_name":
            return self.ranges_by_name(
                source=arguments["source"],
                data=list(arguments["data"]),
                legend=_legend_from_arguments(arguments),
                language_id=arguments.get("language_id"),
                highlight_globals=arguments.get("highlight_globals"),
                highlight_classes=arguments.get("highlight_classes"),
            )
        elif name == "decode_tokens":
            return self.decode_tokens(
                source=arguments["source"],
                data=list(arguments["data"]),
                legend=_legend_from_arguments(arguments),
            )
        elif name == "status":
            return self.status()
        else:
            return ToolResult(f"Unknown tool: {name}")

    def call_tool(self, name: str, arguments: dict | None) -> ToolResult:
        """Dispatch a tool call by name."""
        safe_arguments: dict[str, Any] = arguments if arguments is not None else {}
        try:
            return self._call_tool_unlocked(name, safe_arguments)
        except SourceUnavailable as exc:
            logger.warning("Tool %s could not resolve source text: %s", name, exc)
            return ToolResult(f"Error: source unavailable: {exc}")
        except KeyError as exc:
            return ToolResult(f"Error: missing argument {exc}")
        except (IndexError, TypeError, ValueError) as exc:
            logger.warning("Tool %s rejected malformed input: %s", name, exc)
            return ToolResult(f"Error: malformed token data: {exc}")
