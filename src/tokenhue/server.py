"""
MCP server for semantic token grouping.

Provides 3 tools:
- ranges_by_name: Group identifier occurrences by name from a semantic token stream
- decode_tokens: Decode a semantic token stream into positioned, named tokens
- status: Report version and effective highlight configuration
"""

import asyncio
import logging

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool, ToolAnnotations

from . import __version__
from .tools import TokenHueTools

# Global tools instance
_tools = TokenHueTools()

_TOKEN_STREAM_PROPERTIES = {
    "source": {
        "type": "string",
        "description": "Full text of the document the tokens were computed for",
    },
    "data": {
        "type": "array",
        "items": {"type": "integer"},
        "description": "Flat semanticTokens data array (5 integers per token)",
    },
    "token_types": {
        "type": "array",
        "items": {"type": "string"},
        "description": "Legend tokenTypes advertised by the language server",
    },
    "token_modifiers": {
        "type": "array",
        "items": {"type": "string"},
        "description": "Legend tokenModifiers advertised by the language server",
    },
}


def get_tools() -> TokenHueTools:
    """Get the global tools instance."""
    return _tools


def set_tools(tools: TokenHueTools) -> None:
    """Set the global tools instance (for testing)."""
    global _tools
    _tools = tools


def create_server() -> Server:
    """Create and configure the MCP server."""
    server = Server(
        "tokenhue",
        version=__version__,
        instructions=(
            "tokenhue groups identifier occurrences by name from an LSP semantic token "
            "stream. Pass the document text together with the semanticTokens data and "
            "the server legend."
        ),
    )

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(
                name="ranges_by_name",
                description=(
                    "Group variable, declared parameter and (optionally) class occurrences "
                    "by identifier name."
                ),
                inputSchema={
                    "type": "object",
                    "properties": {
                        **_TOKEN_STREAM_PROPERTIES,
                        "language_id": {
                            "type": "string",
                            "description": "LSP languageId of the document (e.g. python, cpp)",
                        },
                        "highlight_globals": {
                            "type": "boolean",
                            "description": "Include global and very short names",
                        },
                        "highlight_classes": {
                            "type": "boolean",
                            "description": "Include class names",
                        },
                    },
                    "required": ["source", "data", "token_types"],
                },
                annotations=ToolAnnotations(
                    title="Group Identifiers By Name",
                    readOnlyHint=True,
                    idempotentHint=True,
                ),
            ),
            Tool(
                name="decode_tokens",
                description="Decode a semantic token stream into absolute ranges with text.",
                inputSchema={
                    "type": "object",
                    "properties": _TOKEN_STREAM_PROPERTIES,
                    "required": ["source", "data", "token_types"],
                },
                annotations=ToolAnnotations(
                    title="Decode Semantic Tokens",
                    readOnlyHint=True,
                    idempotentHint=True,
                ),
            ),
            Tool(
                name="status",
                description="Report version and highlight configuration.",
                inputSchema={
                    "type": "object",
                    "properties": {},
                },
                annotations=ToolAnnotations(
                    title="Server Status",
                    readOnlyHint=True,
                    idempotentHint=True,
                ),
            ),
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[TextContent]:
        result = await asyncio.to_thread(_tools.call_tool, name, arguments)
        return [TextContent(type="text", text=result.text)]

    return server


async def run_server() -> None:
    """Run the MCP server."""
    server = create_server()
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


def main() -> None:
    """Entry point for the MCP server."""
    # stdout carries the protocol; logging.basicConfig defaults to stderr.
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(run_server())


if __name__ == "__main__":
    main()
