"""MCP tool that counts tokens of a text with the configured tiktoken encoding."""

from __future__ import annotations

from mcp.server.fastmcp import FastMCP

from clients import tokenizer
from config import TOKENIZER_ENCODING


def register(mcp: FastMCP) -> None:
    @mcp.tool(name="count_tokens")
    async def count_tokens(text: str) -> int:
        """Return the number of tokens in `text` (default encoding o200k_base)."""
        return tokenizer.count_tokens(text, encoding=TOKENIZER_ENCODING)
