"""
Screen Vision: multi-monitor screen capture, window capture and OCR,
exposed as MCP tools and as a command-line interface.

Layers:
    core - display topology, capture pipeline, storage, OCR
    cli  - typer commands with rich output
    mcp  - FastMCP server and tool wrappers
"""

__version__ = "1.0.0"
