"""
mammoth-mcp: MCP server for DOCX conversion.

This package provides a FastMCP-based server that exposes the mammoth DOCX
converter through the Model Context Protocol (MCP). Documents can be rendered
as HTML (optionally with images inlined as data URIs), Markdown, or plain text.
"""

__version__ = "0.1.0"
