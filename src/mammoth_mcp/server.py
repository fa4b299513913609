"""
FastMCP server for mammoth-mcp.

This module builds the MCP server and registers the DOCX conversion tools.
The server exposes mammoth's HTML, Markdown and raw text conversion through
the Model Context Protocol over stdio.

Entry point: Run with `python -m mammoth_mcp.server` or via `mammoth-mcp` command.
"""

import sys
from contextlib import asynccontextmanager
from typing import Annotated, Optional

from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult
from pydantic import Field

from .config import ServerConfig
from .logging_config import configure_logging, get_logger
from .options import ConversionRequest
from .tools.conversion import (
    convert_to_html,
    convert_to_html_with_images,
    convert_to_markdown,
    extract_raw_text,
)

logger = get_logger(__name__)

FilePath = Annotated[str, Field(description="Absolute path to the DOCX file to convert")]
StyleMap = Annotated[
    Optional[str],
    Field(description="Custom style map, one mapping per line (e.g. \"p[style-name='Section Title'] => h1:fresh\")"),
]
IgnoreEmptyParagraphs = Annotated[
    Optional[bool],
    Field(description="Ignore empty paragraphs (mammoth default: true)"),
]
IdPrefix = Annotated[
    Optional[str],
    Field(description="Prefix for generated ids such as footnote and bookmark anchors"),
]
IncludeDefaultStyleMap = Annotated[
    Optional[bool],
    Field(description="Combine the custom style map with mammoth's default style map (default: true)"),
]
IncludeEmbeddedStyleMap = Annotated[
    Optional[bool],
    Field(description="Use a style map embedded in the document, if any (default: true)"),
]


def _make_lifespan(config: ServerConfig):
    @asynccontextmanager
    async def app_lifespan(server):
        """
        Lifespan context manager for server startup and shutdown logging.

        The server holds no per-process resources: every conversion opens and
        closes its own file handle.
        """
        logger.info("server_starting", name=config.name, version=config.version,
                    max_document_size=config.max_document_size)
        try:
            yield {}
        finally:
            logger.info("server_shutdown_complete", name=config.name)

    return app_lifespan


def create_server(config: Optional[ServerConfig] = None) -> FastMCP:
    """
    Build a FastMCP server with all conversion tools registered.

    Args:
        config: Server settings (defaults to ServerConfig())

    Returns:
        A new FastMCP instance, ready for run()
    """
    if config is None:
        config = ServerConfig()

    mcp = FastMCP(config.name, lifespan=_make_lifespan(config))
    max_size = config.max_document_size

    @mcp.tool(name="convert_docx_to_html", structured_output=False)
    async def convert_docx_to_html(
        filePath: FilePath,
        styleMap: StyleMap = None,
        ignoreEmptyParagraphs: IgnoreEmptyParagraphs = None,
        idPrefix: IdPrefix = None,
        includeDefaultStyleMap: IncludeDefaultStyleMap = None,
        includeEmbeddedStyleMap: IncludeEmbeddedStyleMap = None,
    ) -> CallToolResult:
        """
        Convert a DOCX file to HTML using mammoth.

        Reads the document from a file path and returns the HTML content along
        with any conversion messages. Only semantic structure is kept (headings,
        lists, tables, emphasis); visual styling such as fonts and colours is
        dropped.

        Examples:
            >>> convert_docx_to_html("/home/me/report.docx")
            '''# Conversion Result

            **File**: /home/me/report.docx

            ## HTML Output:

            ```html
            <h1>Quarterly Report</h1><p>Sales grew...</p>
            ```
            ...'''

            Error case - missing file:
            >>> convert_docx_to_html("/home/me/missing.docx")
            '''# Conversion Error

            **Error**: File not found: /home/me/missing.docx
            ...'''
        """
        request = ConversionRequest(
            file_path=filePath,
            style_map=styleMap,
            ignore_empty_paragraphs=ignoreEmptyParagraphs,
            id_prefix=idPrefix,
            include_default_style_map=includeDefaultStyleMap,
            include_embedded_style_map=includeEmbeddedStyleMap,
        )
        return await convert_to_html(request, max_size)

    @mcp.tool(name="convert_docx_to_html_with_images", structured_output=False)
    async def convert_docx_to_html_with_images(
        filePath: FilePath,
        styleMap: StyleMap = None,
        ignoreEmptyParagraphs: IgnoreEmptyParagraphs = None,
        idPrefix: IdPrefix = None,
        includeDefaultStyleMap: IncludeDefaultStyleMap = None,
        includeEmbeddedStyleMap: IncludeEmbeddedStyleMap = None,
    ) -> CallToolResult:
        """
        Convert a DOCX file to HTML with embedded images as base64 data URIs.

        Every image is inlined into its <img src="data:..."> attribute, so the
        HTML is self-contained and no image files are written to disk. The raw
        data reports whether any images were found.
        """
        request = ConversionRequest(
            file_path=filePath,
            style_map=styleMap,
            ignore_empty_paragraphs=ignoreEmptyParagraphs,
            id_prefix=idPrefix,
            include_default_style_map=includeDefaultStyleMap,
            include_embedded_style_map=includeEmbeddedStyleMap,
        )
        return await convert_to_html_with_images(request, max_size)

    @mcp.tool(name="extract_raw_text", structured_output=False)
    async def extract_raw_text_tool(filePath: FilePath) -> CallToolResult:
        """
        Extract raw text from a DOCX file, ignoring all formatting.

        Each paragraph is followed by a blank line. Useful for indexing,
        summarising or searching document content.
        """
        return await extract_raw_text(filePath, max_size)

    @mcp.tool(name="convert_docx_to_markdown", structured_output=False)
    async def convert_docx_to_markdown(
        filePath: FilePath,
        styleMap: StyleMap = None,
        ignoreEmptyParagraphs: IgnoreEmptyParagraphs = None,
        idPrefix: IdPrefix = None,
        includeDefaultStyleMap: IncludeDefaultStyleMap = None,
        includeEmbeddedStyleMap: IncludeEmbeddedStyleMap = None,
    ) -> CallToolResult:
        """
        Convert a DOCX file to Markdown using mammoth.

        Headings, lists, links, bold and italic text are preserved. Style map
        options behave as for HTML conversion.
        """
        request = ConversionRequest(
            file_path=filePath,
            style_map=styleMap,
            ignore_empty_paragraphs=ignoreEmptyParagraphs,
            id_prefix=idPrefix,
            include_default_style_map=includeDefaultStyleMap,
            include_embedded_style_map=includeEmbeddedStyleMap,
        )
        return await convert_to_markdown(request, max_size)

    return mcp


def main():
    """
    Main entry point for mammoth-mcp server.

    Reads configuration from the environment, builds the server and serves
    MCP protocol messages over stdio. Exits with status 1 only if the server
    itself fails; tool errors are returned to the client as data.
    """
    try:
        config = ServerConfig.from_env()
        configure_logging(config.log_level)
        server = create_server(config)
        server.run()
    except Exception:
        logger.exception("server_error")
        sys.exit(1)


if __name__ == "__main__":
    main()
