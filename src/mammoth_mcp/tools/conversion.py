"""
DOCX conversion tools for mammoth-mcp.

This module provides the MCP tool functions that convert a DOCX file with
mammoth: HTML, HTML with inlined images, raw text, and Markdown.

Every function resolves the path to an absolute one, checks that the file can
be read before handing it to mammoth, and never raises. Failures are
classified and returned as an error CallToolResult with troubleshooting
suggestions; successes carry a formatted report and a structured echo of the
raw data.
"""

import asyncio
import errno
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

import mammoth
from mcp.types import CallToolResult, TextContent

from ..errors import MAX_DOCUMENT_SIZE, classify_error, validate_document_size
from ..formatting import format_conversion_output, format_error, format_raw_data, message_dicts
from ..logging_config import get_logger
from ..options import ConversionRequest, InlineImageConverter, build_options

logger = get_logger(__name__)

Renderer = Callable[[str, Any], Tuple[str, Dict[str, Any]]]


def resolve_path(file_path: str) -> str:
    """Resolve a path against the working directory into absolute form."""
    return str(Path(file_path).resolve())


def check_access(absolute_path: str, max_document_size: int = MAX_DOCUMENT_SIZE) -> None:
    """Confirm the document exists, is readable and is within the size limit.

    Raises:
        FileNotFoundError: If nothing exists at the path
        IsADirectoryError: If the path is a directory
        PermissionError: If the current user cannot read the file
        DocumentTooLargeError: If the file exceeds max_document_size
    """
    if not os.path.exists(absolute_path):
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), absolute_path)
    if os.path.isdir(absolute_path):
        raise IsADirectoryError(errno.EISDIR, os.strerror(errno.EISDIR), absolute_path)
    if not os.access(absolute_path, os.R_OK):
        raise PermissionError(errno.EACCES, os.strerror(errno.EACCES), absolute_path)
    validate_document_size(absolute_path, max_document_size)


def _read_document(convert: Callable, absolute_path: str, kwargs: Dict[str, Any]):
    with open(absolute_path, "rb") as docx_file:
        return convert(docx_file, **kwargs)


def _error_result(tool: str, error: Exception, path: Optional[str]) -> CallToolResult:
    classified = classify_error(error, path)
    logger.error(
        "conversion_failed",
        tool=tool,
        path=path,
        error=str(error),
        error_type=type(error).__name__,
        category=type(classified).__name__,
    )
    return CallToolResult(
        content=[TextContent(type="text", text=format_error(classified.details()))],
        isError=True,
    )


async def _run_conversion(
    tool: str,
    file_path: str,
    convert: Callable,
    kwargs: Dict[str, Any],
    render: Renderer,
    max_document_size: int,
) -> CallToolResult:
    absolute_path = None
    try:
        absolute_path = resolve_path(file_path)
        logger.info("conversion_started", tool=tool, path=absolute_path, options=sorted(kwargs))

        await asyncio.to_thread(check_access, absolute_path, max_document_size)
        result = await asyncio.to_thread(_read_document, convert, absolute_path, kwargs)

        report, raw_data = render(absolute_path, result)
        text = report.rstrip("\n") + "\n\n" + format_raw_data(raw_data)

        logger.info(
            "conversion_succeeded",
            tool=tool,
            path=absolute_path,
            output_chars=len(result.value),
            messages=len(result.messages),
        )
        return CallToolResult(
            content=[TextContent(type="text", text=text)],
            structuredContent=raw_data,
            isError=False,
        )
    except Exception as e:
        return _error_result(tool, e, absolute_path or file_path)


async def convert_to_html(
    request: ConversionRequest,
    max_document_size: int = MAX_DOCUMENT_SIZE,
) -> CallToolResult:
    """Convert a DOCX file to HTML.

    Images are left to mammoth's default handling.

    Args:
        request: File path and optional mammoth options
        max_document_size: Size limit in bytes (0 disables)

    Returns:
        CallToolResult with an HTML report, or an error result
    """
    def render(absolute_path, result):
        report = format_conversion_output(absolute_path, result, "HTML Output", "HTML")
        raw_data = {
            "filePath": absolute_path,
            "html": result.value,
            "messages": message_dicts(result.messages),
        }
        return report, raw_data

    options = build_options(request)
    return await _run_conversion(
        "convert_docx_to_html",
        request.file_path,
        mammoth.convert_to_html,
        options.to_kwargs(),
        render,
        max_document_size,
    )


async def convert_to_html_with_images(
    request: ConversionRequest,
    max_document_size: int = MAX_DOCUMENT_SIZE,
) -> CallToolResult:
    """Convert a DOCX file to HTML with every image inlined as a data URI.

    Nothing is written to disk: each embedded image is read into memory,
    base64-encoded and used as the src of its <img> element.

    Args:
        request: File path and optional mammoth options
        max_document_size: Size limit in bytes (0 disables)

    Returns:
        CallToolResult with an HTML report and image flag, or an error result
    """
    images = InlineImageConverter()

    def render(absolute_path, result):
        report = format_conversion_output(
            absolute_path,
            result,
            "HTML Output",
            "HTML",
            heading="Conversion Result (with images)",
        )
        raw_data = {
            "filePath": absolute_path,
            "html": result.value,
            "messages": message_dicts(result.messages),
            "hasImages": images.count > 0,
            "imageCount": images.count,
        }
        return report, raw_data

    options = build_options(request, convert_image=images.image_converter)
    return await _run_conversion(
        "convert_docx_to_html_with_images",
        request.file_path,
        mammoth.convert_to_html,
        options.to_kwargs(),
        render,
        max_document_size,
    )


async def extract_raw_text(
    file_path: str,
    max_document_size: int = MAX_DOCUMENT_SIZE,
) -> CallToolResult:
    """Extract the plain text of a DOCX file, ignoring all formatting.

    Paragraphs are separated by blank lines. Style maps do not apply.
    """
    def render(absolute_path, result):
        report = format_conversion_output(absolute_path, result, "Text Content", "text")
        raw_data = {
            "filePath": absolute_path,
            "text": result.value,
            "messages": message_dicts(result.messages),
        }
        return report, raw_data

    return await _run_conversion(
        "extract_raw_text",
        file_path,
        mammoth.extract_raw_text,
        {},
        render,
        max_document_size,
    )


async def convert_to_markdown(
    request: ConversionRequest,
    max_document_size: int = MAX_DOCUMENT_SIZE,
) -> CallToolResult:
    """Convert a DOCX file to Markdown."""
    def render(absolute_path, result):
        report = format_conversion_output(absolute_path, result, "Markdown Output", "Markdown")
        raw_data = {
            "filePath": absolute_path,
            "markdown": result.value,
            "messages": message_dicts(result.messages),
        }
        return report, raw_data

    options = build_options(request)
    return await _run_conversion(
        "convert_docx_to_markdown",
        request.file_path,
        mammoth.convert_to_markdown,
        options.to_kwargs(),
        render,
        max_document_size,
    )
