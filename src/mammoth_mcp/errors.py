"""Error types and classification for mammoth-mcp.

Every failure raised while converting a document is translated by
classify_error() into one of a closed set of ConversionError variants. Each
variant carries its own payload and knows which troubleshooting suggestions
to offer the user.
"""

import errno
import os
import zipfile
from dataclasses import dataclass
from typing import Optional, Tuple


# Maximum document size: 10 MB
MAX_DOCUMENT_SIZE = 10 * 1024 * 1024  # 10MB in bytes

_PERMISSION_CODES = frozenset({errno.EACCES, errno.EPERM})
_NOT_FOUND_CODES = frozenset({errno.ENOENT, errno.ENOTDIR, errno.EISDIR})
_BUSY_CODES = frozenset({errno.EBUSY, errno.ETXTBSY})
_FORMAT_MARKERS = ("invalid", "corrupt", "valid .docx")


@dataclass(frozen=True)
class ErrorDetails:
    """Display message and ordered troubleshooting suggestions for a failure."""

    message: str
    suggestions: Tuple[str, ...] = ()


class ConversionError(Exception):
    """Base class for classified conversion failures.

    Attributes:
        message: Human-readable description shown to the user
        path: Offending file path, when known
    """

    def __init__(self, message: str, path: Optional[str] = None):
        self.message = message
        self.path = path
        super().__init__(message)

    def suggestions(self) -> Tuple[str, ...]:
        return ()

    def details(self) -> ErrorDetails:
        return ErrorDetails(self.message, self.suggestions())


class PermissionDeniedError(ConversionError):
    """The operating system refused access to the file."""

    def __init__(self, path: Optional[str] = None, raw_message: str = ""):
        self.raw_message = raw_message
        super().__init__(
            f"Permission denied: {path}" if path else raw_message or "Permission denied",
            path,
        )

    def suggestions(self) -> Tuple[str, ...]:
        hints = [
            "The operating system is blocking access to this file. Folders such as "
            "Desktop, Documents and Downloads can be protected by privacy or "
            "controlled-folder-access settings.",
            "Copy the file to a less restricted location (for example your home "
            "directory or a temporary folder) and try again.",
            "Close the file if it is open in Microsoft Word or another application.",
        ]
        if self.path:
            hints.append(f"Check that the file is readable by the current user: {self.path}")
        else:
            hints.append("Check that the file is readable by the current user.")
        return tuple(hints)


class PathNotFoundError(ConversionError):
    """The path does not name a readable file."""

    def __init__(self, path: Optional[str] = None, raw_message: str = ""):
        self.raw_message = raw_message
        super().__init__(
            f"File not found: {path}" if path else raw_message or "File not found",
            path,
        )

    def suggestions(self) -> Tuple[str, ...]:
        hints = []
        if self.path:
            hints.append(f"Verify that the file exists at: {self.path}")
        hints.extend([
            "Use an absolute path; relative paths are resolved against the "
            "server's working directory.",
            "Check that the file has not been moved, renamed or deleted.",
        ])
        return tuple(hints)


class ResourceBusyError(ConversionError):
    """The file is locked by another process."""

    def __init__(self, path: Optional[str] = None, raw_message: str = ""):
        self.raw_message = raw_message
        super().__init__(
            f"File is locked or in use: {path}" if path else raw_message or "File is locked or in use",
            path,
        )

    def suggestions(self) -> Tuple[str, ...]:
        return (
            "Close the file in Microsoft Word or any other application using it.",
            "Wait a moment and try again.",
        )


class FormatInvalidError(ConversionError):
    """The file is not a well-formed DOCX document."""

    def __init__(self, raw_message: str, path: Optional[str] = None):
        self.raw_message = raw_message
        super().__init__(f"Invalid or corrupted DOCX file: {raw_message}", path)

    def suggestions(self) -> Tuple[str, ...]:
        return (
            "Verify that the file is a genuine .docx document (Word 2007 or later).",
            "Legacy .doc files are not supported; re-save the document as .docx.",
            "The file may be corrupted; try opening and re-saving it in Word.",
        )


class DocumentTooLargeError(ConversionError):
    """Raised when a document exceeds the maximum allowed size.

    Attributes:
        path: Path to the oversized document
        size_bytes: Actual size of the document in bytes
        max_bytes: Maximum allowed size in bytes
    """

    def __init__(self, path: str, size_bytes: int, max_bytes: int):
        self.size_bytes = size_bytes
        self.max_bytes = max_bytes
        super().__init__(
            f"Document {path} ({format_size(size_bytes)}) exceeds "
            f"maximum size limit of {format_size(max_bytes)}",
            path,
        )

    def suggestions(self) -> Tuple[str, ...]:
        return (
            "Large documents may cause memory issues; split the document into smaller parts.",
            "Compress or remove large embedded images and save again.",
            "Raise the limit with the MAMMOTH_MCP_MAX_DOCUMENT_SIZE environment variable.",
        )


class UnknownConversionError(ConversionError):
    """Any failure that matches no other variant. Carries no suggestions."""


def format_size(bytes_count: int) -> str:
    """Format byte count as human-readable size string.

    Args:
        bytes_count: Number of bytes

    Returns:
        Human-readable size string (e.g., "5.2 MB", "1.5 KB")
    """
    if bytes_count < 1024:
        return f"{bytes_count} B"
    elif bytes_count < 1024 * 1024:
        return f"{bytes_count / 1024:.1f} KB"
    elif bytes_count < 1024 * 1024 * 1024:
        return f"{bytes_count / (1024 * 1024):.1f} MB"
    else:
        return f"{bytes_count / (1024 * 1024 * 1024):.1f} GB"


def validate_document_size(path: str, max_bytes: int = MAX_DOCUMENT_SIZE) -> None:
    """Validate that a document does not exceed the maximum size limit.

    Args:
        path: Path to the document file
        max_bytes: Size limit in bytes; 0 disables the check

    Raises:
        DocumentTooLargeError: If the document exceeds max_bytes
        OSError: If the file cannot be accessed
    """
    if max_bytes <= 0:
        return
    size = os.path.getsize(path)
    if size > max_bytes:
        raise DocumentTooLargeError(path, size, max_bytes)


def classify_error(error: object, path: Optional[str] = None) -> ConversionError:
    """Translate a caught failure into a ConversionError variant.

    Checks run in priority order and the first match wins: permission denied,
    file not found, file busy, then invalid/corrupt document. Anything else
    becomes an UnknownConversionError carrying the original message.

    Args:
        error: The caught exception (or any other raised value)
        path: Absolute path of the document being converted, if known

    Returns:
        The classified error. Already classified errors are returned unchanged.
    """
    if isinstance(error, ConversionError):
        return error
    if not isinstance(error, BaseException):
        return UnknownConversionError(str(error), path)

    message = str(error) or type(error).__name__

    if isinstance(error, OSError):
        failing_path = path
        if isinstance(error.filename, (str, bytes, os.PathLike)):
            failing_path = os.fsdecode(error.filename)
        if isinstance(error, PermissionError) or error.errno in _PERMISSION_CODES:
            return PermissionDeniedError(failing_path, message)
        if isinstance(error, FileNotFoundError) or error.errno in _NOT_FOUND_CODES:
            return PathNotFoundError(failing_path, message)
        if error.errno in _BUSY_CODES:
            return ResourceBusyError(failing_path, message)

    # Best effort: converter wording is not a stable contract.
    lowered = message.lower()
    if isinstance(error, zipfile.BadZipFile) or any(marker in lowered for marker in _FORMAT_MARKERS):
        return FormatInvalidError(message, path)

    return UnknownConversionError(message, path)
