"""Text rendering of conversion results and errors.

All functions here are pure: the same inputs always produce the same text.
"""

import json
from typing import Any, Dict, List, Sequence

from .errors import ErrorDetails


def message_dicts(messages: Sequence[Any]) -> List[Dict[str, str]]:
    """Convert mammoth messages into plain {type, message} dictionaries."""
    return [{"type": msg.type, "message": msg.message} for msg in messages]


def format_conversion_output(
    absolute_path: str,
    result: Any,
    title: str,
    language: str,
    heading: str = "Conversion Result",
) -> str:
    """Format a mammoth result as a Markdown report.

    Args:
        absolute_path: Resolved path of the converted document
        result: mammoth Result with .value and .messages
        title: Section title for the rendered output (e.g. "HTML Output")
        language: Code fence label; lower-cased before use
        heading: Top-level heading

    Returns:
        Report with file path, fenced output and, when present, converter messages

    Example output:
        # Conversion Result

        **File**: /docs/report.docx

        ## HTML Output:

        ```html
        <h1>Report</h1>
        ```
    """
    output = f"# {heading}\n\n"
    output += f"**File**: {absolute_path}\n\n"
    output += f"## {title}:\n\n```{language.lower()}\n{result.value}\n```\n\n"

    if result.messages:
        output += "## Messages:\n\n"
        for msg in result.messages:
            output += f"- {msg.type}: {msg.message}\n"

    return output


def format_raw_data(raw_data: Dict[str, Any]) -> str:
    """Render the machine-readable echo of a result as a fenced JSON block."""
    payload = json.dumps(raw_data, indent=2, ensure_ascii=False)
    return f"## Raw Data:\n\n```json\n{payload}\n```\n"


def format_error(details: ErrorDetails) -> str:
    """Format a classified failure with its troubleshooting suggestions."""
    output = "# Conversion Error\n\n"
    output += f"**Error**: {details.message}\n"

    if details.suggestions:
        output += "\n## Troubleshooting:\n\n"
        for suggestion in details.suggestions:
            output += f"- {suggestion}\n"

    return output
