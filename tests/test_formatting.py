"""Tests for result and error formatting."""

import json
from types import SimpleNamespace

from mammoth_mcp.errors import ErrorDetails
from mammoth_mcp.formatting import (
    format_conversion_output,
    format_error,
    format_raw_data,
    message_dicts,
)


def _result(value, messages=()):
    return SimpleNamespace(value=value, messages=list(messages))


def _message(type_, text):
    return SimpleNamespace(type=type_, message=text)


class TestFormatConversionOutput:
    def test_without_messages(self):
        text = format_conversion_output("/docs/a.docx", _result("<p>Hi</p>"), "HTML Output", "HTML")
        assert text == (
            "# Conversion Result\n\n"
            "**File**: /docs/a.docx\n\n"
            "## HTML Output:\n\n```html\n<p>Hi</p>\n```\n\n"
        )
        assert "## Messages:" not in text

    def test_with_messages(self):
        result = _result("<p>Hi</p>", [
            _message("warning", "Unrecognised paragraph style: Fancy"),
            _message("error", "Could not read image"),
        ])
        text = format_conversion_output("/docs/a.docx", result, "HTML Output", "HTML")
        assert text.endswith(
            "## Messages:\n\n"
            "- warning: Unrecognised paragraph style: Fancy\n"
            "- error: Could not read image\n"
        )

    def test_language_label_is_lower_cased(self):
        text = format_conversion_output("/a.docx", _result("# Hi"), "Markdown Output", "Markdown")
        assert "```markdown\n# Hi\n```" in text

    def test_custom_heading(self):
        text = format_conversion_output(
            "/a.docx", _result(""), "HTML Output", "html", heading="Conversion Result (with images)"
        )
        assert text.startswith("# Conversion Result (with images)\n\n")

    def test_identical_inputs_give_identical_text(self):
        result = _result("<p>x</p>", [_message("warning", "w")])
        first = format_conversion_output("/a.docx", result, "HTML Output", "HTML")
        second = format_conversion_output("/a.docx", result, "HTML Output", "HTML")
        assert first == second


class TestFormatRawData:
    def test_json_block_round_trips(self):
        data = {"filePath": "/a.docx", "html": "<p>ü</p>", "messages": []}
        block = format_raw_data(data)
        assert block.startswith("## Raw Data:\n\n```json\n")
        payload = block[len("## Raw Data:\n\n```json\n"):-len("\n```\n")]
        assert json.loads(payload) == data
        assert "ü" in block

    def test_message_dicts(self):
        assert message_dicts([_message("warning", "w")]) == [{"type": "warning", "message": "w"}]


class TestFormatError:
    def test_message_only(self):
        assert format_error(ErrorDetails("boom")) == "# Conversion Error\n\n**Error**: boom\n"

    def test_with_suggestions(self):
        text = format_error(ErrorDetails("File not found: /a.docx", ("Check the path", "Use an absolute path")))
        assert "## Troubleshooting:\n\n- Check the path\n- Use an absolute path\n" in text
