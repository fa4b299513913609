"""Shared test fixtures for mammoth-mcp."""

import base64
import json
import zipfile

import pytest
from docx import Document

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


def raw_data_block(result):
    """Parse the JSON raw-data block appended to a success response."""
    text = result.content[0].text
    _, _, tail = text.partition("## Raw Data:\n\n```json\n")
    payload, _, _ = tail.rpartition("\n```")
    return json.loads(payload)


@pytest.fixture
def sample_docx(tmp_path):
    """A document with a heading, bold text and a bulleted list."""
    doc = Document()
    doc.add_heading("Quarterly Report", level=1)
    para = doc.add_paragraph()
    para.add_run("Sales grew").bold = True
    para.add_run(" strongly this quarter.")
    doc.add_paragraph("Widgets", style="List Bullet")
    doc.add_paragraph("Gadgets", style="List Bullet")

    path = tmp_path / "report.docx"
    doc.save(str(path))
    return path


@pytest.fixture
def image_docx(tmp_path):
    """A document with one inline PNG image."""
    image_path = tmp_path / "pixel.png"
    image_path.write_bytes(PNG_BYTES)

    doc = Document()
    doc.add_paragraph("Logo below")
    doc.add_picture(str(image_path))

    path = tmp_path / "with_image.docx"
    doc.save(str(path))
    return path


@pytest.fixture
def corrupt_docx(tmp_path):
    path = tmp_path / "corrupt.docx"
    path.write_bytes(b"this is definitely not a zip archive")
    return path


@pytest.fixture
def spreadsheet_zip(tmp_path):
    """A valid zip archive with no word/document.xml part."""
    path = tmp_path / "renamed.docx"
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("xl/workbook.xml", "<workbook/>")
    return path


@pytest.fixture
def missing_docx(tmp_path):
    return tmp_path / "does-not-exist.docx"
