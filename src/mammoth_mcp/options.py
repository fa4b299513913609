"""Conversion request and option building for mammoth-mcp.

A ConversionRequest holds what the caller sent; ConversionOptions holds what
mammoth will be told. Unset options stay None on the dataclass and are left
out of the keyword arguments handed to mammoth, so mammoth applies its own
defaults for them.
"""

import base64
from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, Optional

import mammoth

DEFAULT_IMAGE_CONTENT_TYPE = "image/png"


@dataclass(frozen=True)
class ConversionRequest:
    """Parameters of one conversion tool invocation."""

    file_path: str
    style_map: Optional[str] = None
    ignore_empty_paragraphs: Optional[bool] = None
    id_prefix: Optional[str] = None
    include_default_style_map: Optional[bool] = None
    include_embedded_style_map: Optional[bool] = None


@dataclass(frozen=True)
class ConversionOptions:
    """Options passed to a mammoth conversion entry point.

    Field names match mammoth's keyword arguments.
    """

    style_map: Optional[str] = None
    ignore_empty_paragraphs: Optional[bool] = None
    id_prefix: Optional[str] = None
    include_default_style_map: Optional[bool] = None
    include_embedded_style_map: Optional[bool] = None
    convert_image: Optional[Callable] = None

    def to_kwargs(self) -> Dict[str, Any]:
        """Return only the options that were explicitly set."""
        kwargs = {}
        for field in fields(self):
            value = getattr(self, field.name)
            if value is not None:
                kwargs[field.name] = value
        return kwargs


def build_options(
    request: ConversionRequest,
    convert_image: Optional[Callable] = None,
) -> ConversionOptions:
    """Build converter options from a request.

    Args:
        request: The tool invocation parameters
        convert_image: Optional mammoth image converter for image-capable operations

    Returns:
        ConversionOptions carrying the request's optional fields
    """
    return ConversionOptions(
        style_map=request.style_map,
        ignore_empty_paragraphs=request.ignore_empty_paragraphs,
        id_prefix=request.id_prefix,
        include_default_style_map=request.include_default_style_map,
        include_embedded_style_map=request.include_embedded_style_map,
        convert_image=convert_image,
    )


class InlineImageConverter:
    """Renders embedded images as <img> elements with base64 data URIs.

    One instance is created per conversion so the image count reflects a
    single document.

    Usage:
        images = InlineImageConverter()
        result = mammoth.convert_to_html(docx_file, convert_image=images.image_converter)
        images.count  # number of images rendered
    """

    def __init__(self, default_content_type: str = DEFAULT_IMAGE_CONTENT_TYPE):
        self.default_content_type = default_content_type
        self.count = 0
        self.image_converter = mammoth.images.img_element(self._to_data_uri)

    def _to_data_uri(self, image) -> Dict[str, str]:
        with image.open() as image_bytes:
            encoded = base64.b64encode(image_bytes.read()).decode("ascii")
        content_type = image.content_type or self.default_content_type
        self.count += 1
        return {"src": f"data:{content_type};base64,{encoded}"}
