"""Conversion of record PDFs to searchable minified text."""

from .converter import SUPPORTED_IMAGE_EXTENSIONS, Converter
from .minify import minify

__all__ = [
    "Converter",
    "SUPPORTED_IMAGE_EXTENSIONS",
    "minify",
]
