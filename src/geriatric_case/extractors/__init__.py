# src/geriatric_case/extractors/__init__.py
"""
Document Import Module

Turns PPTX, PDF, DOCX, HTML, plain text and images (OCR) into a single
plain-text string per file for the field extractor.
"""

from .file_handler import (
    SUPPORTED_EXTENSIONS,
    FileHandler,
    PlainTextExtractor,
    TextSource,
    get_file_extension,
    is_extension_supported,
    get_file_category,
    handle_file,
)
from .html_extractor import HtmlTextExtractor, extract_from_html

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "FileHandler",
    "PlainTextExtractor",
    "TextSource",
    "get_file_extension",
    "is_extension_supported",
    "get_file_category",
    "handle_file",
    "HtmlTextExtractor",
    "extract_from_html",
]
