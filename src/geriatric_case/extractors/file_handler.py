# src/geriatric_case/extractors/file_handler.py
"""
File import routing.

Maps a file extension to a per-format extractor and returns the file's
plain text, ready for the field extractor. Extractors are injected by
format so callers (and tests) can swap any of them; the defaults are
constructed on first use.

    PPTX → python-pptx    PDF → pypdfium2/PyPDF2/pdfplumber
    DOCX → python-docx    HTML/HTM → html.parser
    TXT  → read as UTF-8  JPG/JPEG/PNG → Tesseract OCR

A ".doc" that is really Word-HTML (what the DOC exporter writes) is read
as HTML; anything else with that extension goes to the DOCX extractor.
"""

from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol, Union
import logging

from ..utils.exceptions import DocumentImportError, UnsupportedFileTypeError

SUPPORTED_EXTENSIONS: Dict[str, List[str]] = {
    'presentation': ['pptx'],
    'document': ['pdf', 'docx', 'doc'],
    'text': ['html', 'htm', 'txt'],
    'image': ['jpg', 'jpeg', 'png'],
}

StatusCallback = Callable[[str], None]


class TextSource(Protocol):
    """Anything that turns a file into plain text."""

    def extract(self, path: Path) -> str:
        ...


def get_file_extension(filename) -> str:
    """Lowercase extension without the dot, or "" if there is none."""
    if not filename or not isinstance(filename, (str, Path)):
        return ''
    name = Path(filename).name
    parts = name.split('.')
    return parts[-1].lower() if len(parts) > 1 else ''


def is_extension_supported(extension: str) -> bool:
    ext = (extension or '').lower()
    return any(ext in extensions for extensions in SUPPORTED_EXTENSIONS.values())


def get_file_category(extension: str) -> Optional[str]:
    """Category name for an extension, or None if unsupported."""
    ext = (extension or '').lower()
    for category, extensions in SUPPORTED_EXTENSIONS.items():
        if ext in extensions:
            return category
    return None


def _looks_like_html(path: Path) -> bool:
    with open(path, 'rb') as f:
        head = f.read(512)
    head = head.lstrip(b'\xef\xbb\xbf').lstrip().lower()
    return head.startswith(b'<html') or head.startswith(b'<!doctype html')


class PlainTextExtractor:
    """Reads .txt files as UTF-8, tolerating a BOM."""

    def extract(self, path: Path) -> str:
        return Path(path).read_text(encoding='utf-8-sig', errors='replace')


class FileHandler:
    """
    Imports a clinical document of any supported type as plain text.

    Args:
        extractors: Optional overrides keyed by format
                    ('pdf', 'docx', 'pptx', 'html', 'txt', 'image')
    """

    FORMATS = ('pdf', 'docx', 'pptx', 'html', 'txt', 'image')

    def __init__(self, extractors: Optional[Dict[str, TextSource]] = None):
        self.logger = logging.getLogger(__name__)
        self._extractors: Dict[str, TextSource] = dict(extractors or {})

    def get_extractor(self, fmt: str) -> TextSource:
        """Return the extractor for a format, building the default lazily."""
        if fmt not in self._extractors:
            self._extractors[fmt] = self._default_extractor(fmt)
        return self._extractors[fmt]

    @staticmethod
    def _default_extractor(fmt: str) -> TextSource:
        if fmt == 'pdf':
            from .pdf_extractor import PDFTextExtractor
            return PDFTextExtractor()
        if fmt == 'docx':
            from .office_extractor import DocxTextExtractor
            return DocxTextExtractor()
        if fmt == 'pptx':
            from .office_extractor import PptxTextExtractor
            return PptxTextExtractor()
        if fmt == 'html':
            from .html_extractor import HtmlTextExtractor
            return HtmlTextExtractor()
        if fmt == 'txt':
            return PlainTextExtractor()
        if fmt == 'image':
            from .ocr_extractor import OCRExtractor
            return OCRExtractor()
        raise ValueError(f"Unknown extractor format: {fmt}")

    def _format_for(self, path: Path, extension: str) -> str:
        if extension in ('jpg', 'jpeg', 'png'):
            return 'image'
        if extension in ('html', 'htm'):
            return 'html'
        if extension == 'doc':
            return 'html' if _looks_like_html(path) else 'docx'
        return extension

    def handle_file(
        self,
        file_path: Union[str, Path, None],
        on_status: Optional[StatusCallback] = None,
        on_success: Optional[StatusCallback] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> str:
        """
        Extract the text of one file.

        Args:
            file_path: File to import
            on_status: Progress messages ("Reading...", "OCR (Wait)...")
            on_success: Called with "Success!" once text is extracted
            on_error: Called with the exception before it propagates

        Returns:
            Extracted text (possibly empty)

        Raises:
            DocumentImportError: No file, missing file
            UnsupportedFileTypeError: Extension not supported
            TextExtractionError: The format's library failed
        """
        if not file_path:
            raise DocumentImportError("No file provided")

        path = Path(file_path)
        extension = get_file_extension(path.name)

        if not is_extension_supported(extension):
            raise UnsupportedFileTypeError(extension)

        if on_status:
            on_status('Reading...')

        try:
            if not path.is_file():
                raise DocumentImportError(f"File not found: {path}")

            fmt = self._format_for(path, extension)
            if fmt == 'image' and on_status:
                on_status('OCR (Wait)...')

            self.logger.info(f"Importing {path.name} as {fmt}")
            text = self.get_extractor(fmt).extract(path)

        except Exception as e:
            self.logger.error(f"Import of {path.name} failed: {e}")
            if on_error:
                on_error(e)
            raise

        if on_success:
            on_success('Success!')
        return text or ''


def handle_file(
    file_path: Union[str, Path, None],
    on_status: Optional[StatusCallback] = None,
    on_success: Optional[StatusCallback] = None,
    on_error: Optional[Callable[[Exception], None]] = None,
) -> str:
    """Import a file with the default extractors."""
    return FileHandler().handle_file(file_path, on_status, on_success, on_error)
