# src/geriatric_case/extractors/pdf_extractor.py
"""
Text extraction from PDFs.

Extraction cascade (in order of preference):
1. pypdfium2: Fast, good Unicode support, best for modern PDFs
2. PyPDF2: Fallback, widely compatible
3. pdfplumber: Last resort for PDFs both of the above choke on

Page texts are joined with a single space. Pages with almost no text are
reported as likely scanned; OCR of PDF pages is not attempted.
"""

from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, field
import logging

import pypdfium2
import PyPDF2
import pdfplumber

from ..config import import_settings
from ..utils.exceptions import TextExtractionError
from ..utils.logging import log_performance

logger = logging.getLogger(__name__)


@dataclass
class ExtractedPage:
    """Text extracted from a single page."""
    page_number: int
    text: str
    char_count: int = 0
    method: str = "unknown"


@dataclass
class PDFExtractionResult:
    """Complete PDF text extraction result with metadata."""
    text: str
    pages: List[ExtractedPage] = field(default_factory=list)
    method: str = "unknown"
    page_count: int = 0
    pages_needing_ocr: List[int] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)


class PDFTextExtractor:
    """
    Robust PDF text extraction with multiple fallback methods.

    Primary: pypdfium2 (fastest, best Unicode)
    Fallback: PyPDF2 → pdfplumber
    """

    def __init__(self, min_chars_per_page: Optional[int] = None):
        self.logger = logging.getLogger(__name__)
        if min_chars_per_page is None:
            min_chars_per_page = import_settings.MIN_CHARS_PER_PAGE
        self.min_chars_per_page = min_chars_per_page

    @log_performance(logger, "PDF text extraction")
    def extract(self, pdf_path: Path) -> str:
        """
        Extract text from a PDF.

        Args:
            pdf_path: Path to PDF file

        Returns:
            Page texts joined with spaces

        Raises:
            TextExtractionError: If every extraction method failed
        """
        result = self.extract_detailed(pdf_path)

        if result.errors:
            raise TextExtractionError(result.errors[0], file_type="pdf")

        return result.text

    def extract_detailed(
        self,
        pdf_path: Path,
        password: Optional[str] = None
    ) -> PDFExtractionResult:
        """
        Extract text with per-page metadata and collected warnings.

        Args:
            pdf_path: Path to PDF file
            password: Password for encrypted PDFs

        Returns:
            PDFExtractionResult; errors is non-empty when nothing worked
        """
        pdf_path = Path(pdf_path)
        result = PDFExtractionResult(text="")

        self.logger.debug(f"Extracting text from {pdf_path}")

        methods = [
            ("pypdfium2", self._extract_with_pypdfium2),
            ("pypdf2", self._extract_with_pypdf2),
            ("pdfplumber", self._extract_with_pdfplumber),
        ]

        failures = []
        for method, extract in methods:
            try:
                pages = extract(pdf_path, password)
            except Exception as e:
                self.logger.warning(f"{method} failed on {pdf_path.name}: {e}")
                result.warnings.append(f"{method} failed: {e}")
                failures.append(f"{method}: {e}")
                continue

            result.pages = pages
            result.method = method
            result.page_count = len(pages)
            result.text = " ".join(page.text for page in pages).strip()
            self.logger.debug(
                f"{method} extracted {len(result.text)} chars from {len(pages)} pages"
            )
            break
        else:
            result.errors.append(
                f"All PDF extraction methods failed. {'; '.join(failures)}"
            )
            return result

        self._detect_scanned_pages(result)
        return result

    def _extract_with_pypdfium2(
        self,
        pdf_path: Path,
        password: Optional[str] = None
    ) -> List[ExtractedPage]:
        """Extract text using pypdfium2."""
        pdf = pypdfium2.PdfDocument(str(pdf_path), password=password)
        pages = []

        try:
            for page_num in range(len(pdf)):
                page = pdf[page_num]
                try:
                    textpage = page.get_textpage()
                    text = textpage.get_text_range()
                    text = text.strip() if text else ""
                except Exception:
                    text = ""

                pages.append(self._page(page_num, text, "pypdfium2"))
        finally:
            pdf.close()

        return pages

    def _extract_with_pypdf2(
        self,
        pdf_path: Path,
        password: Optional[str] = None
    ) -> List[ExtractedPage]:
        """Extract text using PyPDF2."""
        pages = []

        with open(pdf_path, 'rb') as file:
            reader = PyPDF2.PdfReader(file)

            if reader.is_encrypted:
                try:
                    reader.decrypt(password or "")
                except Exception:
                    raise RuntimeError("PDF is encrypted and requires a password")

            for page_num, page in enumerate(reader.pages):
                try:
                    text = (page.extract_text() or "").strip()
                except Exception:
                    text = ""

                pages.append(self._page(page_num, text, "pypdf2"))

        return pages

    def _extract_with_pdfplumber(
        self,
        pdf_path: Path,
        password: Optional[str] = None
    ) -> List[ExtractedPage]:
        """Extract text using pdfplumber."""
        pages = []

        with pdfplumber.open(pdf_path, password=password) as pdf:
            for page_num, page in enumerate(pdf.pages):
                text = (page.extract_text() or "").strip()
                pages.append(self._page(page_num, text, "pdfplumber"))

        return pages

    @staticmethod
    def _page(page_num: int, text: str, method: str) -> ExtractedPage:
        return ExtractedPage(
            page_number=page_num,
            text=text,
            char_count=len(text),
            method=method
        )

    def _detect_scanned_pages(self, result: PDFExtractionResult):
        """Flag pages that appear to be images without a text layer."""
        for page in result.pages:
            if page.char_count < self.min_chars_per_page:
                result.pages_needing_ocr.append(page.page_number)

        if result.pages_needing_ocr:
            ratio = len(result.pages_needing_ocr) / result.page_count if result.page_count else 0
            message = (
                f"{len(result.pages_needing_ocr)}/{result.page_count} pages "
                f"({ratio:.0%}) have little or no text and may be scanned"
            )
            result.warnings.append(message)
            self.logger.info(message)
