# src/geriatric_case/extractors/office_extractor.py
"""
Text extraction from Office files.

- DOCX: python-docx, body paragraphs then table cells, one per line
- PPTX: python-pptx, slides in presentation order; shape text within a
  slide is newline-separated and slides are separated by a blank line
"""

from pathlib import Path
from typing import Iterator, List
import logging

import docx
from pptx import Presentation

from ..utils.exceptions import TextExtractionError


class DocxTextExtractor:
    """Raw text from Word .docx documents."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def extract(self, docx_path: Path) -> str:
        """
        Extract raw text from a .docx file.

        Raises:
            TextExtractionError: If the file cannot be opened as a .docx
        """
        docx_path = Path(docx_path)
        try:
            document = docx.Document(str(docx_path))
        except Exception as e:
            self.logger.error(f"python-docx could not open {docx_path.name}: {e}")
            raise TextExtractionError(
                f"Could not read DOCX file {docx_path.name}: {e}", file_type="docx"
            ) from e

        lines = [paragraph.text for paragraph in document.paragraphs]

        for table in document.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    lines.append(" | ".join(cells))

        text = "\n".join(lines).strip()
        self.logger.debug(f"python-docx extracted {len(text)} chars from {docx_path.name}")
        return text


class PptxTextExtractor:
    """Slide text from PowerPoint .pptx presentations."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def extract(self, pptx_path: Path) -> str:
        """
        Extract the text of every slide.

        Raises:
            TextExtractionError: If the file cannot be opened as a .pptx
        """
        pptx_path = Path(pptx_path)
        try:
            presentation = Presentation(str(pptx_path))
        except Exception as e:
            self.logger.error(f"python-pptx could not open {pptx_path.name}: {e}")
            raise TextExtractionError(
                f"Could not read PPTX file {pptx_path.name}: {e}", file_type="pptx"
            ) from e

        slide_texts: List[str] = []
        for slide in presentation.slides:
            text = "\n".join(self._shape_texts(slide.shapes)).strip()
            if text:
                slide_texts.append(text)

        self.logger.debug(
            f"python-pptx extracted text from {len(slide_texts)}/"
            f"{len(presentation.slides)} slides of {pptx_path.name}"
        )
        return "\n\n".join(slide_texts)

    def _shape_texts(self, shapes) -> Iterator[str]:
        for shape in shapes:
            # Group shapes nest their children
            if hasattr(shape, "shapes"):
                yield from self._shape_texts(shape.shapes)
            elif getattr(shape, "has_text_frame", False) and shape.text_frame.text:
                yield shape.text_frame.text
            elif getattr(shape, "has_table", False):
                for row in shape.table.rows:
                    cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                    if cells:
                        yield " | ".join(cells)
