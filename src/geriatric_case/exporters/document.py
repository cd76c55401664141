# ============================================================================
# src/geriatric_case/exporters/document.py
# ============================================================================
"""
Word (.doc) Export

Word opens HTML carrying the Office XML namespaces as a native document,
so the case report is written as HTML with a UTF-8 BOM and served as
application/msword. Every field is sanitized and then HTML-escaped.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Union
import logging

from ..config import DocSettings, doc_settings
from ..core.record import CaseExport
from ..utils.exceptions import ExportError
from ..utils.file_utils import export_filename, sanitize_filename
from ..utils.sanitizer import escape_html, sanitize_text

logger = logging.getLogger(__name__)


def _safe(value: Any) -> str:
    return escape_html(sanitize_text(value))


def create_doc_html(data: Any, settings: Optional[DocSettings] = None) -> str:
    """
    Build the Word-compatible HTML for a case report.

    Args:
        data: CaseExport or mapping (age_sex, initials, hpi, meds, ai_response)
        settings: Namespaces for the <html> element

    Returns:
        Complete HTML document
    """
    settings = settings or doc_settings
    case = data if isinstance(data, CaseExport) else CaseExport.from_data(data)
    ns = settings.DOC_XML_NAMESPACES

    header = (
        f"<html xmlns:o='{ns['office']}' xmlns:w='{ns['word']}' xmlns='{ns['html']}'>"
        "<head><meta charset='utf-8'><title>Case</title></head><body>"
    )

    content = (
        '<h1 style="color:#2c3e50">Geriatric Case Report</h1>'
        f'<p><strong>ID:</strong> {_safe(case.age_sex)} ({_safe(case.initials)})</p>'
        f'<h3>HPI</h3><p>{_safe(case.hpi)}</p>'
        f'<h3>Meds/Labs</h3><p>{_safe(case.meds)}</p>'
        '<hr>'
        '<h3>Analysis & Plan</h3>'
        '<div style="font-family: Arial; white-space: pre-wrap;">'
        f'{_safe(case.ai_response)}'
        '</div>'
    )

    return header + content + '</body></html>'


def create_doc_bytes(data: Any, settings: Optional[DocSettings] = None) -> bytes:
    """BOM-prefixed, UTF-8 encoded .doc content."""
    settings = settings or doc_settings
    return (settings.DOC_BOM + create_doc_html(data, settings)).encode('utf-8')


@dataclass
class DocExport:
    """A rendered .doc ready to be served or saved."""
    content: bytes
    filename: str
    html: str
    mime_type: str

    def save(self, directory: Union[str, Path] = '.') -> Path:
        """Write the document into a directory under its own filename."""
        output = Path(directory) / self.filename
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_bytes(self.content)
        except OSError as e:
            raise ExportError(f"Could not write {output}: {e}") from e
        logger.info(f"Wrote {output} ({len(self.content)} bytes)")
        return output


class DocExporter:
    """
    Renders case reports as Word-compatible .doc files.

    Args:
        settings: Document settings; the module-level defaults when omitted
    """

    def __init__(self, settings: Optional[DocSettings] = None):
        self.settings = settings or doc_settings
        self.logger = logging.getLogger(__name__)

    def export(self, data: Any, filename: Optional[str] = None) -> DocExport:
        """
        Render a case report.

        Args:
            data: Case data
            filename: Output name; defaults to Case_<initials>.doc

        Returns:
            DocExport with bytes, filename, HTML and MIME type
        """
        case = data if isinstance(data, CaseExport) else CaseExport.from_data(data)
        html = create_doc_html(case, self.settings)
        content = (self.settings.DOC_BOM + html).encode('utf-8')

        name = sanitize_filename(filename) if filename else export_filename(case.initials, 'doc')
        self.logger.debug(f"Rendered {name} ({len(content)} bytes)")

        return DocExport(
            content=content,
            filename=name or export_filename('', 'doc'),
            html=html,
            mime_type=self.settings.DOC_MIME_TYPE,
        )

    def save(self, data: Any, directory: Union[str, Path] = '.') -> Path:
        """Render a case report and write it into a directory."""
        return self.export(data).save(directory)
