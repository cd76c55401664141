# src/geriatric_case/exporters/__init__.py
"""
Case Export Module

Renders a case (ID, initials, HPI, meds, AI response) as a PowerPoint
deck or a Word-compatible .doc.
"""

from .document import DocExport, DocExporter, create_doc_bytes, create_doc_html
from .slides import PPTExporter, SlideElement, SlideSpec, create_slide_data

__all__ = [
    "DocExport",
    "DocExporter",
    "create_doc_bytes",
    "create_doc_html",
    "PPTExporter",
    "SlideElement",
    "SlideSpec",
    "create_slide_data",
]
