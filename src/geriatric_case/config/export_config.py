# ============================================================================
# src/geriatric_case/config/export_config.py
# ============================================================================
"""
Export Settings
- Slide text limits
- Slide colors and font sizes
- Word (HTML) document envelope
"""

from typing import Dict

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ExportSettings(BaseSettings):
    model_config = SettingsConfigDict(frozen=True)

    MAX_TEXT_PER_SLIDE: int = Field(
        default=1000,
        gt=0,
        description="Characters of AI response per slide before an overflow slide"
    )
    MAX_HPI_LENGTH: int = Field(
        default=400,
        gt=0,
        description="HPI characters shown on the clinical context slide"
    )
    MAX_MEDS_LENGTH: int = Field(
        default=400,
        gt=0,
        description="Medication characters shown on the clinical context slide"
    )
    COLORS: Dict[str, str] = Field(
        default_factory=lambda: {
            'primary': '2c3e50',
            'secondary': '7f8c8d',
            'accent': '27ae60',
            'highlight': 'c0392b',
            'text': '333333',
        },
        description="Hex RGB colors by role"
    )
    FONTS: Dict[str, int] = Field(
        default_factory=lambda: {
            'title': 32,
            'subtitle': 24,
            'heading': 18,
            'body': 14,
            'small': 12,
        },
        description="Font sizes in points by role"
    )


class DocSettings(BaseSettings):
    model_config = SettingsConfigDict(frozen=True)

    DOC_MIME_TYPE: str = Field(
        default='application/msword',
        description="MIME type served for the Word export"
    )
    DOC_BOM: str = Field(
        default='\ufeff',
        description="UTF-8 byte order mark so Word detects Unicode"
    )
    DOC_XML_NAMESPACES: Dict[str, str] = Field(
        default_factory=lambda: {
            'office': 'urn:schemas-microsoft-com:office:office',
            'word': 'urn:schemas-microsoft-com:office:word',
            'html': 'http://www.w3.org/TR/REC-html40',
        },
        description="Office namespaces declared on the <html> element"
    )


export_settings = ExportSettings()
doc_settings = DocSettings()
