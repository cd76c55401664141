# ============================================================================
# src/geriatric_case/config/import_config.py
# ============================================================================
"""
Import Settings
- OCR language and image size
- Scanned-page detection
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class ImportSettings(BaseSettings):
    OCR_LANGUAGE: str = Field(
        default="eng",
        description="Tesseract language pack used for image OCR"
    )
    OCR_MAX_DIMENSION: int = Field(
        default=2500,
        gt=0,
        description="Images larger than this (px, either side) are downscaled before OCR"
    )
    MIN_CHARS_PER_PAGE: int = Field(
        default=50,
        ge=0,
        description="PDF pages with less text than this are reported as likely scanned"
    )


import_settings = ImportSettings()
