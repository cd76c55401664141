# ============================================================================
# src/geriatric_case/__init__.py
# ============================================================================
"""
Geriatric Case Review Helper

Pulls age/sex, HPI and medications out of free-text clinical notes,
builds a geriatric safety-review prompt for an external AI, and exports
the finished case as PowerPoint or Word.
"""

__version__ = "1.0.0"

from .core import (
    ClinicalRecord,
    PromptRequest,
    ValidationResult,
    CaseExport,
    extract_clinical_data,
    generate_prompt,
    validate_prompt_data,
)
from .utils import sanitize_text, escape_html, truncate_text

__all__ = [
    '__version__',
    'ClinicalRecord',
    'PromptRequest',
    'ValidationResult',
    'CaseExport',
    'extract_clinical_data',
    'generate_prompt',
    'validate_prompt_data',
    'sanitize_text',
    'escape_html',
    'truncate_text',
]
