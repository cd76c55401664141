# ============================================================================
# src/geriatric_case/core/__init__.py
# ============================================================================
"""
Text-processing core: record types, field extraction and prompt building.

Everything here is pure and synchronous; nothing raises on bad input.
"""

from .record import (
    ClinicalRecord,
    PromptRequest,
    ValidationResult,
    CaseExport,
    read_field,
)
from .field_extractor import (
    PATTERNS,
    SectionRule,
    extract_value,
    extract_section,
    extract_clinical_data,
    smart_populate,
)
from .prompt_builder import (
    PROMPT_TEMPLATE,
    generate_prompt,
    validate_prompt_data,
    generate_magic_prompt,
)

__all__ = [
    'ClinicalRecord',
    'PromptRequest',
    'ValidationResult',
    'CaseExport',
    'read_field',
    'PATTERNS',
    'SectionRule',
    'extract_value',
    'extract_section',
    'extract_clinical_data',
    'smart_populate',
    'PROMPT_TEMPLATE',
    'generate_prompt',
    'validate_prompt_data',
    'generate_magic_prompt',
]
