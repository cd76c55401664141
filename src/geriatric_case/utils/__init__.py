# ============================================================================
# src/geriatric_case/utils/__init__.py
# ============================================================================
"""
Utility modules for the geriatric case helper.
"""

from .exceptions import (
    GeriatricCaseError,
    DocumentImportError,
    UnsupportedFileTypeError,
    TextExtractionError,
    ExportError,
    ConfigurationError,
)

from .logging import (
    setup_logging,
    get_logger,
    log_performance,
)

from .sanitizer import (
    sanitize_text,
    escape_html,
    truncate_text,
)

from .text_formatter import (
    format_medical_text,
    format_medication_list,
)

__all__ = [
    # Exceptions
    'GeriatricCaseError',
    'DocumentImportError',
    'UnsupportedFileTypeError',
    'TextExtractionError',
    'ExportError',
    'ConfigurationError',
    # Logging
    'setup_logging',
    'get_logger',
    'log_performance',
    # Sanitizer
    'sanitize_text',
    'escape_html',
    'truncate_text',
    # Formatting
    'format_medical_text',
    'format_medication_list',
]
