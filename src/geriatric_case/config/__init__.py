# ============================================================================
# src/geriatric_case/config/__init__.py
# ============================================================================
"""
Convenient imports for all settings
"""

from .export_config import ExportSettings, DocSettings, export_settings, doc_settings
from .import_config import ImportSettings, import_settings
from .logging_config import LoggingSettings, logging_settings
