# ============================================================================
# src/geriatric_case/utils/file_utils.py
# ============================================================================
"""
File utilities for imports and exports.
"""

import os


def sanitize_filename(filename: str) -> str:
    """
    Sanitize filename by removing invalid characters.

    Args:
        filename: Original filename

    Returns:
        Sanitized filename
    """
    invalid_chars = '<>:"/\\|?*'
    for char in invalid_chars:
        filename = filename.replace(char, '_')

    # Control characters are never valid in names
    filename = ''.join(ch for ch in filename if ch.isprintable())

    filename = filename.strip('. ')

    max_length = 255
    if len(filename) > max_length:
        name, ext = os.path.splitext(filename)
        filename = name[:max_length - len(ext)] + ext

    return filename


def export_filename(initials: str, extension: str) -> str:
    """Default export name, e.g. Case_AB.pptx or Case_export.doc."""
    return sanitize_filename(f"Case_{initials or 'export'}.{extension}")
