# ============================================================================
# src/geriatric_case/utils/exceptions.py
# ============================================================================
"""
Custom exceptions for the geriatric case review helper.

The text-processing core never raises for bad input; these errors belong
to the import/export adapters and the surfaces built on top of them.
"""


class GeriatricCaseError(Exception):
    """Base exception for all geriatric case errors."""
    pass


class DocumentImportError(GeriatricCaseError):
    """Error importing a document (missing file, unreadable content)."""
    pass


class UnsupportedFileTypeError(DocumentImportError):
    """File extension is not in the supported set."""
    def __init__(self, extension: str):
        super().__init__(f"Unsupported file type: .{extension}")
        self.extension = extension


class TextExtractionError(DocumentImportError):
    """A parsing library failed to produce text for a file."""
    def __init__(self, message: str, file_type: str):
        super().__init__(message)
        self.file_type = file_type


class ExportError(GeriatricCaseError):
    """Error generating a PPTX or DOC export."""
    pass


class ConfigurationError(GeriatricCaseError):
    """Invalid configuration."""
    pass
