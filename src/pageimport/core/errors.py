"""Reason codes and the exception used for per-document import failures"""

from enum import Enum


class ReasonCode(str, Enum):
    """Why a single document could not be imported"""
    file_not_found = "file_not_found"
    read_error = "read_error"
    empty_file = "empty_file"
    invalid_extension = "invalid_extension"
    file_too_large = "file_too_large"
    no_title = "no_title"
    no_content = "no_content"
    extraction_exception = "extraction_exception"
    import_exception = "import_exception"


class ExtractionError(Exception):
    """A fatal problem with one source document. Never aborts sibling documents."""

    def __init__(self, reason: ReasonCode, message: str):
        super().__init__(message)
        self.reason = reason
        self.message = message
