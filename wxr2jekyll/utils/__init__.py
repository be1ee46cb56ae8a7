"""
Utility helpers used by the export tool.

This subpackage exposes the error types raised by the pipeline and the
reporter that prints progress and diagnostics.
"""

from .errors import (
    ERRORS,
    ConversionError,
    DocumentStructureError,
    ExportError,
    MalformedDate,
    Reporter,
)

__all__ = [
    "ERRORS",
    "ConversionError",
    "DocumentStructureError",
    "ExportError",
    "MalformedDate",
    "Reporter",
]
