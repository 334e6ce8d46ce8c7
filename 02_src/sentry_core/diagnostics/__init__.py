"""Diagnostics module."""

from .logger import (
    DiagnosticLogger,
    IDiagnosticLogger,
    InMemoryDiagnosticLogger,
    resolve_diagnostic_logger,
)

__all__ = [
    "DiagnosticLogger",
    "IDiagnosticLogger",
    "InMemoryDiagnosticLogger",
    "resolve_diagnostic_logger",
]
