"""
Report Assembly Module

Composes the immutable DiagnosticReport consumed by display and export.
"""
from .assembler import ReportAssembler, DiagnosticReport, NarrativeSource, assemble

__all__ = [
    "ReportAssembler",
    "DiagnosticReport",
    "NarrativeSource",
    "assemble",
]
