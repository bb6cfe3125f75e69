"""Projection of diagnostic records onto 0-based editor positions."""

from __future__ import annotations

from clippydiag.lint.models import DiagnosticRecord, NormalizedDiagnostic
from clippydiag.lint.severity import SeverityMap, map_severity

# rustc reports 1-based lines and columns; output is 0-based for both
LINE_OFFSET = 1
COLUMN_OFFSET = 1


def _message_text(record: DiagnosticRecord) -> str:
    if record.message:
        return record.message
    if record.children:
        return record.children[0].message
    return ""


def project(record: DiagnosticRecord, severity_map: SeverityMap) -> NormalizedDiagnostic:
    """Convert a displayable record. Caller must have checked ``is_displayable``."""
    span = record.spans[0]
    return NormalizedDiagnostic(
        line_start=span.line_start - LINE_OFFSET,
        line_end=span.line_end - LINE_OFFSET,
        col_start=span.column_start - COLUMN_OFFSET,
        col_end=span.column_end - COLUMN_OFFSET,
        severity=map_severity(record.level, severity_map),
        message=_message_text(record),
        source=record.code,
        file_name=span.file_name,
    )
