"""Lint module - cargo clippy output to normalized per-file diagnostics."""

from clippydiag.lint.filters import is_displayable
from clippydiag.lint.messages import decode_message, parse_line
from clippydiag.lint.models import (
    CheckResult,
    DiagnosticRecord,
    NormalizedDiagnostic,
    PipelineReport,
    RunResult,
    Severity,
    Span,
)
from clippydiag.lint.ops import ClippyOps
from clippydiag.lint.pipeline import extract, run_pipeline
from clippydiag.lint.projector import project
from clippydiag.lint.runner import ClippyRunner
from clippydiag.lint.severity import SeverityMap, map_severity
from clippydiag.lint.sink import DiagnosticSink, MemorySink

__all__ = [
    "CheckResult",
    "ClippyOps",
    "ClippyRunner",
    "DiagnosticRecord",
    "DiagnosticSink",
    "MemorySink",
    "NormalizedDiagnostic",
    "PipelineReport",
    "RunResult",
    "Severity",
    "SeverityMap",
    "Span",
    "decode_message",
    "extract",
    "is_displayable",
    "map_severity",
    "parse_line",
    "project",
    "run_pipeline",
]
