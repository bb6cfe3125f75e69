"""Lint models - cargo messages, diagnostics and results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

# Value of ``$message_type`` on rustc diagnostics
DIAGNOSTIC_MESSAGE_TYPE = "diagnostic"


class Severity(Enum):
    """Normalized diagnostic severity."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"
    HINT = "hint"


@dataclass(frozen=True)
class Span:
    """One source location reference, 1-based as reported by rustc."""

    file_name: str
    line_start: int = 1
    line_end: int = 1
    column_start: int = 1
    column_end: int = 1
    is_primary: bool = False


@dataclass(frozen=True)
class ChildMessage:
    """Nested note/help message attached to a diagnostic."""

    message: str
    level: str | None = None


@dataclass(frozen=True)
class DiagnosticRecord:
    """The subset of a compiler message recognized as a lint diagnostic."""

    message: str
    level: str | None = None
    code: str | None = None  # "clippy::needless_return"; None when rustc gave no code
    spans: tuple[Span, ...] = ()
    children: tuple[ChildMessage, ...] = ()
    rendered: str | None = None
    message_type: str = DIAGNOSTIC_MESSAGE_TYPE


# =============================================================================
# Cargo message kinds
# =============================================================================


@dataclass(frozen=True)
class DiagnosticMessage:
    """``compiler-message`` carrying a diagnostic (or a bare rustc diagnostic)."""

    record: DiagnosticRecord
    package_id: str | None = None
    manifest_path: str | None = None


@dataclass(frozen=True)
class CompilerArtifact:
    """``compiler-artifact`` - a crate target finished building."""

    package_id: str | None = None
    target_name: str | None = None


@dataclass(frozen=True)
class BuildScriptExecuted:
    """``build-script-executed`` - a build.rs ran."""

    package_id: str | None = None


@dataclass(frozen=True)
class BuildFinished:
    """``build-finished`` - last message of a cargo invocation."""

    success: bool


@dataclass(frozen=True)
class OtherMessage:
    """Anything else: unknown reasons, non-diagnostic compiler messages."""

    reason: str | None = None


Message = DiagnosticMessage | CompilerArtifact | BuildScriptExecuted | BuildFinished | OtherMessage


# =============================================================================
# Output
# =============================================================================


@dataclass(frozen=True)
class NormalizedDiagnostic:
    """A diagnostic ready for a presentation layer. All positions are 0-based."""

    line_start: int
    line_end: int
    col_start: int
    col_end: int
    severity: Severity
    message: str
    source: str | None = None
    file_name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "file_name": self.file_name,
            "line_start": self.line_start,
            "line_end": self.line_end,
            "col_start": self.col_start,
            "col_end": self.col_end,
            "severity": self.severity.value,
            "message": self.message,
            "source": self.source,
        }


@dataclass
class PipelineReport:
    """Diagnostics extracted from one linter run, with line accounting."""

    diagnostics: list[NormalizedDiagnostic] = field(default_factory=list)
    lines_total: int = 0
    parse_failures: int = 0
    diagnostic_messages: int = 0
    dropped: int = 0

    @property
    def all_lines_failed(self) -> bool:
        """True when there was output but none of it was valid JSON."""
        return self.lines_total > 0 and self.parse_failures == self.lines_total


@dataclass
class RunResult:
    """Captured output of one linter process."""

    command: list[str]
    stdout: str
    stderr: str
    exit_status: int
    duration_seconds: float = 0.0

    @property
    def success(self) -> bool:
        return self.exit_status == 0


@dataclass
class CheckResult:
    """Outcome of checking one target file."""

    target: str
    status: Literal["published", "stale", "disabled", "skipped", "error"]
    diagnostics: list[NormalizedDiagnostic] = field(default_factory=list)
    report: PipelineReport | None = None
    exit_status: int | None = None
    sequence: int | None = None
    error_detail: str | None = None
    duration_seconds: float = 0.0
