"""Line-oriented extraction of target-file diagnostics from linter output.

Works on the complete captured stdout of one linter run. Malformed lines,
non-diagnostic messages and diagnostics for other files are skipped; they
never abort the run.
"""

from __future__ import annotations

from typing import Protocol

from clippydiag.core.errors import MessageParseError
from clippydiag.core.logging import get_logger
from clippydiag.lint.filters import is_displayable
from clippydiag.lint.messages import decode_message, parse_line
from clippydiag.lint.models import DiagnosticMessage, NormalizedDiagnostic, PipelineReport
from clippydiag.lint.projector import project
from clippydiag.lint.severity import SeverityMap

log = get_logger("pipeline")


class DebugLog(Protocol):
    """Optional sink for the tool's own troubleshooting output."""

    def log(self, text: str) -> None: ...


def iter_lines(raw_output: str) -> list[str]:
    """Split output on newlines, dropping blank lines and CRLF remnants."""
    lines = (line.rstrip("\r") for line in raw_output.split("\n"))
    return [line for line in lines if line.strip()]


def extract(
    raw_output: str,
    target_file: str,
    severity_map: SeverityMap,
    *,
    debug_log: DebugLog | None = None,
) -> PipelineReport:
    """Run parse -> decode -> filter -> project over every line."""
    report = PipelineReport()
    for lineno, line in enumerate(iter_lines(raw_output), start=1):
        report.lines_total += 1
        try:
            raw = parse_line(line)
        except MessageParseError as e:
            report.parse_failures += 1
            log.debug("clippy_line_malformed", lineno=lineno, reason=e.details["reason"])
            if debug_log is not None:
                debug_log.log(f"malformed line {lineno}: {line}")
            continue

        message = decode_message(raw)
        if not isinstance(message, DiagnosticMessage):
            continue
        report.diagnostic_messages += 1

        if not is_displayable(message.record, target_file):
            report.dropped += 1
            continue
        report.diagnostics.append(project(message.record, severity_map))

    log.debug(
        "clippy_output_extracted",
        target=target_file,
        lines=report.lines_total,
        malformed=report.parse_failures,
        diagnostics=len(report.diagnostics),
    )
    return report


def run_pipeline(
    raw_output: str,
    target_file: str,
    severity_map: SeverityMap,
    *,
    debug_log: DebugLog | None = None,
) -> list[NormalizedDiagnostic]:
    """Ordered diagnostics for ``target_file`` found in ``raw_output``."""
    return extract(raw_output, target_file, severity_map, debug_log=debug_log).diagnostics
