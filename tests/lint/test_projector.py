"""Tests for lint/projector.py module."""

from __future__ import annotations

from clippydiag.lint.models import ChildMessage, DiagnosticRecord, Severity, Span
from clippydiag.lint.projector import COLUMN_OFFSET, LINE_OFFSET, project
from clippydiag.lint.severity import SeverityMap


def _record(**kwargs: object) -> DiagnosticRecord:
    defaults: dict[str, object] = {
        "message": "this is a message",
        "level": "warning",
        "code": "clippy::integer_division",
        "spans": (Span("src/main.rs", line_start=5, line_end=7, column_start=3, column_end=9),),
    }
    defaults.update(kwargs)
    return DiagnosticRecord(**defaults)  # type: ignore[arg-type]


class TestProject:
    """Tests for project."""

    def test_positions_are_zero_based(self) -> None:
        diag = project(_record(), SeverityMap())
        assert (diag.line_start, diag.line_end) == (4, 6)
        assert (diag.col_start, diag.col_end) == (2, 8)

    def test_lines_and_columns_use_the_same_convention(self) -> None:
        assert LINE_OFFSET == COLUMN_OFFSET == 1

    def test_fields(self) -> None:
        diag = project(_record(), SeverityMap())
        assert diag.severity == Severity.WARNING
        assert diag.message == "this is a message"
        assert diag.source == "clippy::integer_division"
        assert diag.file_name == "src/main.rs"

    def test_severity_from_map(self) -> None:
        table = SeverityMap(table={"warning": Severity.HINT})
        assert project(_record(), table).severity == Severity.HINT

    def test_missing_level_uses_default(self) -> None:
        diag = project(_record(level=None), SeverityMap(default=Severity.INFO))
        assert diag.severity == Severity.INFO

    def test_message_falls_back_to_first_child(self) -> None:
        record = _record(
            message="",
            children=(ChildMessage("for further information visit ..."), ChildMessage("second")),
        )
        assert project(record, SeverityMap()).message == "for further information visit ..."

    def test_message_empty_without_children(self) -> None:
        assert project(_record(message=""), SeverityMap()).message == ""

    def test_uses_first_span_only(self) -> None:
        record = _record(
            spans=(
                Span("src/main.rs", line_start=2, line_end=2, column_start=1, column_end=4),
                Span("src/main.rs", line_start=40, line_end=41, column_start=1, column_end=1),
            )
        )
        diag = project(record, SeverityMap())
        assert (diag.line_start, diag.col_start, diag.col_end) == (1, 0, 3)

    def test_to_dict(self) -> None:
        assert project(_record(), SeverityMap()).to_dict() == {
            "file_name": "src/main.rs",
            "line_start": 4,
            "line_end": 6,
            "col_start": 2,
            "col_end": 8,
            "severity": "warning",
            "message": "this is a message",
            "source": "clippy::integer_division",
        }
