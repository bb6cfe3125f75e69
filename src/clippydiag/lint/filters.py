"""Selection of diagnostics that belong to the target file."""

from __future__ import annotations

import re

from clippydiag.lint.models import DiagnosticRecord


def _normalize_path(path: str) -> str:
    return path.replace("\\", "/")


def span_matches_target(file_name: str, target_file: str) -> bool:
    """Whether a span path (usually crate-relative) names ``target_file``.

    The span path must be a trailing, whole-component portion of the target
    path: ``src/main.rs`` matches ``/ws/crate/src/main.rs`` but not
    ``/ws/crate/src/domain.rs``.
    """
    span_path = _normalize_path(file_name)
    while span_path.startswith("./"):
        span_path = span_path[2:]
    if not span_path:
        return False
    pattern = r"(?:^|/)" + re.escape(span_path) + r"$"
    return re.search(pattern, _normalize_path(target_file)) is not None


def is_displayable(record: DiagnosticRecord, target_file: str) -> bool:
    """Whether ``record`` should be shown for ``target_file``.

    Requires at least one span, a first span in the target file and a rule
    code. Records without a code come from renamed or removed lints and are
    dropped rather than shown without a source.
    """
    if not record.spans:
        return False
    if not span_matches_target(record.spans[0].file_name, target_file):
        return False
    return record.code is not None
