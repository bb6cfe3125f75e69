"""Decoding of cargo ``--message-format=json`` lines.

Each line of cargo output is one JSON object with a ``reason`` field. Only
``compiler-message`` objects whose nested ``message`` has
``$message_type == "diagnostic"`` carry lint diagnostics; everything else is
decoded into its own kind so callers can match on it and move on.
"""

from __future__ import annotations

import json
from typing import Any

from clippydiag.core.errors import MessageParseError
from clippydiag.lint.models import (
    DIAGNOSTIC_MESSAGE_TYPE,
    BuildFinished,
    BuildScriptExecuted,
    ChildMessage,
    CompilerArtifact,
    DiagnosticMessage,
    DiagnosticRecord,
    Message,
    OtherMessage,
    Span,
)

RawMessage = Any

REASON_COMPILER_MESSAGE = "compiler-message"
REASON_COMPILER_ARTIFACT = "compiler-artifact"
REASON_BUILD_SCRIPT_EXECUTED = "build-script-executed"
REASON_BUILD_FINISHED = "build-finished"


def parse_line(line: str) -> RawMessage:
    """Parse one line of output as JSON.

    Raises:
        MessageParseError: If the line is not valid JSON.
    """
    try:
        return json.loads(line)
    except json.JSONDecodeError as e:
        raise MessageParseError.malformed(line, str(e)) from e


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def _int_or(value: Any, default: int) -> int:
    # bool is an int subclass; rustc never sends one here
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    return default


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _decode_span(data: Any) -> Span | None:
    if not isinstance(data, dict):
        return None
    return Span(
        file_name=_str_or_none(data.get("file_name")) or "",
        line_start=_int_or(data.get("line_start"), 1),
        line_end=_int_or(data.get("line_end"), 1),
        column_start=_int_or(data.get("column_start"), 1),
        column_end=_int_or(data.get("column_end"), 1),
        is_primary=bool(data.get("is_primary", False)),
    )


def _decode_child(data: Any) -> ChildMessage | None:
    if not isinstance(data, dict):
        return None
    return ChildMessage(
        message=_str_or_none(data.get("message")) or "",
        level=_str_or_none(data.get("level")),
    )


def _decode_code(data: Any) -> str | None:
    """Extract ``code.code``; rustc sends ``"code": null`` for uncoded messages."""
    if isinstance(data, dict):
        return _str_or_none(data.get("code")) or None
    return None


def decode_record(msg: dict[str, Any]) -> DiagnosticRecord:
    """Decode the nested ``message`` object of a diagnostic."""
    decoded_spans = [_decode_span(s) for s in _list(msg.get("spans"))]
    # Only the first span is ever used; a later one must not take its place
    if decoded_spans and decoded_spans[0] is None:
        decoded_spans = []
    spans = tuple(s for s in decoded_spans if s is not None)
    children = tuple(
        c for c in map(_decode_child, _list(msg.get("children"))) if c is not None
    )
    return DiagnosticRecord(
        message=_str_or_none(msg.get("message")) or "",
        level=_str_or_none(msg.get("level")),
        code=_decode_code(msg.get("code")),
        spans=spans,
        children=children,
        rendered=_str_or_none(msg.get("rendered")),
        message_type=_str_or_none(msg.get("$message_type")) or DIAGNOSTIC_MESSAGE_TYPE,
    )


def _is_diagnostic(msg: Any) -> bool:
    return isinstance(msg, dict) and msg.get("$message_type") == DIAGNOSTIC_MESSAGE_TYPE


def decode_message(raw: RawMessage) -> Message:
    """Classify a parsed line into one of the cargo message kinds.

    Never raises: missing or mistyped fields fall back to defaults and
    unrecognized shapes become ``OtherMessage``.
    """
    if not isinstance(raw, dict):
        return OtherMessage()

    reason = raw.get("reason")
    if reason is None:
        # Bare rustc --error-format=json output has no cargo envelope
        if _is_diagnostic(raw):
            return DiagnosticMessage(record=decode_record(raw))
        return OtherMessage()

    if reason == REASON_COMPILER_MESSAGE:
        msg = raw.get("message")
        if not _is_diagnostic(msg):
            return OtherMessage(reason=reason)
        return DiagnosticMessage(
            record=decode_record(msg),
            package_id=_str_or_none(raw.get("package_id")),
            manifest_path=_str_or_none(raw.get("manifest_path")),
        )

    if reason == REASON_COMPILER_ARTIFACT:
        target = raw.get("target")
        return CompilerArtifact(
            package_id=_str_or_none(raw.get("package_id")),
            target_name=_str_or_none(target.get("name")) if isinstance(target, dict) else None,
        )

    if reason == REASON_BUILD_SCRIPT_EXECUTED:
        return BuildScriptExecuted(package_id=_str_or_none(raw.get("package_id")))

    if reason == REASON_BUILD_FINISHED:
        return BuildFinished(success=bool(raw.get("success", False)))

    return OtherMessage(reason=_str_or_none(reason))
