"""Diagnostic sinks - where finished diagnostic lists are published."""

from __future__ import annotations

import threading
from collections.abc import Sequence
from typing import Protocol

from clippydiag.core.logging import get_logger
from clippydiag.lint.models import NormalizedDiagnostic

log = get_logger("sink")


class DiagnosticSink(Protocol):
    """Receives complete diagnostic lists, one per target file."""

    def publish(
        self,
        target: str,
        diagnostics: Sequence[NormalizedDiagnostic],
        *,
        sequence: int | None = None,
    ) -> bool:
        """Replace the diagnostics for ``target``. Returns False if rejected."""
        ...

    def clear(self, target: str) -> None:
        """Remove all diagnostics for ``target``."""
        ...

    def clear_all(self) -> None:
        """Remove diagnostics for every target."""
        ...


class MemorySink:
    """Thread-safe in-memory sink with last-run-wins semantics.

    Publications carry the sequence number of the run that produced them.
    A publication older than the last accepted one for the same target is
    rejected, so a slow earlier run cannot overwrite a newer result.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._published: dict[str, tuple[NormalizedDiagnostic, ...]] = {}
        self._sequences: dict[str, int] = {}

    def publish(
        self,
        target: str,
        diagnostics: Sequence[NormalizedDiagnostic],
        *,
        sequence: int | None = None,
    ) -> bool:
        with self._lock:
            last = self._sequences.get(target)
            if sequence is not None and last is not None and sequence < last:
                log.debug("publish_rejected_stale", target=target, sequence=sequence, last=last)
                return False
            self._published[target] = tuple(diagnostics)
            if sequence is not None:
                self._sequences[target] = sequence
        log.debug("diagnostics_published", target=target, count=len(diagnostics))
        return True

    def clear(self, target: str) -> None:
        # Sequence numbers survive a clear so stale runs stay rejected
        with self._lock:
            self._published.pop(target, None)

    def clear_all(self) -> None:
        with self._lock:
            self._published.clear()

    def get(self, target: str) -> tuple[NormalizedDiagnostic, ...]:
        with self._lock:
            return self._published.get(target, ())

    def targets(self) -> list[str]:
        with self._lock:
            return sorted(self._published)
