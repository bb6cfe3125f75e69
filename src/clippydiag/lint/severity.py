"""Mapping of rustc/clippy level names to normalized severities."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from clippydiag.lint.models import Severity

# Clippy lints can be configured as "warn" but the JSON level is "warning".
# "deny" never appears in JSON output (denied lints are reported as "error")
# but is accepted so configs can mirror clippy.toml vocabulary.
DEFAULT_SEVERITY_TABLE: Mapping[str, Severity] = MappingProxyType(
    {
        "deny": Severity.ERROR,
        "error": Severity.ERROR,
        "warning": Severity.WARNING,
        "info": Severity.INFO,
        "note": Severity.INFO,
        "help": Severity.HINT,
    }
)

DEFAULT_SEVERITY = Severity.WARNING


@dataclass(frozen=True)
class SeverityMap:
    """Level name -> Severity table with a fallback for unmapped levels.

    Keys are lowercased on construction and lookups are case-insensitive.
    """

    table: Mapping[str, Severity] = field(default_factory=lambda: DEFAULT_SEVERITY_TABLE)
    default: Severity = DEFAULT_SEVERITY

    def __post_init__(self) -> None:
        normalized = {key.lower(): value for key, value in self.table.items()}
        object.__setattr__(self, "table", MappingProxyType(normalized))


def map_severity(level: str | None, table: SeverityMap) -> Severity:
    """Map a level string to a Severity. Total: unknown or missing -> default."""
    if not level:
        return table.default
    return table.table.get(level.lower(), table.default)
