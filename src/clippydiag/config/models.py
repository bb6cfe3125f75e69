"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (CLIPPYDIAG__KEY, CLIPPYDIAG__SECTION__KEY)
3. Project YAML (<project>/.clippydiag.yaml)
4. Global YAML (~/.config/clippydiag/config.yaml)
5. Built-in defaults (this file)

Examples:
    CLIPPYDIAG__ENABLED=false
    CLIPPYDIAG__DEFAULT_SEVERITY=info
    CLIPPYDIAG__EXTRA_ARGS='["--", "-W", "clippy::pedantic"]'
    CLIPPYDIAG__LOGGING__LEVEL=DEBUG
"""

from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from clippydiag.lint.models import Severity
from clippydiag.lint.severity import DEFAULT_SEVERITY, DEFAULT_SEVERITY_TABLE, SeverityMap

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        CLIPPYDIAG__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG also reports every malformed output line.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])

    @field_validator("level", mode="before")
    @classmethod
    def upper_level(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v


def _lower_severity(value: Any) -> Any:
    if isinstance(value, str):
        return value.strip().lower()
    return value


class ClippyConfig(BaseModel):
    """Root configuration for clippydiag.

    Env vars:
        CLIPPYDIAG__ENABLED: Run clippy and publish diagnostics
        CLIPPYDIAG__DEFAULT_SEVERITY: Severity for levels missing from severity_map
        CLIPPYDIAG__SEVERITY_MAP: JSON object of level -> severity
        CLIPPYDIAG__EXTRA_ARGS: JSON list appended to the clippy command
    """

    enabled: bool = Field(
        default=True,
        description="When false, no linter runs and published diagnostics are cleared.",
    )
    severity_map: dict[str, Severity] = Field(
        default_factory=lambda: dict(DEFAULT_SEVERITY_TABLE),
        description="Clippy JSON level (error, warning, note, help, ...) to severity. "
        "Note that lints configured as 'warn' are reported with level 'warning'.",
    )
    default_severity: Severity = Field(
        default=DEFAULT_SEVERITY,
        description="Severity for levels that are absent or not in severity_map.",
    )
    extra_args: list[str] = Field(
        default_factory=list,
        description="Additional arguments appended to "
        "'cargo clippy --message-format=json --quiet --workspace --all-targets'.",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("severity_map", mode="before")
    @classmethod
    def normalize_severity_map(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return {
                str(level).lower(): _lower_severity(severity) for level, severity in v.items()
            }
        return v

    @field_validator("default_severity", mode="before")
    @classmethod
    def normalize_default_severity(cls, v: Any) -> Any:
        return _lower_severity(v)

    def severity_table(self) -> SeverityMap:
        """The immutable lookup table used by the pipeline."""
        return SeverityMap(table=self.severity_map, default=self.default_severity)
