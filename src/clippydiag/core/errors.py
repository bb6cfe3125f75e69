"""clippydiag error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Parse
- 4xxx: Tool
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Parse (3xxx)
    PARSE_MALFORMED = 3001

    # Tool (4xxx)
    TOOL_NOT_FOUND = 4001
    TOOL_SPAWN_FAILED = 4002


@dataclass(frozen=True, slots=True)
class ClippyDiagError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'TOOL_NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON output."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(ClippyDiagError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class MessageParseError(ClippyDiagError):
    """A line of linter output that is not valid JSON.

    Raised per line and recovered by the pipeline; never fatal to a run.
    """

    @classmethod
    def malformed(cls, line: str, reason: str) -> "MessageParseError":
        return cls(
            code=ErrorCode.PARSE_MALFORMED,
            message=f"Malformed JSON line: {reason}",
            details={"line": line[:200], "reason": reason},
        )


class ToolError(ClippyDiagError):
    """Errors starting the external linter process."""

    @classmethod
    def not_found(cls, executable: str) -> "ToolError":
        return cls(
            code=ErrorCode.TOOL_NOT_FOUND,
            message=f"{executable} executable not found in PATH",
            details={"executable": executable},
        )

    @classmethod
    def spawn_failed(cls, command: list[str], reason: str) -> "ToolError":
        return cls(
            code=ErrorCode.TOOL_SPAWN_FAILED,
            message=f"Failed to start {command[0]}: {reason}",
            retryable=True,
            details={"command": command, "reason": reason},
        )
