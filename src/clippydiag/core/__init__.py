"""Core module exports."""

from clippydiag.core.errors import (
    ClippyDiagError,
    ConfigError,
    ErrorCode,
    MessageParseError,
    ToolError,
)
from clippydiag.core.logging import (
    configure_logging,
    get_logger,
    get_run_id,
    run_scope,
)

__all__ = [
    # Errors
    "ClippyDiagError",
    "ConfigError",
    "ErrorCode",
    "MessageParseError",
    "ToolError",
    # Logging
    "configure_logging",
    "get_logger",
    "get_run_id",
    "run_scope",
]
