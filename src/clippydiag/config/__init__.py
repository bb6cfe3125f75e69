"""Config module exports."""

from clippydiag.config.loader import load_config
from clippydiag.config.models import ClippyConfig, LoggingConfig, LogOutputConfig

__all__ = [
    "load_config",
    "ClippyConfig",
    "LoggingConfig",
    "LogOutputConfig",
]
