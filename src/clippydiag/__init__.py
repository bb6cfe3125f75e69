"""clippydiag - cargo clippy JSON output as per-file editor diagnostics."""

__version__ = "0.1.0"
