"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages,
and provides factories for cargo JSON messages.
"""

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Insert local src directory at the beginning of sys.path
# This ensures that the local clippydiag package is used, not any installed one
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

# Force reimport of clippydiag modules if already imported
for module_name in list(sys.modules.keys()):
    if module_name.startswith("clippydiag"):
        del sys.modules[module_name]


def _span(
    file_name: str = "src/main.rs",
    line_start: int = 10,
    line_end: int = 10,
    column_start: int = 5,
    column_end: int = 20,
    is_primary: bool = True,
) -> dict[str, Any]:
    return {
        "file_name": file_name,
        "byte_start": 0,
        "byte_end": 0,
        "line_start": line_start,
        "line_end": line_end,
        "column_start": column_start,
        "column_end": column_end,
        "is_primary": is_primary,
        "text": [],
        "label": None,
        "suggested_replacement": None,
        "suggestion_applicability": None,
        "expansion": None,
    }


def _compiler_message(
    *,
    file_name: str = "src/main.rs",
    message: str = "unneeded `return` statement",
    level: str | None = "warning",
    code: str | None = "clippy::needless_return",
    spans: list[dict[str, Any]] | None = None,
    children: list[dict[str, Any]] | None = None,
    **span_fields: Any,
) -> dict[str, Any]:
    """A cargo ``compiler-message`` object shaped like real clippy output."""
    if children is None:
        children = [
            {
                "children": [],
                "code": None,
                "level": "help",
                "message": "remove `return`",
                "rendered": None,
                "spans": [],
            }
        ]
    return {
        "reason": "compiler-message",
        "package_id": "path+file:///ws/demo#0.1.0",
        "manifest_path": "/ws/demo/Cargo.toml",
        "target": {"kind": ["bin"], "name": "demo", "src_path": "/ws/demo/src/main.rs"},
        "message": {
            "$message_type": "diagnostic",
            "rendered": f"{level}: {message}\n",
            "children": children,
            "code": {"code": code, "explanation": None} if code is not None else None,
            "level": level,
            "message": message,
            "spans": spans if spans is not None else [_span(file_name, **span_fields)],
        },
    }


@pytest.fixture
def span() -> Callable[..., dict[str, Any]]:
    """Factory for rustc span objects."""
    return _span


@pytest.fixture
def compiler_message() -> Callable[..., dict[str, Any]]:
    """Factory for cargo compiler-message objects."""
    return _compiler_message


@pytest.fixture
def cargo_line() -> Callable[..., str]:
    """Factory for one line of ``cargo clippy --message-format=json`` output."""

    def make(**kwargs: Any) -> str:
        return json.dumps(_compiler_message(**kwargs))

    return make


@pytest.fixture
def artifact_line() -> str:
    return json.dumps(
        {
            "reason": "compiler-artifact",
            "package_id": "registry+https://github.com/rust-lang/crates.io-index#libc@0.2.150",
            "manifest_path": "/home/u/.cargo/registry/src/libc-0.2.150/Cargo.toml",
            "target": {"kind": ["lib"], "name": "libc", "src_path": "src/lib.rs"},
            "profile": {"opt_level": "0", "debuginfo": 2, "test": False},
            "features": ["default", "std"],
            "filenames": ["/ws/demo/target/debug/deps/liblibc.rmeta"],
            "executable": None,
            "fresh": True,
        }
    )
