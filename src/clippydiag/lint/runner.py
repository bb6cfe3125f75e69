"""Asynchronous cargo clippy process runner."""

from __future__ import annotations

import asyncio
import shutil
import time
from collections.abc import Mapping, Sequence
from pathlib import Path

from clippydiag.core.errors import ToolError
from clippydiag.core.logging import get_logger
from clippydiag.lint.models import RunResult

log = get_logger("runner")

CLIPPY_BASE_ARGS: tuple[str, ...] = (
    "clippy",
    "--message-format=json",
    "--quiet",
    "--workspace",
    "--all-targets",
)


def find_crate_root(path: Path) -> Path | None:
    """Find the nearest directory at or above ``path`` containing Cargo.toml.

    Returns:
        The directory, or None if no manifest exists up to the filesystem root.
    """
    current = path.resolve()
    if current.is_file() or not current.exists():
        current = current.parent

    while True:
        if (current / "Cargo.toml").is_file():
            return current
        if current == current.parent:
            return None
        current = current.parent


class ClippyRunner:
    """Runs ``cargo clippy`` and captures its complete output."""

    def __init__(self, extra_args: Sequence[str] = (), executable: str = "cargo") -> None:
        self.extra_args = list(extra_args)
        self.executable = executable

    def build_command(self) -> list[str]:
        return [self.executable, *CLIPPY_BASE_ARGS, *self.extra_args]

    async def run(self, cwd: Path, env: Mapping[str, str] | None = None) -> RunResult:
        """Run clippy in ``cwd`` and wait for it to exit.

        A non-zero exit status is returned, not raised: clippy exits non-zero
        whenever a lint is denied, and the output still holds diagnostics.

        Raises:
            ToolError: If the executable is missing or cannot be started.
        """
        resolved = shutil.which(self.executable)
        if resolved is None:
            raise ToolError.not_found(self.executable)

        cmd = self.build_command()
        start_time = time.time()
        log.info("clippy_run_started", command=cmd, cwd=str(cwd))

        try:
            proc = await asyncio.create_subprocess_exec(
                resolved,
                *cmd[1:],
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
                env=dict(env) if env is not None else None,
            )
            stdout_bytes, stderr_bytes = await proc.communicate()
        except OSError as e:
            raise ToolError.spawn_failed(cmd, str(e)) from e

        result = RunResult(
            command=cmd,
            stdout=stdout_bytes.decode(errors="replace"),
            stderr=stderr_bytes.decode(errors="replace"),
            exit_status=proc.returncode if proc.returncode is not None else -1,
            duration_seconds=time.time() - start_time,
        )
        log.info(
            "clippy_run_finished",
            exit_status=result.exit_status,
            duration_s=round(result.duration_seconds, 3),
        )
        return result
