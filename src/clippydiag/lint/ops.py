"""Lint operations - run clippy for a file and publish its diagnostics."""

from __future__ import annotations

import json
import os
import threading
import time
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from clippydiag.core.errors import ConfigError, ToolError
from clippydiag.core.logging import get_logger, run_scope
from clippydiag.lint.models import CheckResult
from clippydiag.lint.pipeline import DebugLog, extract
from clippydiag.lint.runner import ClippyRunner, find_crate_root
from clippydiag.lint.sink import DiagnosticSink

if TYPE_CHECKING:
    from clippydiag.config.models import ClippyConfig

log = get_logger("ops")

RUST_SUFFIXES = frozenset({".rs"})


class ClippyOps:
    """Clippy diagnostics for individual Rust source files.

    Each ``check`` call runs the linter once for the crate containing the
    target file, extracts that file's diagnostics and hands the complete list
    to the sink. Runs for the same file are numbered; the sink drops results
    of a run that finishes after a newer one was already published.
    """

    def __init__(
        self,
        config: ClippyConfig,
        sink: DiagnosticSink,
        *,
        runner: ClippyRunner | None = None,
        debug_log: DebugLog | None = None,
    ) -> None:
        self._config = config
        self._severity_map = config.severity_table()
        self._sink = sink
        self._runner = runner or ClippyRunner(config.extra_args)
        self._debug_log = debug_log
        self._sequences: dict[str, int] = {}
        self._lock = threading.Lock()

    @property
    def config(self) -> ClippyConfig:
        return self._config

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    def _next_sequence(self, target: str) -> int:
        with self._lock:
            sequence = self._sequences.get(target, 0) + 1
            self._sequences[target] = sequence
            return sequence

    async def check(
        self,
        target_file: str | Path,
        *,
        cwd: Path | None = None,
        env: Mapping[str, str] | None = None,
    ) -> CheckResult:
        """Run clippy and publish diagnostics for ``target_file``.

        Args:
            target_file: The Rust source file to report on
            cwd: Directory to run in when no Cargo.toml is found above the file
            env: Process environment (default: inherit)

        Returns:
            CheckResult describing what was published, if anything
        """
        start_time = time.time()
        target = str(Path(target_file).resolve())

        if not self._config.enabled:
            return CheckResult(target=target, status="disabled")
        if Path(target).suffix not in RUST_SUFFIXES:
            return CheckResult(target=target, status="skipped")

        sequence = self._next_sequence(target)
        severity_map = self._severity_map
        crate_root = find_crate_root(Path(target)) or cwd or Path.cwd()

        with run_scope():
            try:
                result = await self._runner.run(
                    crate_root, env=env if env is not None else os.environ
                )
            except ToolError as e:
                # Previously published diagnostics stay as they are
                log.error("clippy_run_failed", target=target, error=e.error_name, reason=e.message)
                return CheckResult(
                    target=target,
                    status="error",
                    sequence=sequence,
                    error_detail=e.message,
                    duration_seconds=time.time() - start_time,
                )

            if not result.success:
                # Denied lints and dependency build failures both exit non-zero;
                # whatever diagnostics were printed are still extracted
                log.info(
                    "clippy_exit_nonzero",
                    target=target,
                    exit_status=result.exit_status,
                    stderr=result.stderr[-500:],
                )

            report = extract(result.stdout, target, severity_map, debug_log=self._debug_log)
            if report.all_lines_failed:
                log.warning("clippy_output_unparseable", target=target, lines=report.lines_total)

            if not self._config.enabled:
                # Disabled while the linter was running
                return CheckResult(
                    target=target,
                    status="disabled",
                    report=report,
                    exit_status=result.exit_status,
                    sequence=sequence,
                    duration_seconds=time.time() - start_time,
                )

            accepted = self._sink.publish(target, report.diagnostics, sequence=sequence)
            return CheckResult(
                target=target,
                status="published" if accepted else "stale",
                diagnostics=report.diagnostics,
                report=report,
                exit_status=result.exit_status,
                sequence=sequence,
                duration_seconds=time.time() - start_time,
            )

    def toggle(self) -> bool:
        """Flip ``enabled``. Disabling clears everything published so far.

        Returns:
            The new enabled state
        """
        enabled = not self._config.enabled
        self.reconfigure(enabled=enabled)
        if not enabled:
            self._sink.clear_all()
        log.info("clippy_toggled", enabled=enabled)
        return enabled

    def reconfigure(self, **changes: Any) -> ClippyConfig:
        """Validate and apply config changes. Runs already started keep their settings.

        Raises:
            ConfigError: If the changed config does not validate.
        """
        data = {**self._config.model_dump(), **changes}
        try:
            config = type(self._config).model_validate(data)
        except ValidationError as e:
            err = e.errors()[0]
            field = ".".join(str(loc) for loc in err["loc"])
            raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e

        self._config = config
        self._severity_map = config.severity_table()
        self._runner.extra_args = list(config.extra_args)
        log.debug("clippy_reconfigured", changed=sorted(changes))
        return config

    def describe_config(self) -> str:
        """Human-readable dump of the active configuration."""
        lines = ["Current clippydiag configuration:"]
        for key, value in self._config.model_dump(mode="json").items():
            if isinstance(value, dict | list):
                lines.append(f"{key}: {json.dumps(value, sort_keys=True)}")
            else:
                lines.append(f"{key}: {value}")
        return "\n".join(lines)
