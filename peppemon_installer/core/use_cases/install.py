"""
Install use case — provision the host and install peppemon.

Loads settings, builds the per-run context and the step pipeline, and
hands both to the engine runner. The CLI only renders what comes back.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from peppemon_installer.adapters.base import CommandRunner
from peppemon_installer.adapters.shell.command import SubprocessRunner
from peppemon_installer.core.config.loader import ConfigError, find_settings_file, load_settings
from peppemon_installer.core.context import build_context, resolve_source_dir
from peppemon_installer.core.engine.runner import StepEndCallback, StepStartCallback, run_pipeline
from peppemon_installer.core.models.outcome import EXIT_FAILURE, PipelineReport
from peppemon_installer.core.models.settings import InstallerSettings
from peppemon_installer.core.services.provision.orchestration.pipeline import build_pipeline

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Result of one installer run."""

    report: PipelineReport | None = None
    settings: InstallerSettings = field(default_factory=InstallerSettings)
    error: str | None = None          # configuration problem; nothing ran

    @property
    def exit_code(self) -> int:
        if self.report is None:
            return EXIT_FAILURE
        return self.report.exit_code

    def to_dict(self) -> dict:
        return {
            "error": self.error,
            "exit_code": self.exit_code,
            "report": self.report.to_dict() if self.report else None,
        }


def run_install(
    *,
    runner: CommandRunner | None = None,
    settings: InstallerSettings | None = None,
    source_dir: Path | None = None,
    env: Mapping[str, str] | None = None,
    on_step_start: StepStartCallback | None = None,
    on_step_end: StepEndCallback | None = None,
) -> InstallResult:
    """Run the full install pipeline once.

    Args:
        runner: Command runner (default: real subprocesses).
        settings: Explicit settings; skips the settings file lookup.
        source_dir: Source tree (default: where the installer lives).
        env: Process environment to start from (default: os.environ).
        on_step_start: Progress callback, see ``run_pipeline``.
        on_step_end: Progress callback, see ``run_pipeline``.

    Returns:
        InstallResult. ``error`` is set when settings could not be
        loaded, in which case no step ran.
    """
    run_env = dict(env if env is not None else os.environ)
    source = (source_dir or resolve_source_dir()).resolve()

    if settings is None:
        try:
            settings = load_settings(find_settings_file(source, run_env))
        except ConfigError as e:
            logger.debug("Configuration error: %s", e)
            return InstallResult(error=str(e))

    if runner is None:
        runner = SubprocessRunner(privilege_tool=settings.privilege_tool)

    ctx = build_context(runner, settings=settings, source_dir=source, env=run_env)
    logger.info("Installing %s from %s", settings.app_name, ctx.source_dir)

    report = run_pipeline(
        build_pipeline(settings),
        ctx,
        on_step_start=on_step_start,
        on_step_end=on_step_end,
    )
    logger.info("Run finished: %s (exit %d)", report.outcome.kind, report.exit_code)
    return InstallResult(report=report, settings=settings)
