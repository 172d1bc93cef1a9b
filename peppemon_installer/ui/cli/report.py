"""
CLI rendering — progress lines and diagnostics for an install run.

Every line the operator sees goes through here. Formatting itself is
pure (provision.domain.diagnostics); this module only picks colours.
"""

from __future__ import annotations

import click

from peppemon_installer.core.models.check import Severity
from peppemon_installer.core.models.outcome import PipelineReport
from peppemon_installer.core.models.step import ProvisioningStep, StepOutcome, StepStatus
from peppemon_installer.core.services.provision.domain.diagnostics import (
    format_check,
    format_outcome,
    format_summary,
)

_STATUS_COLOURS = {
    StepStatus.OK: "green",
    StepStatus.SKIPPED: "cyan",
    StepStatus.WARNING: "yellow",
    StepStatus.FAILED: "red",
}

_SEVERITY_COLOURS = {
    Severity.OK: None,
    Severity.INFO: "cyan",
    Severity.WARNING: "yellow",
    Severity.FATAL: "red",
}


def echo_banner(title: str) -> None:
    click.secho(f"=== {title} ===", fg="cyan", bold=True)
    click.echo()


def echo_step_header(index: int, total: int, step: ProvisioningStep) -> None:
    """``[n/N] Title...``"""
    click.secho(f"[{index}/{total}] {step.title}...", bold=True)


def echo_outcome(outcome: StepOutcome) -> None:
    """Per-check lines (probe results), then the step's own result."""
    for check in outcome.checks:
        if outcome.failed and check.message == outcome.check.message:
            continue  # repeated below as the headline
        click.secho(format_check(check, indent="    "), fg=_SEVERITY_COLOURS[check.severity])
    click.secho(
        format_outcome(outcome),
        fg=_STATUS_COLOURS[outcome.status],
        err=outcome.failed,
    )


def echo_summary(report: PipelineReport, command: str) -> None:
    click.echo()
    click.secho(
        format_summary(report, command),
        fg="green" if report.succeeded else "red",
        bold=True,
        err=not report.succeeded,
    )
