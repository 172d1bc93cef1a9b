"""
Engine runner — executes an ordered list of provisioning steps.

Flow per step:
    predicate satisfied? → skip (action never called)
    else → action → ok | ProvisioningError → warning | failed

The runner owns the fatal-halt rule: the first failed step ends the
run and no later step's predicate or action is evaluated. A best-effort
step never aborts the run, whatever it raises.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence

from peppemon_installer.core.context import ExecutionContext
from peppemon_installer.core.errors import ProvisioningError
from peppemon_installer.core.models.check import CheckResult, Severity
from peppemon_installer.core.models.outcome import Failure, PipelineReport
from peppemon_installer.core.models.step import (
    FailurePolicy,
    ProvisioningStep,
    StepOutcome,
    StepStatus,
)

logger = logging.getLogger(__name__)

StepStartCallback = Callable[[int, int, ProvisioningStep], None]
StepEndCallback = Callable[[StepOutcome], None]

_STATUS_MARKERS = {
    StepStatus.OK: "✓",
    StepStatus.SKIPPED: "⊘",
    StepStatus.WARNING: "⚠",
    StepStatus.FAILED: "✗",
}


def run_pipeline(
    steps: Sequence[ProvisioningStep],
    ctx: ExecutionContext,
    *,
    on_step_start: StepStartCallback | None = None,
    on_step_end: StepEndCallback | None = None,
) -> PipelineReport:
    """Run ``steps`` in order, halting at the first fatal failure.

    Args:
        steps: The pipeline, in execution order.
        ctx: Per-run execution context.
        on_step_start: Called with ``(index, total, step)`` before a step.
        on_step_end: Called with the StepOutcome after a step.

    Returns:
        PipelineReport with one outcome per step reached.
    """
    report = PipelineReport()
    total = len(steps)

    for index, step in enumerate(steps, start=1):
        if on_step_start is not None:
            on_step_start(index, total, step)

        start = time.monotonic()
        outcome = run_step(step, ctx)
        outcome.duration_ms = int((time.monotonic() - start) * 1000)

        report.outcomes.append(outcome)
        logger.info(
            "%s [%d/%d] %s → %s",
            _STATUS_MARKERS[outcome.status],
            index,
            total,
            step.name,
            outcome.status.value,
        )

        if on_step_end is not None:
            on_step_end(outcome)

        if outcome.failed:
            report.outcome = Failure(step_name=step.name, check=outcome.check)
            remaining = [s.name for s in steps[index:]]
            if remaining:
                logger.info("Halting; not running: %s", ", ".join(remaining))
            break

    return report


def run_step(step: ProvisioningStep, ctx: ExecutionContext) -> StepOutcome:
    """Run a single step and classify its result.

    A best-effort step (``FailurePolicy.WARNING``) never escapes with an
    exception: anything raised by its predicate or action is reported
    as a WARNING outcome.
    """
    try:
        if step.is_satisfied(ctx):
            message = (
                step.describe_satisfied(ctx)
                if step.describe_satisfied is not None
                else f"{step.title}: already done, skipping."
            )
            return StepOutcome(
                step=step.name,
                title=step.title,
                status=StepStatus.SKIPPED,
                check=CheckResult.info(step.name, message),
            )
        result = step.action(ctx)
    except ProvisioningError as exc:
        fatal = step.failure_policy is FailurePolicy.FATAL and exc.severity is Severity.FATAL
        if fatal:
            logger.debug("Step %s failed: %s", step.name, exc.message)
            check = exc.to_check(step.name)
        else:
            logger.warning("Step %s did not complete: %s", step.name, exc.message)
            check = CheckResult.warning(step.name, exc.message, exc.remediation)
        return StepOutcome(
            step=step.name,
            title=step.title,
            status=StepStatus.FAILED if fatal else StepStatus.WARNING,
            check=check,
            checks=exc.checks,
            output=exc.output,
            log_path=exc.log_path,
        )
    except Exception as exc:
        if step.failure_policy is not FailurePolicy.WARNING:
            raise
        logger.warning("Step %s did not complete: %s", step.name, exc)
        logger.debug("Traceback for step %s", step.name, exc_info=True)
        return StepOutcome(
            step=step.name,
            title=step.title,
            status=StepStatus.WARNING,
            check=CheckResult.warning(step.name, f"{step.title} did not complete: {exc}"),
        )

    return StepOutcome(
        step=step.name,
        title=step.title,
        status=StepStatus.OK,
        check=CheckResult.ok(step.name, result.message),
        checks=result.checks,
        details=result.details,
    )
