"""
L1 Domain — Diagnostic formatting (pure).

Turns CheckResults and StepOutcomes into operator-facing text with
consistent severity markers. Remediation is appended for warnings and
fatal results only. Captured tool output is truncated to its tail.
No I/O, no retained state.
"""

from __future__ import annotations

from peppemon_installer.core.models.check import CheckResult, Severity
from peppemon_installer.core.models.outcome import PipelineReport
from peppemon_installer.core.models.step import StepOutcome
from peppemon_installer.core.services.provision.data.constants import DEFAULT_TAIL_LINES

_MARKERS: dict[Severity, str] = {
    Severity.OK: "✓",
    Severity.INFO: "ℹ",
    Severity.WARNING: "⚠",
    Severity.FATAL: "✗",
}

_REMEDIATED = frozenset({Severity.WARNING, Severity.FATAL})


def marker(severity: Severity) -> str:
    """Single-character marker for a severity."""
    return _MARKERS[severity]


def tail_lines(text: str, limit: int = DEFAULT_TAIL_LINES) -> str:
    """Keep the last ``limit`` non-trailing lines of ``text``.

    When lines are dropped, a header line says how many.
    """
    lines = text.rstrip().splitlines()
    if len(lines) <= limit:
        return "\n".join(lines)
    omitted = len(lines) - limit
    return "\n".join([f"… ({omitted} earlier lines omitted)", *lines[-limit:]])


def format_check(check: CheckResult, indent: str = "  ") -> str:
    """Render one check: marker, name, message and (if needed) remediation."""
    text = f"{indent}{marker(check.severity)} {check.name}: {check.message}"
    if check.remediation and check.severity in _REMEDIATED:
        text += f"\n{indent}  → {check.remediation}"
    return text


def format_outcome(
    outcome: StepOutcome,
    tail: int = DEFAULT_TAIL_LINES,
    indent: str = "  ",
) -> str:
    """Render a step outcome.

    Layout::

        ✗ build: cargo build --release failed (exit code 101)
          │ error: linker `cc` not found
          Full log: /tmp/peppemon-build-x1y2.log
          → Install build-essential and retry.
    """
    check = outcome.check
    lines = [f"{indent}{marker(check.severity)} {check.message}"]

    for detail in outcome.details:
        lines.append(f"{indent}  {detail}")

    if outcome.output.strip():
        for line in tail_lines(outcome.output, tail).splitlines():
            lines.append(f"{indent}  │ {line}")

    if outcome.log_path:
        lines.append(f"{indent}  Full log: {outcome.log_path}")

    if check.remediation and check.severity in _REMEDIATED:
        for hint in check.remediation.splitlines():
            lines.append(f"{indent}  → {hint}")

    return "\n".join(lines)


def format_summary(report: PipelineReport, command: str) -> str:
    """Final line of a run."""
    if report.succeeded:
        warnings = len(report.warnings)
        suffix = f" ({warnings} warning{'s' if warnings != 1 else ''})" if warnings else ""
        return f"Done{suffix}! Run '{command}' to start."

    failed = report.outcomes[-1].step if report.outcomes else "unknown"
    return (
        f"Installation failed at step '{failed}'. Fix the problem above and "
        "re-run the installer; completed steps will be skipped."
    )
