"""
Step models — provisioning steps and their recorded outcomes.

A ProvisioningStep is data: a name, an idempotency predicate, an action
and a failure policy. The engine runner executes a list of them and
records one StepOutcome per step it reaches.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from peppemon_installer.core.models.check import CheckResult

if TYPE_CHECKING:
    from peppemon_installer.core.context import ExecutionContext


class FailurePolicy(str, Enum):
    """What a step failure does to the run."""

    FATAL = "fatal"        # halt the pipeline, exit non-zero
    WARNING = "warning"    # log and continue


class StepStatus(str, Enum):
    OK = "ok"
    SKIPPED = "skipped"
    WARNING = "warning"
    FAILED = "failed"


@dataclass(frozen=True)
class StepResult:
    """What a step action returns when it completes."""

    message: str
    checks: list[CheckResult] = field(default_factory=list)
    details: list[str] = field(default_factory=list)


def _never_satisfied(ctx: ExecutionContext) -> bool:
    return False


@dataclass(frozen=True)
class ProvisioningStep:
    """One ordered unit of the install pipeline.

    ``is_satisfied`` is evaluated fresh on every run. When it returns
    True the action is not called at all, and ``describe_satisfied``
    (read-only) supplies the message shown instead.
    """

    name: str
    title: str
    action: Callable[[ExecutionContext], StepResult]
    is_satisfied: Callable[[ExecutionContext], bool] = _never_satisfied
    describe_satisfied: Callable[[ExecutionContext], str] | None = None
    failure_policy: FailurePolicy = FailurePolicy.FATAL

    @property
    def is_fatal(self) -> bool:
        return self.failure_policy is FailurePolicy.FATAL


class StepOutcome(BaseModel):
    """Recorded result of running (or skipping) one step."""

    step: str
    title: str = ""
    status: StepStatus
    check: CheckResult                              # headline result
    checks: list[CheckResult] = Field(default_factory=list)
    details: list[str] = Field(default_factory=list)
    output: str = ""                                # captured diagnostic output
    log_path: str | None = None
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.status in (StepStatus.OK, StepStatus.SKIPPED)

    @property
    def failed(self) -> bool:
        return self.status is StepStatus.FAILED

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")
