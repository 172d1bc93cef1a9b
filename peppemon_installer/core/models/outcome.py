"""
Run outcome — the terminal result of one installer invocation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel

from peppemon_installer.core.models.check import CheckResult
from peppemon_installer.core.models.step import StepOutcome, StepStatus

EXIT_SUCCESS = 0
EXIT_FAILURE = 1


class Success(BaseModel):
    kind: Literal["success"] = "success"

    @property
    def exit_code(self) -> int:
        return EXIT_SUCCESS


class Failure(BaseModel):
    kind: Literal["failure"] = "failure"
    step_name: str
    check: CheckResult

    @property
    def exit_code(self) -> int:
        return EXIT_FAILURE


Outcome = Success | Failure


@dataclass
class PipelineReport:
    """Every step outcome of a run plus its terminal Outcome."""

    outcomes: list[StepOutcome] = field(default_factory=list)
    outcome: Outcome = field(default_factory=Success)

    @property
    def succeeded(self) -> bool:
        return isinstance(self.outcome, Success)

    @property
    def exit_code(self) -> int:
        return self.outcome.exit_code

    @property
    def warnings(self) -> list[StepOutcome]:
        return [o for o in self.outcomes if o.status is StepStatus.WARNING]

    @property
    def skipped(self) -> list[StepOutcome]:
        return [o for o in self.outcomes if o.status is StepStatus.SKIPPED]

    @property
    def executed_steps(self) -> list[str]:
        return [o.step for o in self.outcomes]

    def get(self, step: str) -> StepOutcome | None:
        for outcome in self.outcomes:
            if outcome.step == step:
                return outcome
        return None

    def to_dict(self) -> dict:
        return {
            "status": self.outcome.kind,
            "exit_code": self.exit_code,
            "failed_step": getattr(self.outcome, "step_name", None),
            "steps": [o.to_dict() for o in self.outcomes],
        }
