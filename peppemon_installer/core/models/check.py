"""
Check models — the result of a single pre-flight or step diagnostic.

CheckResults are immutable once created. They are produced by the
host probe and by failing steps, and consumed by the diagnostics
formatter.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """How a check result affects the run."""

    OK = "ok"
    INFO = "info"
    WARNING = "warning"
    FATAL = "fatal"


class CheckResult(BaseModel):
    """One named diagnostic with an optional remediation hint."""

    model_config = ConfigDict(frozen=True)

    name: str
    severity: Severity
    message: str
    remediation: str | None = None

    @property
    def is_fatal(self) -> bool:
        return self.severity is Severity.FATAL

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    @classmethod
    def ok(cls, name: str, message: str) -> CheckResult:
        return cls(name=name, severity=Severity.OK, message=message)

    @classmethod
    def info(cls, name: str, message: str) -> CheckResult:
        return cls(name=name, severity=Severity.INFO, message=message)

    @classmethod
    def warning(cls, name: str, message: str, remediation: str | None = None) -> CheckResult:
        return cls(name=name, severity=Severity.WARNING, message=message, remediation=remediation)

    @classmethod
    def fatal(cls, name: str, message: str, remediation: str | None = None) -> CheckResult:
        return cls(name=name, severity=Severity.FATAL, message=message, remediation=remediation)


class ProbeReport(BaseModel):
    """Everything the host probe found.

    ``remediation_packages`` lists packages the dependency step must add
    because a tool the installer needs (curl, git) is missing.
    """

    checks: list[CheckResult] = Field(default_factory=list)
    remediation_packages: list[str] = Field(default_factory=list)

    @property
    def fatal_checks(self) -> list[CheckResult]:
        return [c for c in self.checks if c.is_fatal]

    @property
    def warnings(self) -> list[CheckResult]:
        return [c for c in self.checks if c.is_warning]

    @property
    def passed(self) -> bool:
        return not self.fatal_checks
