"""
Provisioning error taxonomy.

Steps raise these; the engine runner turns them into StepOutcomes
according to the step's failure policy. Every error carries what
failed, an operator-facing remediation, and any captured output.
"""

from __future__ import annotations

from collections.abc import Sequence

from peppemon_installer.core.models.check import CheckResult, Severity


class ProvisioningError(Exception):
    """Base class for every step failure."""

    severity: Severity = Severity.FATAL

    def __init__(
        self,
        message: str,
        *,
        remediation: str | None = None,
        output: str = "",
        log_path: str | None = None,
        checks: Sequence[CheckResult] = (),
    ):
        super().__init__(message)
        self.message = message
        self.remediation = remediation
        self.output = output
        self.log_path = log_path
        self.checks = list(checks)

    def to_check(self, name: str) -> CheckResult:
        """Render this error as a CheckResult named after the failing step."""
        return CheckResult(
            name=name,
            severity=self.severity,
            message=self.message,
            remediation=self.remediation,
        )


class EnvironmentCheckError(ProvisioningError):
    """Unsupported OS, missing package manager or privilege tool. No side effects."""


class ResourceError(ProvisioningError):
    """Insufficient disk space. No side effects."""


class NetworkWarning(ProvisioningError):
    """Outbound network unreachable. Logged; the run continues."""

    severity = Severity.WARNING


class DependencyInstallError(ProvisioningError):
    """Package index refresh or package install failed. Host already mutated."""


class ToolchainInstallError(ProvisioningError):
    """Rust toolchain download or install failed."""


class BuildError(ProvisioningError):
    """Release build failed. Nothing was installed."""


class InstallError(ProvisioningError):
    """Copying the artifact to the system bin directory failed."""


class NonFatalWarning(ProvisioningError):
    """Best-effort work failed (launcher entry). The run still succeeds."""

    severity = Severity.WARNING
