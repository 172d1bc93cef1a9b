"""
Domain models — types shared by the engine and the provisioning steps.

All models are re-exported here for convenient access:

    from peppemon_installer.core.models import CheckResult, ProvisioningStep, Outcome
"""

from peppemon_installer.core.models.check import CheckResult, ProbeReport, Severity
from peppemon_installer.core.models.outcome import (
    EXIT_FAILURE,
    EXIT_SUCCESS,
    Failure,
    Outcome,
    PipelineReport,
    Success,
)
from peppemon_installer.core.models.settings import DesktopEntry, InstallerSettings
from peppemon_installer.core.models.step import (
    FailurePolicy,
    ProvisioningStep,
    StepOutcome,
    StepResult,
    StepStatus,
)

__all__ = [
    # check.py
    "CheckResult",
    "ProbeReport",
    "Severity",
    # outcome.py
    "EXIT_FAILURE",
    "EXIT_SUCCESS",
    "Failure",
    "Outcome",
    "PipelineReport",
    "Success",
    # settings.py
    "DesktopEntry",
    "InstallerSettings",
    # step.py
    "FailurePolicy",
    "ProvisioningStep",
    "StepOutcome",
    "StepResult",
    "StepStatus",
]
