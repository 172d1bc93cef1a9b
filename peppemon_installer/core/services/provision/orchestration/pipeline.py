"""
L5 Orchestration — The install pipeline.

Ties detection and execution together into the fixed, ordered list of
steps the engine runner executes:

    preflight → dependencies → toolchain → build → install → shortcut

Only the launcher entry is best effort; every other step halts the run
when it fails.
"""

from __future__ import annotations

import logging

from peppemon_installer.core.context import ExecutionContext
from peppemon_installer.core.errors import EnvironmentCheckError, ResourceError
from peppemon_installer.core.models.settings import InstallerSettings
from peppemon_installer.core.models.step import FailurePolicy, ProvisioningStep, StepResult
from peppemon_installer.core.services.provision.data.constants import RESOURCE_CHECKS
from peppemon_installer.core.services.provision.detection.host import run_probe
from peppemon_installer.core.services.provision.execution.artifact import (
    artifact_installed,
    describe_artifact_installed,
    install_artifact,
)
from peppemon_installer.core.services.provision.execution.build import build_release
from peppemon_installer.core.services.provision.execution.packages import (
    describe_packages_satisfied,
    install_packages,
    packages_satisfied,
)
from peppemon_installer.core.services.provision.execution.shortcut import (
    describe_shortcut_registered,
    register_shortcut,
    shortcut_registered,
)
from peppemon_installer.core.services.provision.execution.toolchain import (
    describe_toolchain_satisfied,
    install_toolchain,
    toolchain_satisfied,
)

logger = logging.getLogger(__name__)

PREFLIGHT_STEP = "preflight"
DEPENDENCIES_STEP = "dependencies"
TOOLCHAIN_STEP = "toolchain"
BUILD_STEP = "build"
INSTALL_STEP = "install"
SHORTCUT_STEP = "shortcut"

STEP_ORDER = (
    PREFLIGHT_STEP,
    DEPENDENCIES_STEP,
    TOOLCHAIN_STEP,
    BUILD_STEP,
    INSTALL_STEP,
    SHORTCUT_STEP,
)


def run_preflight(ctx: ExecutionContext) -> StepResult:
    """Probe the host and refuse to continue if anything fatal was found.

    The report is stored on the context so later steps can see which
    tool providers were missing.

    Raises:
        ResourceError: When the first fatal check is a resource check.
        EnvironmentCheckError: For any other fatal check.
    """
    report = run_probe(ctx)
    ctx.probe = report

    fatal = report.fatal_checks
    if fatal:
        first = fatal[0]
        error_cls = ResourceError if first.name in RESOURCE_CHECKS else EnvironmentCheckError
        raise error_cls(
            first.message,
            remediation=first.remediation,
            checks=report.checks,
        )

    warnings = len(report.warnings)
    message = "Host checks passed"
    if warnings:
        message += f" ({warnings} warning{'s' if warnings != 1 else ''})"
    return StepResult(message=message, checks=report.checks)


def build_pipeline(settings: InstallerSettings) -> list[ProvisioningStep]:
    """The ordered install steps for ``settings.app_name``."""
    app = settings.app_name
    return [
        ProvisioningStep(
            name=PREFLIGHT_STEP,
            title="Checking system requirements",
            action=run_preflight,
        ),
        ProvisioningStep(
            name=DEPENDENCIES_STEP,
            title="Installing build dependencies",
            action=install_packages,
            is_satisfied=packages_satisfied,
            describe_satisfied=describe_packages_satisfied,
        ),
        ProvisioningStep(
            name=TOOLCHAIN_STEP,
            title="Setting up the Rust toolchain",
            action=install_toolchain,
            is_satisfied=toolchain_satisfied,
            describe_satisfied=describe_toolchain_satisfied,
        ),
        ProvisioningStep(
            name=BUILD_STEP,
            title=f"Building {app} (release)",
            action=build_release,
        ),
        ProvisioningStep(
            name=INSTALL_STEP,
            title=f"Installing {app} to {settings.install_dir}",
            action=install_artifact,
            is_satisfied=artifact_installed,
            describe_satisfied=describe_artifact_installed,
        ),
        ProvisioningStep(
            name=SHORTCUT_STEP,
            title="Registering desktop launcher",
            action=register_shortcut,
            is_satisfied=shortcut_registered,
            describe_satisfied=describe_shortcut_registered,
            failure_policy=FailurePolicy.WARNING,
        ),
    ]
