"""
L4 Execution — System build dependencies via apt-get.

The first step that mutates the host. Only missing packages are
installed, and each one is re-verified with dpkg-query afterwards:
apt-get's aggregate exit code is not trusted on its own.
"""

from __future__ import annotations

import logging

from peppemon_installer.core.context import ExecutionContext
from peppemon_installer.core.errors import DependencyInstallError
from peppemon_installer.core.models.step import StepResult
from peppemon_installer.core.services.provision.data.constants import (
    APT_INSTALL_LOG_PREFIX,
    APT_UPDATE_LOG_PREFIX,
)
from peppemon_installer.core.services.provision.detection.system_deps import check_system_deps
from peppemon_installer.core.services.provision.domain.error_analysis import (
    _analyse_package_failure,
)

logger = logging.getLogger(__name__)

_NONINTERACTIVE = {"DEBIAN_FRONTEND": "noninteractive"}


def required_packages(ctx: ExecutionContext) -> list[str]:
    """Build packages plus providers of tools the probe found missing."""
    packages = list(ctx.settings.build_packages)
    if ctx.probe is not None:
        for pkg in ctx.probe.remediation_packages:
            if pkg not in packages:
                packages.append(pkg)
    return packages


def packages_satisfied(ctx: ExecutionContext) -> bool:
    """Every required package already installed (read-only)."""
    return not check_system_deps(ctx, required_packages(ctx))["missing"]


def describe_packages_satisfied(ctx: ExecutionContext) -> str:
    return f"Build dependencies already installed ({', '.join(required_packages(ctx))}), skipping."


def _remediation(ctx: ExecutionContext, command: str, output: str) -> str:
    hints = []
    analysis = _analyse_package_failure(output)
    if analysis:
        hints.append(f"{analysis['cause']}: {analysis['suggestion']}")
    hints.append(
        f"Run '{ctx.settings.privilege_tool} {command}' manually to see full errors, "
        "then re-run the installer."
    )
    return "\n".join(hints)


def install_packages(ctx: ExecutionContext) -> StepResult:
    """Refresh the package index, then install whatever is missing.

    Raises:
        DependencyInstallError: If either apt-get call fails, or a
            package is still missing after a successful install.
    """
    pm = ctx.settings.package_manager
    missing = check_system_deps(ctx, required_packages(ctx))["missing"]
    if not missing:
        return StepResult(message="Build dependencies already installed")

    update = ctx.run(
        [pm, "update", "-qq"],
        elevated=True,
        env_overrides=_NONINTERACTIVE,
        log_prefix=APT_UPDATE_LOG_PREFIX,
    )
    if not update.ok:
        raise DependencyInstallError(
            f"Refreshing the package index failed ({update.describe_exit()})",
            remediation=_remediation(ctx, f"{pm} update", update.output),
            output=update.output,
            log_path=update.log_path,
        )

    install_cmd = [pm, "install", "-y", "-qq", *missing]
    install = ctx.run(
        install_cmd,
        elevated=True,
        env_overrides=_NONINTERACTIVE,
        log_prefix=APT_INSTALL_LOG_PREFIX,
    )
    if not install.ok:
        raise DependencyInstallError(
            f"Installing {', '.join(missing)} failed ({install.describe_exit()})",
            remediation=_remediation(ctx, " ".join(install_cmd), install.output),
            output=install.output,
            log_path=install.log_path,
        )

    still_missing = check_system_deps(ctx, missing)["missing"]
    if still_missing:
        raise DependencyInstallError(
            f"{pm} reported success but these packages are not installed: "
            f"{', '.join(still_missing)}",
            remediation=_remediation(ctx, f"{pm} install {' '.join(still_missing)}", ""),
            output=install.output,
        )

    logger.info("Installed packages: %s", ", ".join(missing))
    return StepResult(message=f"Installed {', '.join(missing)}")
