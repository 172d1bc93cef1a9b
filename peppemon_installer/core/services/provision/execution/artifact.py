"""
L4 Execution — System-wide install of the built binary.

``install -m 755`` through sudo into /usr/local/bin. The last fatal
step of the pipeline.
"""

from __future__ import annotations

import filecmp
import logging
import os

from peppemon_installer.core.context import ExecutionContext
from peppemon_installer.core.errors import InstallError
from peppemon_installer.core.models.step import StepResult
from peppemon_installer.core.services.provision.data.constants import INSTALL_LOG_PREFIX

logger = logging.getLogger(__name__)


def artifact_installed(ctx: ExecutionContext) -> bool:
    """Installed binary is executable and byte-identical to the build output."""
    built, target = ctx.artifact, ctx.installed_binary
    try:
        return (
            built.is_file()
            and target.is_file()
            and os.access(target, os.X_OK)
            and filecmp.cmp(built, target, shallow=False)
        )
    except OSError:
        return False


def describe_artifact_installed(ctx: ExecutionContext) -> str:
    return f"{ctx.installed_binary} is already up to date, skipping."


def _fallback(ctx: ExecutionContext) -> str:
    name = ctx.settings.app_name
    return (
        f"Install it for your user instead: install -m 755 {ctx.artifact} ~/.local/bin/{name}\n"
        "and make sure ~/.local/bin is on your PATH."
    )


def install_artifact(ctx: ExecutionContext) -> StepResult:
    """Copy the artifact to the system bin directory with fixed permissions.

    Raises:
        InstallError: If the artifact is missing or the copy fails.
    """
    built, target = ctx.artifact, ctx.installed_binary
    if not built.is_file():
        raise InstallError(
            f"Build output {built} not found",
            remediation="Re-run the installer so the build step can produce it.",
        )

    result = ctx.run(
        ["install", "-m", ctx.settings.install_mode, str(built), str(target)],
        elevated=True,
        log_prefix=INSTALL_LOG_PREFIX,
    )
    if not result.ok:
        raise InstallError(
            f"Could not install {target} ({result.describe_exit()})",
            remediation=_fallback(ctx),
            output=result.output,
            log_path=result.log_path,
        )

    logger.info("Installed %s", target)
    return StepResult(message=f"Installed {target}")
