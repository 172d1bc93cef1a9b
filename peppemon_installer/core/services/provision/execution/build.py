"""
L4 Execution — Release build.

Runs ``cargo build --release`` inside the source tree with the run's
environment (so a freshly installed toolchain is on PATH). stderr goes
to a uniquely named temp log which is kept when the build fails.
"""

from __future__ import annotations

import logging

from peppemon_installer.core.context import ExecutionContext
from peppemon_installer.core.errors import BuildError
from peppemon_installer.core.models.step import StepResult
from peppemon_installer.core.services.provision.data.constants import BUILD_LOG_PREFIX
from peppemon_installer.core.services.provision.domain.error_analysis import (
    _analyse_build_failure,
)

logger = logging.getLogger(__name__)

_GENERIC_REMEDIATION = [
    "Check free disk space (df -h).",
    "Update the toolchain: rustup update stable",
    "Retry with a clean build: cargo clean && re-run the installer.",
]


def build_remediation(output: str) -> str:
    """Cause-specific hint (if recognised) followed by the generic ones."""
    hints = []
    analysis = _analyse_build_failure(output)
    if analysis:
        hints.append(f"{analysis['cause']}: {analysis['suggestion']}")
    hints.extend(_GENERIC_REMEDIATION)
    return "\n".join(hints)


def build_release(ctx: ExecutionContext) -> StepResult:
    """Compile the release artifact.

    Raises:
        BuildError: If the source tree has no manifest, cargo fails,
            or the expected artifact is missing afterwards.
    """
    settings = ctx.settings
    manifest = ctx.source_dir / settings.build_manifest
    if not manifest.is_file():
        raise BuildError(
            f"No {settings.build_manifest} in {ctx.source_dir}",
            remediation="Keep the installer at the root of the peppemon source tree and run it from there.",
        )

    command = " ".join(settings.build_command)
    logger.info("Building in %s: %s", ctx.source_dir, command)
    result = ctx.run(settings.build_command, cwd=ctx.source_dir, log_prefix=BUILD_LOG_PREFIX)

    if not result.ok:
        raise BuildError(
            f"{command} failed ({result.describe_exit()})",
            remediation=build_remediation(result.output),
            output=result.output,
            log_path=result.log_path,
        )

    if not ctx.artifact.is_file():
        raise BuildError(
            f"{command} succeeded but {settings.artifact_path} was not produced",
            remediation="Check that the crate builds a binary named "
                        f"'{settings.app_name}' and retry with a clean build.",
        )

    return StepResult(message=f"Built {settings.artifact_path}")
