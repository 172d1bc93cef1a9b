"""
L3 Detection — Full host probe.

Runs every pre-flight check and gathers them into a ProbeReport. The
OS identity check goes first: on a non-Linux host nothing else runs.
"""

from __future__ import annotations

import logging

from peppemon_installer.core.context import ExecutionContext
from peppemon_installer.core.models.check import ProbeReport
from peppemon_installer.core.services.provision.detection.environment import (
    check_disk_space,
    check_optional_tool,
    check_os_identity,
    check_package_manager,
    check_privilege_tool,
)
from peppemon_installer.core.services.provision.detection.network import check_network

logger = logging.getLogger(__name__)


def run_probe(ctx: ExecutionContext) -> ProbeReport:
    """Probe the host. Read-only.

    Returns:
        ProbeReport; ``remediation_packages`` names the packages that
        provide any missing download / version-control tool.
    """
    report = ProbeReport()

    os_check = check_os_identity()
    report.checks.append(os_check)
    if os_check.is_fatal:
        return report

    settings = ctx.settings
    report.checks.append(check_package_manager(ctx))
    report.checks.append(check_privilege_tool(ctx))

    for tool, package in settings.remediable_tools.items():
        check = check_optional_tool(ctx, tool, package)
        report.checks.append(check)
        if check.is_warning:
            report.remediation_packages.append(package)

    report.checks.append(check_disk_space(ctx.source_dir, settings.min_free_mb))
    report.checks.append(
        check_network(
            settings.network_probe_host,
            settings.network_probe_port,
            settings.network_timeout,
            env=ctx.env,
        )
    )

    logger.debug(
        "Probe: %d checks, %d fatal, %d warnings",
        len(report.checks),
        len(report.fatal_checks),
        len(report.warnings),
    )
    return report
