"""
L3 Detection — Host environment checks.

Read-only probes for OS identity, required and optional tools,
privilege escalation and free disk space. Each returns one
CheckResult; none depends on another's outcome.
"""

from __future__ import annotations

import logging
import os
import platform
import shutil
from pathlib import Path

from peppemon_installer.core.context import ExecutionContext
from peppemon_installer.core.models.check import CheckResult
from peppemon_installer.core.services.provision.data.constants import (
    DISK_CHECK,
    OS_CHECK,
    PACKAGE_MANAGER_CHECK,
    PRIVILEGE_CHECK,
    QUERY_TIMEOUT,
)

logger = logging.getLogger(__name__)

_OS_RELEASE = Path("/etc/os-release")


def read_os_release(path: Path = _OS_RELEASE) -> dict[str, str]:
    """Parse ``/etc/os-release`` into a dict (empty if unreadable)."""
    fields: dict[str, str] = {}
    try:
        content = path.read_text(encoding="utf-8")
    except OSError:
        return fields
    for line in content.splitlines():
        key, sep, value = line.partition("=")
        if sep and key and not key.startswith("#"):
            fields[key.strip()] = value.strip().strip('"')
    return fields


def check_os_identity(os_release: Path = _OS_RELEASE) -> CheckResult:
    """The host must run a Linux kernel."""
    system = platform.system()
    if system != "Linux":
        return CheckResult.fatal(
            OS_CHECK,
            f"Unsupported operating system: {system or 'unknown'}",
            remediation="Run the installer on a Debian or Ubuntu Linux host.",
        )

    release = read_os_release(os_release)
    distro = release.get("PRETTY_NAME") or release.get("ID") or "unknown distribution"
    return CheckResult.ok(OS_CHECK, f"Linux ({distro})")


def check_package_manager(ctx: ExecutionContext) -> CheckResult:
    """apt-get must be on PATH."""
    pm = ctx.settings.package_manager
    found = ctx.which(pm)
    if not found:
        return CheckResult.fatal(
            PACKAGE_MANAGER_CHECK,
            f"{pm} not found on PATH",
            remediation=(
                f"This installer supports {pm}-based distributions (Debian, Ubuntu). "
                "Install the build dependencies and Rust by hand on other systems."
            ),
        )
    return CheckResult.ok(PACKAGE_MANAGER_CHECK, f"{pm} found at {found}")


def check_privilege_tool(ctx: ExecutionContext) -> CheckResult:
    """Root, or sudo on PATH. Warn when sudo will prompt for a password."""
    if os.geteuid() == 0:
        return CheckResult.ok(PRIVILEGE_CHECK, "Running as root")

    tool = ctx.settings.privilege_tool
    if not ctx.which(tool):
        return CheckResult.fatal(
            PRIVILEGE_CHECK,
            f"{tool} not found and not running as root",
            remediation=f"Install {tool} or re-run the installer as root.",
        )

    # -n: fail instead of prompting when credentials are not cached
    probe = ctx.run([tool, "-n", "true"], timeout=QUERY_TIMEOUT)
    if not probe.ok:
        return CheckResult.warning(
            PRIVILEGE_CHECK,
            f"{tool} will ask for a password",
            remediation=f"Keep the terminal attended, or run '{tool} -v' first.",
        )
    return CheckResult.ok(PRIVILEGE_CHECK, f"{tool} available without a prompt")


def check_optional_tool(ctx: ExecutionContext, tool: str, package: str) -> CheckResult:
    """A tool the installer can provide itself; missing only warns."""
    found = ctx.which(tool)
    if not found:
        return CheckResult.warning(
            tool,
            f"{tool} not found",
            remediation=f"The '{package}' package will be installed with the build dependencies.",
        )
    return CheckResult.ok(tool, f"{tool} found at {found}")


def _read_disk_free_mb(path: Path) -> int:
    """Read free disk space in MB for the filesystem holding ``path``."""
    usage = shutil.disk_usage(path)
    return usage.free // (1024 * 1024)


def check_disk_space(path: Path, min_free_mb: int) -> CheckResult:
    """At least ``min_free_mb`` free where the build output will land."""
    try:
        free_mb = _read_disk_free_mb(path)
    except OSError as exc:
        return CheckResult.fatal(
            DISK_CHECK,
            f"Cannot determine free space at {path}: {exc.strerror or exc}",
            remediation="Make sure the source tree exists and is readable.",
        )

    if free_mb < min_free_mb:
        return CheckResult.fatal(
            DISK_CHECK,
            f"Only {free_mb} MB free at {path}; at least {min_free_mb} MB required",
            remediation="Free up disk space (e.g. sudo apt-get clean, remove old build output) and retry.",
        )
    return CheckResult.ok(DISK_CHECK, f"{free_mb} MB free at {path}")
