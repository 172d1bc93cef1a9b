"""
L3 Detection — System dependency checking.

Read-only probes for package availability through dpkg-query.
"""

from __future__ import annotations

import logging

from peppemon_installer.core.context import ExecutionContext
from peppemon_installer.core.services.provision.data.constants import QUERY_TIMEOUT

logger = logging.getLogger(__name__)


def _is_pkg_installed(ctx: ExecutionContext, pkg: str) -> bool:
    """Check if a single system package is installed.

    ``dpkg-query -W -f='${Status}' PKG`` prints ``install ok installed``
    for an installed package and fails for an unknown one.

    Returns:
        True if installed, False if not installed or the check failed.
    """
    result = ctx.run(
        [ctx.settings.package_query, "-W", "-f=${Status}", pkg],
        timeout=QUERY_TIMEOUT,
    )
    if result.error:
        logger.warning("Package check for %s failed: %s", pkg, result.error)
    return "install ok installed" in result.stdout


def check_system_deps(ctx: ExecutionContext, packages: list[str]) -> dict[str, list[str]]:
    """Check which system packages are installed.

    Args:
        ctx: Execution context (runner + settings).
        packages: Debian package names.

    Returns:
        {"missing": ["pkg1", ...], "installed": ["pkg2", ...]}
    """
    missing: list[str] = []
    installed: list[str] = []
    for pkg in packages:
        if _is_pkg_installed(ctx, pkg):
            installed.append(pkg)
        else:
            missing.append(pkg)
    return {"missing": missing, "installed": installed}
