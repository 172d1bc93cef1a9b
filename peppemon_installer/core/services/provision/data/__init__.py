"""
L0 Data — ``__init__.py`` re-exports constant tables.

Pure data. No logic.
"""

from peppemon_installer.core.services.provision.data.constants import (  # noqa: F401
    DEFAULT_TAIL_LINES,
    DISK_CHECK,
    NETWORK_CHECK,
    OS_CHECK,
    PACKAGE_MANAGER_CHECK,
    PRIVILEGE_CHECK,
    RESOURCE_CHECKS,
)
