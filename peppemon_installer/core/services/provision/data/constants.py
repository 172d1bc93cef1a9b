"""
L0 Data — Module-level constants.

Pure data. No logic. No imports beyond stdlib.
"""

from __future__ import annotations

# Lines of captured tool output shown when a step fails.
DEFAULT_TAIL_LINES = 20

# Check names, as shown in diagnostics.
OS_CHECK = "os"
PACKAGE_MANAGER_CHECK = "package-manager"
PRIVILEGE_CHECK = "privileges"
DISK_CHECK = "disk-space"
NETWORK_CHECK = "network"

# Checks whose fatal result is a resource shortage rather than an
# unsupported environment.
RESOURCE_CHECKS = frozenset({DISK_CHECK})

# Prefixes for per-invocation stderr capture files in the temp dir.
APT_UPDATE_LOG_PREFIX = "peppemon-apt-update"
APT_INSTALL_LOG_PREFIX = "peppemon-apt-install"
RUSTUP_DOWNLOAD_LOG_PREFIX = "peppemon-rustup-download"
RUSTUP_INIT_LOG_PREFIX = "peppemon-rustup-init"
BUILD_LOG_PREFIX = "peppemon-build"
INSTALL_LOG_PREFIX = "peppemon-install"

# Temp file naming for the downloaded rustup installer.
RUSTUP_INIT_PREFIX = "rustup-init-"
RUSTUP_INIT_SUFFIX = ".sh"

# Where operators can install Rust by hand.
RUSTUP_HOME_PAGE = "https://rustup.rs"

# Read-only probe timeouts (seconds).
QUERY_TIMEOUT = 10
