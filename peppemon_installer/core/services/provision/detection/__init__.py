"""
L3 Detection — ``__init__.py`` re-exports all detection functions.

These functions READ system state but never WRITE.
Subprocess calls, file reads, env var reads — all read-only.
"""

from peppemon_installer.core.services.provision.detection.environment import (  # noqa: F401
    _read_disk_free_mb,
    check_disk_space,
    check_optional_tool,
    check_os_identity,
    check_package_manager,
    check_privilege_tool,
    read_os_release,
)
from peppemon_installer.core.services.provision.detection.host import (  # noqa: F401
    run_probe,
)
from peppemon_installer.core.services.provision.detection.network import (  # noqa: F401
    check_network,
    detect_proxy,
)
from peppemon_installer.core.services.provision.detection.system_deps import (  # noqa: F401
    _is_pkg_installed,
    check_system_deps,
)
from peppemon_installer.core.services.provision.detection.toolchain import (  # noqa: F401
    get_toolchain_version,
    resolve_toolchain,
    source_env_file,
)
