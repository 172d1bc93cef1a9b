"""
L4 Execution — ``__init__.py`` re-exports all execution functions.

These functions WRITE to the system: package installs, the toolchain
download, the build, the binary copy and the launcher entry. Each one
is paired with a read-only predicate that tells the engine the work is
already done.
"""

from peppemon_installer.core.services.provision.execution.artifact import (  # noqa: F401
    artifact_installed,
    describe_artifact_installed,
    install_artifact,
)
from peppemon_installer.core.services.provision.execution.build import (  # noqa: F401
    build_release,
    build_remediation,
)
from peppemon_installer.core.services.provision.execution.packages import (  # noqa: F401
    describe_packages_satisfied,
    install_packages,
    packages_satisfied,
    required_packages,
)
from peppemon_installer.core.services.provision.execution.shortcut import (  # noqa: F401
    describe_shortcut_registered,
    register_shortcut,
    render_desktop_entry,
    shortcut_registered,
)
from peppemon_installer.core.services.provision.execution.toolchain import (  # noqa: F401
    describe_toolchain_satisfied,
    download_command,
    install_toolchain,
    toolchain_satisfied,
)
