"""
Provisioning service — package re-exports.

Each symbol lives in its single-responsibility module inside the
appropriate onion layer (data → domain → detection → execution →
orchestration)::

    from peppemon_installer.core.services.provision import build_pipeline
"""

# ── L0: Data ──
from peppemon_installer.core.services.provision.data.constants import (  # noqa: F401
    DEFAULT_TAIL_LINES,
)

# ── L1: Domain ──
from peppemon_installer.core.services.provision.domain.diagnostics import (  # noqa: F401
    format_check,
    format_outcome,
    format_summary,
    tail_lines,
)

# ── L3: Detection ──
from peppemon_installer.core.services.provision.detection.host import (  # noqa: F401
    run_probe,
)
from peppemon_installer.core.services.provision.detection.system_deps import (  # noqa: F401
    check_system_deps,
)
from peppemon_installer.core.services.provision.detection.toolchain import (  # noqa: F401
    get_toolchain_version,
    resolve_toolchain,
)

# ── L5: Orchestration ──
from peppemon_installer.core.services.provision.orchestration.pipeline import (  # noqa: F401
    STEP_ORDER,
    build_pipeline,
    run_preflight,
)
