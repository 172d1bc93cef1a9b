"""
L5 Orchestration — ``__init__.py`` re-exports the pipeline builders.
"""

from peppemon_installer.core.services.provision.orchestration.pipeline import (  # noqa: F401
    BUILD_STEP,
    DEPENDENCIES_STEP,
    INSTALL_STEP,
    PREFLIGHT_STEP,
    SHORTCUT_STEP,
    STEP_ORDER,
    TOOLCHAIN_STEP,
    build_pipeline,
    run_preflight,
)
