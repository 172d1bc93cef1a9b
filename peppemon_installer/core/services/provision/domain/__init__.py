"""
L1 Domain — ``__init__.py`` re-exports all pure domain functions.

These functions have NO subprocess calls, NO filesystem access,
NO network calls. Pure input→output.
"""

from peppemon_installer.core.services.provision.domain.diagnostics import (  # noqa: F401
    format_check,
    format_outcome,
    format_summary,
    marker,
    tail_lines,
)
from peppemon_installer.core.services.provision.domain.error_analysis import (  # noqa: F401
    _analyse_build_failure,
    _analyse_package_failure,
)
