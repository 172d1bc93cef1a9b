"""
L4 Execution — Desktop launcher registration (best effort).

Writes ``~/.local/share/applications/peppemon.desktop``. Failures
become NonFatalWarning; the run outcome is unaffected.
"""

from __future__ import annotations

import logging

from peppemon_installer.core.context import ExecutionContext
from peppemon_installer.core.errors import NonFatalWarning
from peppemon_installer.core.models.settings import InstallerSettings
from peppemon_installer.core.models.step import StepResult

logger = logging.getLogger(__name__)


def render_desktop_entry(settings: InstallerSettings) -> str:
    """Fixed-content freedesktop entry launching the installed binary."""
    entry = settings.desktop_entry
    categories = "".join(f"{c};" for c in entry.categories)
    return (
        "[Desktop Entry]\n"
        f"Name={entry.name}\n"
        f"Comment={entry.comment}\n"
        f"Exec={settings.app_name}\n"
        f"Terminal={'true' if entry.terminal else 'false'}\n"
        "Type=Application\n"
        f"Categories={categories}\n"
    )


def shortcut_registered(ctx: ExecutionContext) -> bool:
    # bytes, so a hand-edited entry in another encoding just counts as stale
    expected = render_desktop_entry(ctx.settings).encode("utf-8")
    try:
        return ctx.desktop_file.read_bytes() == expected
    except OSError:
        return False


def describe_shortcut_registered(ctx: ExecutionContext) -> str:
    return f"Launcher entry {ctx.desktop_file} already present, skipping."


def register_shortcut(ctx: ExecutionContext) -> StepResult:
    """Create the applications directory if needed and write the entry.

    Raises:
        NonFatalWarning: On any filesystem error.
    """
    target = ctx.desktop_file
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(render_desktop_entry(ctx.settings), encoding="utf-8")
    except OSError as exc:
        raise NonFatalWarning(
            f"Could not write launcher entry {target}: {exc.strerror or exc}",
            remediation=f"Optional: start {ctx.settings.app_name} from a terminal instead.",
        ) from exc

    logger.info("Wrote %s", target)
    return StepResult(message=f"Wrote launcher entry {target}")
