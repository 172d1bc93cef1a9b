"""
Tests for desktop launcher registration.
"""

import pytest

from peppemon_installer.core.errors import NonFatalWarning
from peppemon_installer.core.models import InstallerSettings, Severity
from peppemon_installer.core.services.provision.execution import (
    register_shortcut,
    render_desktop_entry,
    shortcut_registered,
)


class TestRenderDesktopEntry:
    def test_default_entry(self):
        assert render_desktop_entry(InstallerSettings()) == (
            "[Desktop Entry]\n"
            "Name=Peppemon\n"
            "Comment=Real-time system performance monitor\n"
            "Exec=peppemon\n"
            "Terminal=true\n"
            "Type=Application\n"
            "Categories=System;Monitor;\n"
        )

    def test_terminal_flag(self):
        settings = InstallerSettings(desktop_entry={"terminal": False})
        assert "Terminal=false" in render_desktop_entry(settings)


class TestRegisterShortcut:
    def test_creates_directory_and_file(self, host, ctx):
        register_shortcut(ctx)
        target = host.home / ".local" / "share" / "applications" / "peppemon.desktop"
        assert target.read_text() == render_desktop_entry(ctx.settings)
        assert shortcut_registered(ctx)

    def test_not_registered_when_content_differs(self, host, ctx):
        ctx.desktop_file.parent.mkdir(parents=True)
        ctx.desktop_file.write_text("[Desktop Entry]\nName=Old\n")
        assert not shortcut_registered(ctx)

    def test_non_utf8_entry_counts_as_stale(self, host, ctx):
        ctx.desktop_file.parent.mkdir(parents=True)
        ctx.desktop_file.write_bytes(b"[Desktop Entry]\nName=\xff\xfe\n")
        assert not shortcut_registered(ctx)
        register_shortcut(ctx)
        assert shortcut_registered(ctx)

    def test_filesystem_error_is_non_fatal(self, host, ctx):
        # a regular file where the directory should be
        (host.home / ".local").write_text("")
        with pytest.raises(NonFatalWarning) as exc_info:
            register_shortcut(ctx)
        assert exc_info.value.severity is Severity.WARNING
        assert "peppemon.desktop" in exc_info.value.message
