#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
NuGet Publisher - Nautilus Extension
Adds a context menu option to publish a .NET project as a NuGet package.
Only shows the menu item for a single selected .csproj file.
"""

import gettext
import subprocess
from pathlib import Path
from urllib.parse import unquote

# Import 'gi' and explicitly require GTK and Nautilus versions.
import gi
gi.require_version('Gtk', '4.0')

from gi.repository import GObject, Nautilus

# --- Internationalization (i18n) Setup ---
APP_NAME = "nuget-publisher"

try:
    gettext.textdomain(APP_NAME)
except Exception as e:
    print(f"NuGet Publisher Extension: Could not set up localization: {e}")

_ = gettext.gettext


class NuGetPublisherExtension(GObject.GObject, Nautilus.MenuProvider):
    """
    Provides the context menu item for Nautilus to publish .csproj projects.
    """

    def __init__(self):
        """Initializes the extension."""
        super().__init__()
        # Use absolute path to ensure it works in Nautilus environment
        self.app_executable = '/usr/bin/nuget-publisher'

    def get_file_items(self, *args):
        """
        Returns menu items for the selected files.
        Only shows the menu for exactly one selected project file.
        """
        files = args[-1]

        if len(files) != 1:
            return []

        file_info = files[0]
        if file_info.is_directory():
            return []

        file_path = self._get_file_path(file_info)
        if not file_path or not file_path.endswith('.csproj'):
            return []

        menu_item = Nautilus.MenuItem(
            name='NuGetPublisher::Publish',
            label=_('Publish NuGet Package'),
            tip=_('Bump the package version, pack the project and push it')
        )
        menu_item.connect('activate', self._launch_publisher, file_path)
        return [menu_item]

    def _get_file_path(self, file_info) -> str | None:
        """
        Gets the local file path from a Nautilus.FileInfo object.
        """
        uri = file_info.get_uri()
        if not uri or not uri.startswith('file://'):
            return None
        return unquote(uri[7:])

    def _launch_publisher(self, menu_item, file_path: str):
        """
        Launches the publisher GUI for the selected project file.
        """
        if not Path(file_path).is_file():
            self._show_notification(
                _("Error"),
                _("The selected project file no longer exists.")
            )
            return

        try:
            cmd = [self.app_executable, '--gui', file_path]
            print(f"NuGet Publisher Extension: Launching command: {cmd}")

            subprocess.Popen(
                cmd,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True
            )

        except FileNotFoundError:
            print(f"NuGet Publisher Extension: Executable not found: {self.app_executable}")
            self._show_notification(
                _("Application Not Found"),
                _("Could not find NuGet Publisher. Is it installed?")
            )
        except OSError as e:
            print(f"NuGet Publisher Extension: Error launching: {e}")
            self._show_notification(
                _("Launch Error"),
                str(e)
            )

    def _show_notification(self, title: str, message: str):
        """
        Shows a desktop notification using notify-send.
        """
        try:
            subprocess.run(
                ['notify-send', '--app-name=NuGet Publisher', title, message],
                check=False
            )
        except FileNotFoundError:
            print(f"NuGet Publisher Extension: {title} - {message}")
