#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# gui/main_gui.py - Entry point for GUI interface
#

import threading

import gi

gi.require_version('Gtk', '4.0')
gi.require_version('Adw', '1')

from gi.repository import Adw, Gio, GLib, Gtk

from ..core.config import APP_NAME
from ..core.errors import PublisherError
from ..core.host import PathHost
from ..core.publish_orchestrator import PublishOrchestrator, format_failure
from ..core.translation_utils import _
from .dialogs.report_dialog import ReportDialog
from .gtk_logger import GTKLogger


class GTKHost(PathHost):
    """Host for a project selected in the file manager"""

    def __init__(self, path, window, logger):
        super().__init__(path, self._show_on_main_thread)
        self.window = window
        self.logger = logger

    def get_selected_project(self):
        project = super().get_selected_project()
        if project:
            self.logger.setup_log_file(project.name)
            GLib.idle_add(self.window.set_status, _("Publishing {0}...").format(project.name))
        return project

    def _show_on_main_thread(self, text):
        GLib.idle_add(self.window.show_report, text, False)


class PublishWindow(Adw.ApplicationWindow):
    """Small window that follows a publish run and then shows the report"""

    def __init__(self, app, show_dialog=True):
        super().__init__(application=app)
        self.set_title(APP_NAME)
        self.set_default_size(520, 320)
        self.show_dialog = show_dialog
        self.report_shown = False

        toolbar_view = Adw.ToolbarView()
        toolbar_view.add_top_bar(Adw.HeaderBar())

        content_box = Gtk.Box(orientation=Gtk.Orientation.VERTICAL, spacing=12)
        content_box.set_margin_top(12)
        content_box.set_margin_bottom(12)
        content_box.set_margin_start(12)
        content_box.set_margin_end(12)

        self.spinner = Gtk.Spinner()
        self.spinner.start()
        content_box.append(self.spinner)

        # Status label
        self.status_label = Gtk.Label()
        self.status_label.set_text(_("Preparing..."))
        self.status_label.set_wrap(True)
        self.status_label.add_css_class("caption")
        content_box.append(self.status_label)

        # Details text view
        scrolled = Gtk.ScrolledWindow()
        scrolled.set_vexpand(True)
        scrolled.set_policy(Gtk.PolicyType.AUTOMATIC, Gtk.PolicyType.AUTOMATIC)

        self.details_buffer = Gtk.TextBuffer()
        self.details_view = Gtk.TextView()
        self.details_view.set_buffer(self.details_buffer)
        self.details_view.set_editable(False)
        self.details_view.add_css_class("monospace")
        scrolled.set_child(self.details_view)
        content_box.append(scrolled)

        toolbar_view.set_content(content_box)
        self.set_content(toolbar_view)

    def set_status(self, text):
        """Set status text"""
        self.status_label.set_text(text)
        return False

    def append_detail(self, text):
        """Append text to details"""
        end_iter = self.details_buffer.get_end_iter()
        self.details_buffer.insert(end_iter, text + "\n")

        # Auto-scroll to bottom
        mark = self.details_buffer.get_insert()
        self.details_view.scroll_mark_onscreen(mark)
        return False

    def show_report(self, text, failed=False):
        """Show the report dialog; closing it closes the application"""
        if self.report_shown:
            return False
        self.report_shown = True
        self.spinner.stop()

        if not self.show_dialog:
            print(text)
            self.get_application().quit()
            return False

        dialog = ReportDialog(self, text, failed=failed)
        dialog.connect("response", lambda dlg, response: self.get_application().quit())
        dialog.present()
        return False


class PublisherApplication(Adw.Application):
    """Application that publishes one project and shows the result"""

    def __init__(self, path, settings, dry_run=False):
        super().__init__(
            application_id='org.bigcommunity.nugetpublisher',
            flags=Gio.ApplicationFlags.NON_UNIQUE
        )
        self.path = path
        self.settings = settings
        self.dry_run = dry_run
        self.exit_code = 0
        self.main_window = None

    def do_activate(self):
        """Called when the application is activated"""
        if self.main_window:
            self.main_window.present()
            return

        self.main_window = PublishWindow(self, show_dialog=self.settings.get("show_report_dialog", True))
        self.main_window.present()

        logger = GTKLogger(self.main_window)
        logger.draw_app_header()
        host = GTKHost(self.path, self.main_window, logger)
        if self.settings.load_error:
            logger.log("yellow", _("Could not read settings, using defaults: {0}").format(self.settings.load_error))

        threading.Thread(target=self._operation_worker, args=(host, logger), daemon=True).start()

    def _operation_worker(self, host, logger):
        """Worker thread for the publish run"""
        try:
            orchestrator = PublishOrchestrator(host, self.settings, logger=logger)
            report = orchestrator.run(dry_run=self.dry_run)
        except PublisherError as e:
            self.exit_code = 1
            logger.log("red", f"{_('ERROR')}: {e}")
            GLib.idle_add(self.main_window.show_report, format_failure(e), True)
            return
        except Exception as e:
            self.exit_code = 1
            logger.die("red", str(e))
            return

        if report is None:
            GLib.idle_add(self.main_window.show_report, _("No project selected, nothing to publish."), False)
        else:
            logger.display_summary(_("Dry Run") if report.dry_run else _("Published"), report.summary())


def run_gui(path, settings, dry_run=False) -> int:
    """Publish *path* with a GTK window; returns the process exit code"""
    app = PublisherApplication(path, settings, dry_run=dry_run)
    app.run([])
    return app.exit_code
