#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# gui/gtk_logger.py - GTK Logger implementation for GUI interface
#

import os
from datetime import datetime

from gi.repository import GLib

from ..core.config import APP_NAME, APP_TITLE, LOG_DIR_BASE
from ..core.translation_utils import _


class GTKLogger:
    """Logger implementation for the GTK4 interface.

    May be called from the worker thread; widget updates are scheduled on the
    main loop.
    """

    def __init__(self, main_window):
        self.main_window = main_window
        self.log_file = None

    def setup_log_file(self, project_name, log_dir_base=LOG_DIR_BASE):
        """Sets up the log file for *project_name*; without a writable directory only the console is used"""
        if project_name:
            log_dir = os.path.join(log_dir_base, project_name)
            try:
                os.makedirs(log_dir, exist_ok=True)
            except OSError as e:
                self.log_file = None
                self.log("yellow", _("Could not create log directory {0}: {1}").format(log_dir, e.strerror or e))
                return
            self.log_file = os.path.join(log_dir, f"{APP_NAME}.log")

    def log(self, style: str, message: str):
        """Displays message in the window and saves to log"""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

        GLib.idle_add(self.main_window.append_detail, message)
        if style in ("cyan", "green", "red"):
            GLib.idle_add(self.main_window.set_status, message)

        # Also print to console for debugging
        print("[{0}] {1}".format(style.upper(), message))

        # Save to log file (without colors)
        if self.log_file:
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(f"[{timestamp}] [{style.upper()}] {message}\n")

    def die(self, style: str, message: str, exit_code: int = 1):
        """Shows the error in the window instead of exiting; the app quits when it is closed"""
        self.log(style, f"{_('ERROR')}: {message}")
        GLib.idle_add(self.main_window.show_report, f"{_('ERROR')}: {message}", True)

    def draw_app_header(self):
        """For GUI, the header is the window title"""
        GLib.idle_add(self.main_window.set_title, APP_TITLE)

    def display_summary(self, title: str, data: list):
        """Summary rows go to the details view"""
        self.log("cyan", title)
        for key, value in data:
            self.log("white", f"• {key}: {value}")
