#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# gui/dialogs/report_dialog.py - Dialog showing the output of a publish run
#

import gi
gi.require_version('Gtk', '4.0')
gi.require_version('Adw', '1')

from gi.repository import Gtk, Adw

from ...core.translation_utils import _


class ReportDialog(Adw.MessageDialog):
    """Shows the captured pack/push output in a scrollable, read-only view"""

    def __init__(self, parent, text, failed=False):
        super().__init__(
            transient_for=parent,
            modal=True,
            resizable=True
        )

        self.set_heading(_("Publish Failed") if failed else _("Publish Result"))
        self.set_default_size(500, 200)

        self.create_ui(text or _("(no output)"))

        self.add_response("close", _("Close"))
        self.set_default_response("close")
        self.set_close_response("close")
        if failed:
            self.set_response_appearance("close", Adw.ResponseAppearance.DESTRUCTIVE)

    def create_ui(self, text):
        """Create dialog UI"""
        scrolled = Gtk.ScrolledWindow()
        scrolled.set_size_request(500, 200)
        scrolled.set_policy(Gtk.PolicyType.AUTOMATIC, Gtk.PolicyType.AUTOMATIC)
        scrolled.set_vexpand(True)

        self.text_buffer = Gtk.TextBuffer()
        self.text_buffer.set_text(text)

        self.text_view = Gtk.TextView()
        self.text_view.set_buffer(self.text_buffer)
        self.text_view.set_editable(False)
        self.text_view.set_cursor_visible(False)
        self.text_view.set_wrap_mode(Gtk.WrapMode.WORD_CHAR)
        self.text_view.add_css_class("monospace")

        scrolled.set_child(self.text_view)
        self.set_extra_child(scrolled)
