#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/host.py - Interface between the publisher and the environment that runs it
#

from .project import ProjectDescriptor


class PublishHost:
    """Environment the publisher runs in (terminal, GTK window, file manager).

    The core only needs to know which project is selected and how to show the
    final report; everything else about the host stays outside.
    """

    def get_selected_project(self):
        """Return the ProjectDescriptor to publish, or None when nothing is selected"""
        raise NotImplementedError

    def show_report(self, text: str):
        """Present the collected tool output to the user"""
        raise NotImplementedError


class PathHost(PublishHost):
    """Host whose selection is a path given up front; reports go to a callback"""

    def __init__(self, path, report_callback):
        self.path = path
        self.report_callback = report_callback

    def get_selected_project(self):
        if not self.path:
            return None
        return ProjectDescriptor.from_path(self.path)

    def show_report(self, text: str):
        self.report_callback(text)
