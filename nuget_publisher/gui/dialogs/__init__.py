#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# gui/dialogs/__init__.py - GUI dialogs package initialization
#

"""
Dialogs package for the GUI interface.
"""

from .report_dialog import ReportDialog

__all__ = [
    'ReportDialog',
]
