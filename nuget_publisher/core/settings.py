#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/settings.py - User settings management
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

import json
import os

from .config import (
    ARTIFACT_POLL_INTERVAL,
    ARTIFACT_TIMEOUT,
    CONFIG_FILE,
    DEFAULT_CONFIGURATION,
    DEFAULT_SOURCE,
    DEFAULT_TOOL,
    VERSION_MAX_VALUE,
)
from .translation_utils import _


class Settings:
    """Manages user settings with persistent storage"""

    def __init__(self, config_file=None):
        self.config_file = os.path.expanduser(config_file or CONFIG_FILE)
        self.config_dir = os.path.dirname(self.config_file)
        self.load_error = None
        self.settings = self.load()

    def load(self):
        """Load settings from file or return defaults"""
        defaults = self.get_defaults()
        if not os.path.exists(self.config_file):
            return defaults

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                saved = json.load(f)
        except (OSError, ValueError) as e:
            # Keep running on defaults; the caller decides whether to report it
            self.load_error = e
            return defaults

        if isinstance(saved, dict):
            # Merge with defaults to ensure new keys exist
            defaults.update(saved)
        return defaults

    def get_defaults(self):
        """Return default settings"""
        return {
            # === TOOLS ===
            # Executable providing `pack` and `nuget push`
            "tool": DEFAULT_TOOL,

            # Build configuration passed to `pack`
            "configuration": DEFAULT_CONFIGURATION,

            # Feed the package is pushed to
            "source": DEFAULT_SOURCE,

            # Kill a tool that runs longer than this many seconds (null = wait forever)
            "process_timeout": None,

            # === VERSIONING ===
            # Minor and patch roll over when they reach this value
            "rollover_threshold": VERSION_MAX_VALUE,

            # === ARTIFACT WAIT ===
            "artifact_timeout": ARTIFACT_TIMEOUT,
            "artifact_poll_interval": ARTIFACT_POLL_INTERVAL,

            # === UI SETTINGS ===
            # Show the report dialog when running from the file manager
            "show_report_dialog": True,
        }

    def save(self):
        """Save settings to file"""
        try:
            os.makedirs(self.config_dir, exist_ok=True)
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(self.settings, f, indent=2)
            return True
        except OSError as e:
            print(_("Error saving settings: {0}").format(e))
            return False

    def get(self, key, default=None):
        """Get setting value"""
        return self.settings.get(key, default)

    def set(self, key, value):
        """Set setting value and save; returns False when the file cannot be written"""
        self.settings[key] = value
        return self.save()

    def override(self, **values):
        """Apply values for this run only; None means keep the stored value"""
        for key, value in values.items():
            if value is not None:
                self.settings[key] = value

    def reset(self):
        """Reset to defaults"""
        self.settings = self.get_defaults()
        return self.save()
