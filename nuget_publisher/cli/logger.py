#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# cli/logger.py - Logging management for the terminal interface
#

import os
import sys
from datetime import datetime

from rich.box import ROUNDED
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..core.config import APP_DESC, APP_NAME, APP_TITLE, APP_VERSION, LOG_DIR_BASE
from ..core.translation_utils import _


class RichLogger:
    """Manages logs and formatted messages using the Rich library"""

    # Map of the color names used throughout the core to Rich styles
    COLOR_MAP = {
        "cyan": "bright_cyan",
        "blue_dark": "blue",
        "medium_blue": "blue",
        "light_blue": "cyan",
        "white": "white",
        "red": "red",
        "yellow": "yellow",
        "green": "green",
        "orange": "yellow",
        "purple": "magenta",
        "black": "black",
        "bold": "bold"
    }

    def __init__(self, use_colors: bool = True, console=None):
        self.use_colors = use_colors
        self.log_file = None
        self.console = console or Console(no_color=not use_colors, highlight=False)

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
        """Displays formatted message and saves to log"""
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        rich_style = self.COLOR_MAP.get(style, "white")

        # Tool output may contain square brackets; never treat it as markup
        self.console.print(escape(message), style=rich_style)

        # Save to log file (without colors)
        if self.log_file:
            with open(self.log_file, 'a', encoding='utf-8') as f:
                f.write(f"[{timestamp}] {message}\n")

    def die(self, style: str, message: str, exit_code: int = 1):
        """Displays error message and exits the program"""
        self.log(style, f"{_('ERROR')}: {message}")
        sys.exit(exit_code)

    def draw_app_header(self):
        """Draws the application header"""
        header = Text()
        header.append(f"{APP_TITLE} ", style="bold cyan")
        header.append(f"v{APP_VERSION}\n", style="bold white")
        header.append(APP_DESC, style="white")

        self.console.print(Panel(
            header,
            box=ROUNDED,
            border_style="blue",
            padding=(0, 1),
            width=70,
            title="BigCommunity"
        ))

    def display_summary(self, title: str, data: list):
        """Displays a formatted summary in a Rich table"""
        table = Table(show_header=False, box=ROUNDED, border_style="blue", padding=(0, 1))
        table.add_column(_("Field"), style="white")
        table.add_column(_("Value"), style="bright_cyan")

        for key, value in data:
            table.add_row(key, escape(str(value)))

        panel = Panel(
            table,
            title=title,
            box=ROUNDED,
            border_style="blue",
            padding=(1, 1),
            width=70  # Fixed width for consistency
        )

        self.console.print(panel)

    def display_report(self, title: str, text: str, style: str = "green"):
        """Prints the publish report in a panel"""
        self.console.print(Panel(
            Text(text or _("(no output)")),
            title=title,
            box=ROUNDED,
            border_style=style,
            padding=(0, 1),
        ))
