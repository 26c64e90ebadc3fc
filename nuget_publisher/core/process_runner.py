#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/process_runner.py - Runs external tools and captures their output
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

import re
import subprocess
import threading
from dataclasses import dataclass, field

from .errors import ProcessLaunchError, ToolFailureError
from .translation_utils import _


@dataclass
class ProcessResult:
    """Outcome of one external command"""

    command: list
    exit_code: int
    stdout_lines: list = field(default_factory=list)
    stderr_lines: list = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class ProcessRunner:
    """Executes a command synchronously, capturing stdout and stderr line by line.

    Every captured line is mirrored to the logger as it arrives. Stdout is
    read on the calling thread; stderr is drained by a helper thread that is
    joined before run() returns, so the result is complete once it is handed
    back.
    """

    # ANSI escape code pattern for removal
    ANSI_ESCAPE_PATTERN = re.compile(r'\x1b\[[0-9;]*[mGKHJA-Z]')

    def __init__(self, logger=None, timeout=None):
        self.logger = logger
        self.timeout = timeout

    @staticmethod
    def strip_ansi_codes(text: str) -> str:
        """Remove ANSI escape codes from text"""
        return ProcessRunner.ANSI_ESCAPE_PATTERN.sub('', text)

    def _mirror(self, style, line):
        if self.logger:
            self.logger.log(style, line)

    def _drain(self, stream, lines, style):
        for raw in stream:
            line = self.strip_ansi_codes(raw.rstrip("\r\n"))
            lines.append(line)
            self._mirror(style, line)

    def run(self, command, secrets=()) -> ProcessResult:
        """Run *command* (a list of arguments) and wait for it to exit.

        Arguments listed in *secrets* are masked in the log and in the
        returned result.

        Raises ProcessLaunchError when the executable cannot be started and
        ToolFailureError when the optional timeout expires. A non-zero exit
        code is reported through the result, not raised.
        """
        command = [str(arg) for arg in command]
        shown = ["***" if arg and arg in secrets else arg for arg in command]
        if self.logger:
            self.logger.log("cyan", _("Running: {0}").format(" ".join(shown)))

        try:
            process = subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                bufsize=1,
            )
        except FileNotFoundError as e:
            raise ProcessLaunchError(shown, _("executable not found on PATH")) from e
        except OSError as e:
            raise ProcessLaunchError(shown, e.strerror or str(e)) from e

        result = ProcessResult(command=shown, exit_code=-1)
        timed_out = threading.Event()

        def on_timeout():
            timed_out.set()
            process.kill()

        timer = None
        if self.timeout:
            timer = threading.Timer(self.timeout, on_timeout)
            timer.daemon = True
            timer.start()

        stderr_thread = threading.Thread(
            target=self._drain,
            args=(process.stderr, result.stderr_lines, "yellow"),
            daemon=True,
        )
        stderr_thread.start()

        try:
            self._drain(process.stdout, result.stdout_lines, "white")
            result.exit_code = process.wait()
        finally:
            stderr_thread.join()
            if timer:
                timer.cancel()
            process.stdout.close()
            process.stderr.close()

        if timed_out.is_set():
            raise ToolFailureError(
                result,
                message=_("'{0}' did not finish within {1:g} seconds and was stopped").format(
                    " ".join(shown[:2]), self.timeout
                ),
            )

        return result
