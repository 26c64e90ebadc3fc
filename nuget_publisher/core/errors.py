#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/errors.py - Exceptions raised while publishing a package
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

from .translation_utils import _


class PublisherError(Exception):
    """Base class for every error that aborts a publish run"""

    # Partial PublishReport, attached by the orchestrator when available
    report = None


class ParseError(PublisherError, ValueError):
    """Version string is not of the form MAJOR.MINOR.PATCH"""

    def __init__(self, value):
        self.value = value
        super().__init__(
            _("Invalid package version {0!r}: expected MAJOR.MINOR.PATCH with non-negative integers.").format(value)
        )


class MetadataIOError(PublisherError):
    """Build descriptor could not be read, parsed or written"""

    def __init__(self, path, reason):
        self.path = str(path)
        self.reason = reason
        super().__init__(_("Cannot access build descriptor {0}: {1}").format(self.path, reason))


class ConfigurationError(PublisherError):
    """Missing or invalid publisher setting"""


class ProcessLaunchError(PublisherError):
    """External tool could not be started"""

    def __init__(self, command, reason):
        self.command = list(command)
        self.reason = reason
        super().__init__(_("Could not run '{0}': {1}").format(self.command[0], reason))


class ToolFailureError(PublisherError):
    """External tool exited with a non-zero code or timed out

    ``result`` is the ProcessResult of the failing step and ``report`` the
    partial PublishReport collected so far (when raised by the orchestrator).
    """

    def __init__(self, result, report=None, message=None):
        self.result = result
        self.report = report
        if message is None:
            message = _("'{0}' failed with exit code {1}").format(
                " ".join(result.command[:2]), result.exit_code
            )
        super().__init__(message)


class ArtifactNotFoundError(PublisherError):
    """Packed artifact did not appear before the timeout"""

    def __init__(self, path, timeout, report=None):
        self.path = str(path)
        self.timeout = timeout
        self.report = report
        super().__init__(
            _("Package {0} was not produced within {1:g} seconds.").format(self.path, timeout)
        )
