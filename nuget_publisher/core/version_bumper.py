#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/version_bumper.py - Semantic version bump with minor/patch rollover
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

import re
from dataclasses import dataclass

from .config import BASELINE_VERSION, VERSION_MAX_VALUE
from .errors import ParseError
from .translation_utils import _

_COMPONENT_PATTERN = re.compile(r'[0-9]+')


@dataclass(frozen=True)
class SemanticVersion:
    """MAJOR.MINOR.PATCH triple of non-negative integers"""

    major: int
    minor: int
    patch: int

    @classmethod
    def parse(cls, value: str) -> "SemanticVersion":
        """Parse *value*, raising ParseError unless it has exactly three numeric parts."""
        if not isinstance(value, str):
            raise ParseError(value)

        parts = value.strip().split('.')
        if len(parts) != 3 or not all(_COMPONENT_PATTERN.fullmatch(p) for p in parts):
            raise ParseError(value)

        major, minor, patch = [int(p) for p in parts]
        return cls(major, minor, patch)

    def __str__(self):
        return f"{self.major}.{self.minor}.{self.patch}"


def next_version(current: SemanticVersion, rollover_threshold: int = VERSION_MAX_VALUE) -> SemanticVersion:
    """Return the version following *current*.

    Patch and minor behave like odometer digits in base *rollover_threshold*:
    once a component would reach the threshold it resets to zero and carries
    into the next one. Major is unbounded.
    """
    if isinstance(rollover_threshold, bool) or not isinstance(rollover_threshold, int) or rollover_threshold < 1:
        raise ValueError(_("Rollover threshold must be a positive integer, got {0!r}").format(rollover_threshold))

    if current.patch + 1 < rollover_threshold:
        return SemanticVersion(current.major, current.minor, current.patch + 1)
    elif current.minor + 1 < rollover_threshold:
        return SemanticVersion(current.major, current.minor + 1, 0)
    else:
        return SemanticVersion(current.major + 1, 0, 0)


def bump_version_string(current_version, rollover_threshold: int = VERSION_MAX_VALUE) -> str:
    """Return the next version string, or the baseline when there is no current version."""
    if current_version is None:
        return BASELINE_VERSION

    return str(next_version(SemanticVersion.parse(current_version), rollover_threshold))
