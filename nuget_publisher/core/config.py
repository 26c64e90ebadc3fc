#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/config.py - Configuration constants for the NuGet publisher
#
# Copyright (c) 2025, BigCommunity Team
# All rights reserved.
#

from .. import __version__
from .translation_utils import _

# Application info
APP_NAME = "nuget-publisher"
APP_TITLE = _("NUGET PUBLISHER")
APP_VERSION = __version__
APP_DESC = _("Bumps the package version of a .NET project, packs it and pushes the package to a NuGet feed.")

# User configuration
CONFIG_DIR = "~/.config/nuget-publisher"
CONFIG_FILE = f"{CONFIG_DIR}/config.json"
API_KEY_FILE = f"{CONFIG_DIR}/api_keys"
API_KEY_ENV = "NUGET_API_KEY"

# Log directory
LOG_DIR_BASE = "/tmp/nuget-publisher"

# Build descriptor properties
PACKAGE_VERSION_PROPERTY = "PackageVersion"
PACKAGE_ID_PROPERTY = "PackageId"
DESCRIPTOR_EXTENSION = ".csproj"
ARTIFACT_EXTENSION = ".nupkg"

# Version bump settings
BASELINE_VERSION = "1.0.0"
VERSION_MAX_VALUE = 10              # Minor/patch roll over when they reach this

# Tool defaults
DEFAULT_TOOL = "dotnet"
DEFAULT_CONFIGURATION = "Release"
DEFAULT_SOURCE = "https://api.nuget.org/v3/index.json"

# Artifact wait (seconds)
ARTIFACT_TIMEOUT = 30.0
ARTIFACT_POLL_INTERVAL = 0.25
ARTIFACT_MAX_POLL_INTERVAL = 4.0
