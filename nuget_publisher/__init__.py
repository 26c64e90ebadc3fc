#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# __init__.py - NuGet Publisher package initialization
#

"""
Bump, pack and publish .NET projects from the file manager or the terminal.
"""

__version__ = "1.2.0"
__author__ = "BigCommunity Team"
