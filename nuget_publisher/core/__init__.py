#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# core/__init__.py - Core package initialization
#

"""
Core package for the NuGet publisher.
Contains shared logic used by both CLI and GUI interfaces.
"""
