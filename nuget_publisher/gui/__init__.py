#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# gui/__init__.py - GTK interface package initialization
#

"""
GTK4/libadwaita interface used when publishing from the file manager.
Importing this package requires PyGObject.
"""
