#!/usr/bin/env python3
# -*- coding: utf-8 -*-
#
# __main__.py - Allows running the publisher with `python -m nuget_publisher`
#

import sys

from .cli.main_cli import main

if __name__ == "__main__":
    sys.exit(main())
