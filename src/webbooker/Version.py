#!/usr/bin/env python
#  -*- mode: python; indent-tabs-mode: nil; -*- coding: UTF8 -*-

"""

Version.py

Copyright 2024 by the WebBooker authors

Distributable under the GNU General Public License Version 3 or newer.

"""

VERSION = '0.3.0'

GENERATOR = 'WebBooker %s'
