#!/usr/bin/env python
#  -*- mode: python; indent-tabs-mode: nil; -*- coding: UTF8 -*-
"""

utils.py

tools for names, dates and sizes
Copyright 2024 by the WebBooker authors

Distributable under the GNU General Public License Version 3 or newer.
"""

import datetime
import re
import unicodedata

import libgutenberg.GutenbergGlobals as gg

RE_FILENAME_UNSAFE = re.compile(r'[^A-Za-z0-9.-]+')

SIZE_PREFIXES = ('', 'K', 'M', 'G', 'T', 'P', 'E')


def strip_accents(s):
    """ Decompose, drop combining marks, recompose. 'Éa' -> 'Ea' """
    s = unicodedata.normalize('NFD', s)
    s = ''.join(c for c in s if unicodedata.category(c) != 'Mn')
    return unicodedata.normalize('NFC', s)


def to_utc(dt):
    """ Make dt an aware datetime in UTC.  Naive datetimes are local time. """
    if dt is None:
        return None
    return dt.astimezone(gg.UTC())


def format_date(dt):
    return to_utc(dt).strftime('%Y-%m-%d')


def format_timestamp(dt):
    """ 2024-05-01T12:00:00Z """
    return to_utc(dt).isoformat(timespec='seconds').replace('+00:00', 'Z')


def make_book_filename(title, modified=None):
    """ Make a file name (without extension) for a book. """
    name = RE_FILENAME_UNSAFE.sub('_', strip_accents(title))
    if modified is None:
        return name
    return name + to_utc(modified).strftime('_%Y-%m-%d_%H%M%S')


def humanize(size):
    """ Human readable byte size: 2048 -> '2048 B', 10240000 -> '9 MB' """
    for i, prefix in enumerate(SIZE_PREFIXES):
        if size <= 9999 or i == len(SIZE_PREFIXES) - 1:
            return '%d %sB' % (size, prefix)
        size = size >> 10
    return ''


def now():
    return datetime.datetime.now(gg.UTC())
