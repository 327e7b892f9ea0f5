#!/usr/bin/env python
#  -*- mode: python; indent-tabs-mode: nil; -*- coding: UTF8 -*-

"""

Parser Package

Copyright 2024 by the WebBooker authors

Distributable under the GNU General Public License Version 3 or newer.

Fetch input files from disk or from the web.

"""

import datetime
import email.utils
import os

import requests

import libgutenberg.GutenbergGlobals as gg
from libgutenberg.Logger import debug
from libgutenberg.MediaTypes import mediatypes as mt

from webbooker.CommonCode import (
    Struct, WebbookerBadFileException, get_config, is_url, path_from_url,
)
from webbooker.Version import VERSION

USER_AGENT = "WebBooker/%s" % VERSION

TIMEOUT = 60  # seconds


def proxies():
    """ The configured proxies in requests format. """
    p = get_config('proxies')
    if not p:
        return None
    if isinstance(p, str):
        return {'http': p, 'https': p}
    return p


def open_url(url):
    """ GET url.  Returns a Struct with content, url, mediatype and modified. """

    response = requests.get(
        url,
        headers={'User-Agent': get_config('user_agent', USER_AGENT)},
        proxies=proxies(),
        timeout=TIMEOUT,
    )
    response.raise_for_status()

    fetched = Struct()
    fetched.content = response.content
    fetched.url = response.url
    fetched.mediatype = response.headers.get('Content-Type', 'application/octet-stream')
    fetched.modified = None
    last_modified = response.headers.get('Last-Modified')
    if last_modified:
        try:
            fetched.modified = email.utils.parsedate_to_datetime(last_modified)
        except (TypeError, ValueError):
            debug("Bad Last-Modified header: %s" % last_modified)
    debug("... got %s (%s) from server" % (fetched.url, fetched.mediatype))
    return fetched


def open_file(url):
    """ Read a local file.  Returns the same Struct as open_url(). """

    path = path_from_url(url)
    try:
        with open(path, 'rb') as fp:
            content = fp.read()
        statinfo = os.stat(path)
    except FileNotFoundError:
        raise WebbookerBadFileException('Missing file: %s' % path)
    except IsADirectoryError:
        raise WebbookerBadFileException('Missing file is a directory: %s' % path)

    fetched = Struct()
    fetched.content = content
    fetched.url = path
    fetched.mediatype = mt[path]
    fetched.modified = datetime.datetime.fromtimestamp(statinfo.st_mtime, gg.UTC())
    debug("... read %s (%s)" % (path, fetched.mediatype))
    return fetched


def fetch(url):
    """ Get the file at url, local or remote. """
    if is_url(url):
        return open_url(url)
    return open_file(url)
