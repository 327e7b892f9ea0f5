#!/usr/bin/env python
#  -*- mode: python; indent-tabs-mode: nil; -*- coding: UTF8 -*-

"""

WebBooker.py

Copyright 2024 by the WebBooker authors

Distributable under the GNU General Public License Version 3 or newer.

Stand-alone application to build an EPUB out of scraped html chapters.

"""

import argparse
import configparser
import datetime
import logging
import os.path
import sys

import requests

from libgutenberg.Logger import critical, debug, error, exception, info
from libgutenberg import Logger

from webbooker import CommonCode
from webbooker import parsers
from webbooker.Book import BookMetadata, Chapter
from webbooker.CommonCode import Options, WebbookerError
from webbooker.parsers import HTMLParser
from webbooker.Version import VERSION
from webbooker.writers import EpubWriter, HTMLWriter

options = Options()

# store proxies and user agent in CONFIG_FILES[0]
# store default command line args in [DEFAULT_ARGS] section of CONFIG_FILES[1]
CONFIG_FILES = ['/etc/webbooker.conf', os.path.expanduser('~/.webbooker')]

WRITERS = {
    'epub': EpubWriter.Writer,
    'html': HTMLWriter.Writer,
}


def add_local_options(ap):
    """ Add local options to commandline. """

    ap.add_argument(
        '--version',
        action='version',
        version="%%(prog)s %s" % VERSION
    )

    ap.add_argument(
        "--make",
        dest="types",
        choices=sorted(WRITERS),
        default=[],
        action='append',
        help="output type (default: epub)")

    ap.add_argument(
        "--title",
        dest="title",
        default=None,
        help="book title (required)")

    ap.add_argument(
        "--author",
        dest="author",
        default='',
        help="book author(s)")

    ap.add_argument(
        "--language",
        dest="language",
        default=None,
        help="book language (default: en)")

    ap.add_argument(
        "--source",
        dest="source",
        default='',
        help="url of the book on the web")

    ap.add_argument(
        "--comments",
        dest="comments",
        default='',
        help="description of the book; blank lines separate paragraphs")

    ap.add_argument(
        "--cover",
        metavar="PATH_OR_URL",
        dest="cover",
        default=None,
        help="cover image")

    ap.add_argument(
        "--content",
        metavar="TAG[.CLASS]",
        dest="content",
        default=None,
        help="element holding the chapter text (default: body)")

    ap.add_argument(
        "--chapter-title-tag",
        metavar="TAG",
        dest="chapter_title_tag",
        default='h1',
        help="element holding the chapter title (default: %(default)s)")

    ap.add_argument(
        "--no-extended",
        dest="extended",
        action="store_false",
        help="only do basic cleanup of chapter html")

    ap.add_argument(
        "--output-dir",
        metavar="OUTPUT_DIR",
        dest="outputdir",
        default=None,
        help="output directory (default: config OUTPUTDIR or .)")

    ap.add_argument(
        "--over",
        dest="overwrite",
        action="store_true",
        help="overwrite existing output files")

    ap.add_argument(
        "urls",
        metavar="URL",
        nargs='+',
        help="chapter files or urls, in reading order")


def config(args=None):
    """ Process config files and commandline params. """

    ap = argparse.ArgumentParser(prog='WebBooker')
    CommonCode.add_common_options(ap, CONFIG_FILES[1])
    add_local_options(ap)
    CommonCode.set_arg_defaults(ap, CONFIG_FILES[1])

    CommonCode.parse_config_and_args(
        ap,
        CONFIG_FILES[0],
        {
            'proxies': None,
            'user_agent': parsers.USER_AGENT,
            'outputdir': '.',
        },
        args,
    )
    return options


def open_log(path):
    """ Setup logging, and a logfile if path. """
    return Logger.setup(
        Logger.LOGFORMAT,
        logfile=path,
        loglevel=logging.WARNING,
    )


def parse_content_option(value):
    """ 'div.chapter' -> ('div', 'chapter') """
    if not value:
        return None, None
    tag, dummy_sep, class_ = value.partition('.')
    return tag or 'div', class_ or None


def load_chapter(url, index):
    """ Fetch and parse one chapter. """

    fetched = parsers.fetch(url)
    doc = HTMLParser.parse_html(fetched.content)
    tag, class_ = parse_content_option(options.content)
    title = (HTMLParser.chapter_title(doc, options.chapter_title_tag)
             or 'Chapter %d' % (index + 1))
    content = HTMLParser.content_node(doc, tag, class_)
    chapter_url = fetched.url if CommonCode.is_url(fetched.url) else ''
    debug("Chapter %d: %s" % (index + 1, title))
    return Chapter(title, content, chapter_url, fetched.modified)


def load_cover(url):
    """ Get the cover image bytes, or None. """
    if not url:
        return None
    try:
        return parsers.fetch(url).content
    except (requests.RequestException, WebbookerError) as what:
        error("Could not get cover %s: %s" % (url, what))
        return None


def load_book():
    """ Build the BookMetadata from the command line. """

    if not options.title:
        raise CommonCode.MissingTitleError('no --title given')

    chapters = [load_chapter(url, i) for i, url in enumerate(options.urls)]

    return BookMetadata(
        title=options.title,
        authors=options.author,
        language=options.language,
        source=options.source,
        comments=options.comments,
        cover=load_cover(options.cover),
        chapters=chapters,
    )


def do_job(job):
    """ Do one job. """

    path = os.path.join(job.outputdir, job.outputfile)
    if not options.overwrite and os.path.exists(path):
        info("%s already exists." % path)
        return

    debug('=== Building %s ===' % job.type)
    start_time = datetime.datetime.now()

    writer = WRITERS[job.type]()
    writer.build(job)

    end_time = datetime.datetime.now()
    info(' %s made in %s' % (job.type, end_time - start_time))


def main(args=None):
    """ Main program. """

    try:
        config(args)
    except configparser.Error as what:
        error("Error in configuration file: %s", str(what))
        return 1

    open_log(options.logfile)
    Logger.set_log_level(options.verbose)

    options.types = options.types or ['epub']
    outputdir = options.outputdir or CommonCode.get_config('outputdir', '.')

    try:
        book = load_book()
    except (requests.RequestException, WebbookerError) as what:
        critical('Could not load book: %s' % what)
        return 1

    failed = 0
    for type_ in options.types:
        job = CommonCode.Job(type_)
        job.book = book
        job.outputdir = outputdir
        job.outputfile = book.name() + WRITERS[type_].ext
        try:
            do_job(job)
        except Exception as e:
            critical('Job failed for type %s: %s' % (job.type, job.outputfile))
            exception(e)
            failed += 1

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
