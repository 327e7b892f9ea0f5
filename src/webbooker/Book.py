#!/usr/bin/env python
#  -*- mode: python; indent-tabs-mode: nil; -*- coding: UTF8 -*-

"""

Book.py

Copyright 2024 by the WebBooker authors

Distributable under the GNU General Public License Version 3 or newer.

The book and chapter records handed to the writers.

"""

from webbooker.CommonCode import MissingTitleError
from webbooker.utils import make_book_filename, to_utc

DEFAULT_LANGUAGE = 'en'


class Chapter(object):
    """ One chapter.

    content is a Tree node, usually the element holding the chapter
    text.  Chapters are written in list order.

    """

    def __init__(self, title, content=None, url='', modified=None):
        self.title = title
        self.content = content
        self.url = url or ''
        self.modified = modified


    def __repr__(self):
        return '<Chapter %r %s>' % (self.title, self.url)


class BookMetadata(object):
    """ Metadata and chapters of one book. """

    def __init__(self, title='', authors='', language=None, source='',
                 comments='', cover=None, modified=None, chapters=None):
        self.title = title
        self.authors = authors or ''
        self.language = language or DEFAULT_LANGUAGE
        self.source = source or ''
        self.comments = comments or ''
        self.cover = cover  # raw image bytes
        self.modified = modified
        self.chapters = list(chapters or [])


    def validate(self):
        if not self.title or not self.title.strip():
            raise MissingTitleError()


    def calculate_last_modified(self):
        """ The time of the most recently modified chapter, or of the book. """
        result = to_utc(self.modified)
        for chapter in self.chapters:
            modified = to_utc(chapter.modified)
            if modified is not None and (result is None or modified > result):
                result = modified
        return result


    def name(self):
        """ Base name for output files. """
        return make_book_filename(self.title, self.calculate_last_modified())
