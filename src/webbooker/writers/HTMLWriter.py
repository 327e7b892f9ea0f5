#!/usr/bin/env python
#  -*- mode: python; indent-tabs-mode: nil; -*- coding: UTF8 -*-

"""

HTMLWriter.py

Copyright 2024 by the WebBooker authors

Distributable under the GNU General Public License Version 3 or newer.

Writes the whole book as one HTML5 file.

"""

import base64

from libgutenberg.Logger import debug, exception
from libgutenberg.MediaTypes import mediatypes as mt

from webbooker import Normalizer
from webbooker import writers
from webbooker.CommonCode import get_option
from webbooker.Serializer import render_html
from webbooker.Tree import append, elem, element, text
from webbooker.parsers import ImageParser


def chapter_anchor(index):
    return '#' + writers.chapter_id(index)


class Writer(writers.BaseWriter):
    """ Class to write a single-file HTML book. """

    ext = '.html'

    @staticmethod
    def cover_src(cover):
        """ The cover as data: url, so the file stands alone. """
        if not cover:
            return None
        return 'data:%s;base64,%s' % (mt.jpeg, base64.b64encode(cover).decode('ascii'))


    def make_html(self, book):
        """ Build the tree of the HTML document. """

        modified = book.calculate_last_modified()
        cover = ImageParser.make_cover(book.cover) if book.cover else None

        body = elem('body')
        append(body, *writers.frontmatter_blocks(book, self.cover_src(cover), modified))
        append(body, element('nav', {'id': 'toc'},
                             elem('h2', text('Contents')),
                             writers.toc_list(book, href=chapter_anchor)))

        extended = get_option('extended', True)
        last = len(book.chapters) - 1
        for i, chapter in enumerate(book.chapters):
            chapter.content = Normalizer.normalize(chapter.content, extended)
            backlink = chapter.url if i == last else None
            div = element('div', {'class': 'chapter', 'id': writers.chapter_id(i)})
            append(div, *writers.chapter_blocks(chapter, backlink))
            append(body, div)

        return writers.html_root(book.language, writers.head(book.title), body)


    def write(self, book, fp):
        """ Write book as HTML5 to binary stream fp. """
        book.validate()
        try:
            data = render_html(self.make_html(book))
        except Exception as what:
            exception("Error building HTML: %s" % what)
            raise
        debug("HTML has %d chapters" % len(book.chapters))
        fp.write(data)
        return len(data)
