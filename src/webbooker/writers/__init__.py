#!/usr/bin/env python
#  -*- mode: python; indent-tabs-mode: nil; -*- coding: UTF8 -*-

"""

Writer package

Copyright 2024 by the WebBooker authors

Distributable under the GNU General Public License Version 3 or newer.

Base classes for *Writer modules (EpubWriter, HTMLWriter) and the
page blocks they share: head, frontmatter, table of contents and
chapters.

"""

import io
import os
import re

from libgutenberg.GutenbergGlobals import NSMAP, mkdir_for_filename
from libgutenberg.Logger import debug, info

from webbooker.Tree import (
    append, comment, elem, element, raw_html, text,
)
from webbooker.utils import format_date, humanize

BOOK_STYLE = """
div p{text-indent:2em;margin-top:0;margin-bottom:0}
div p:first-child{text-indent:0;}
table, th, td { border:2px solid #808080; padding:3px; }
table { border-collapse:collapse; margin:3px; }
ol.flat {list-style-type:none;}
ol.flat li {list-style:none; display:inline;}
ol.flat li::after {content:"]";}
ol.flat li::before {content:"[";}
div.mid {margin: 0 auto;}
div.mid p {text-indent:0;}
"""

COVER_ALT = '[COVER]'

RE_PARAGRAPHS = re.compile(r'\n\s*\n')


def chapter_filename(index):
    return '%04d.xhtml' % index


def chapter_id(index):
    return 'ch%04d' % index


class BaseWriter(object):
    """ Base class for EpubWriter and HTMLWriter. """

    ext = ''

    def write(self, book, fp):
        """ Override this in a real writer. """
        raise NotImplementedError


    def build(self, job):
        """ Write job.book into job.outputdir/job.outputfile. """

        filename = os.path.join(job.outputdir, job.outputfile)
        info("Creating %s file: %s" % (job.type, filename))

        data = self.render(job.book)

        mkdir_for_filename(filename)
        with open(filename, 'wb') as fp:
            fp.write(data)
        info("Done %s file: %s (%s)" % (job.type, filename, humanize(len(data))))
        return filename


    def render(self, book):
        """ Render book to bytes. """
        buf = io.BytesIO()
        self.write(book, buf)
        return buf.getvalue()


# page blocks

def link(url, label):
    if not url:
        return None
    return element('a', {'href': url}, text(label))


def img(src, alt):
    if not src:
        return None
    return element('img', {'src': src, 'alt': alt})


def html_root(lang, *children, **kwargs):
    """ The <html> element.  Pass epub=True for the ops namespace. """
    attribs = [('xmlns', NSMAP['xhtml']), ('lang', lang), ('xml:lang', lang)]
    if kwargs.get('epub'):
        attribs.append(('xmlns:epub', NSMAP['epub']))
    return element('html', attribs, *children)


def head(title, comment_text=''):
    """ The <head> of every page. """
    return elem(
        'head',
        element('meta', {'http-equiv': 'Content-Type',
                         'content': 'text/html; charset=utf-8'}),
        comment(comment_text),
        element('meta', {'name': 'viewport',
                         'content': 'width=device-width, initial-scale=1.0'}),
        elem('title', text(title)),
        element('style', {'type': 'text/css'}, raw_html(BOOK_STYLE)),
    )


def description(comments):
    """ Blank lines separate paragraphs, newlines become <br/>. """
    div = elem('div')
    for para in RE_PARAGRAPHS.split(comments.strip()):
        if not para.strip():
            continue
        p = elem('p')
        for i, line in enumerate(para.split('\n')):
            if i > 0:
                append(p, elem('br'))
            append(p, text(line))
        append(div, p)
    return div


def frontmatter_blocks(book, cover_src, modified):
    """ Title, cover, authors, source, date and description. """
    return [
        elem('h1', text(book.title)),
        img(cover_src, COVER_ALT),
        elem('div', text(book.authors)),
        elem('div', text(book.source)),
        elem('div', elem('em', text(format_date(modified)))) if modified else None,
        description(book.comments),
    ]


def toc_list(book, href=chapter_filename):
    """ <ol class="flat"> with one link per chapter. """
    ol = element('ol', {'class': 'flat'})
    for i, chapter in enumerate(book.chapters):
        label = '%d. %s' % (i + 1, chapter.title)
        append(ol, elem('li', link(href(i), label)))
    return ol


def chapter_blocks(chapter, backlink=None):
    """ Heading, date, content between rules and the optional backlink. """
    url_comment = None
    if chapter.url and '--' not in chapter.url:
        url_comment = comment('\n%s\n' % chapter.url)
    date = None
    if chapter.modified:
        date = elem('p', elem('em', text(format_date(chapter.modified))))
    blocks = [
        url_comment,
        element('h2', {'class': 'chapter'}, text(chapter.title)),
        date,
        elem('hr'),
        chapter.content,
        elem('hr'),
    ]
    if backlink:
        debug("Adding backlink to %s" % backlink)
        blocks.append(elem('div', link(backlink, backlink)))
        blocks.append(elem('hr'))
    return blocks
