#!/usr/bin/env python
#  -*- mode: python; indent-tabs-mode: nil; -*- coding: UTF8 -*-

"""

HTMLParser.py

Copyright 2024 by the WebBooker authors

Distributable under the GNU General Public License Version 3 or newer.

Parse scraped html into a Tree.

"""

from bs4 import BeautifulSoup, Comment, Doctype, NavigableString, Tag
from bs4.element import CData, Declaration, ProcessingInstruction

from libgutenberg.Logger import critical, debug, warning

from webbooker.CommonCode import WebbookerBadFileException
from webbooker.Tree import (
    append, comment, doctype, document, element, extract_text, find_all,
    find_one, get_attribute, text,
)

BS_PARSER = 'lxml'


def parse_html(html, bs_parser=BS_PARSER):
    """ Parse html (bytes or str) into a Tree document. """
    try:
        soup = BeautifulSoup(html, bs_parser)
    except Exception as what:
        critical('failed to parse html: %s', what)
        raise WebbookerBadFileException('failed parsing') from what
    doc = document()
    _convert(soup, doc)
    return doc


def _attributes(tag):
    attribs = []
    for key, value in tag.attrs.items():
        if isinstance(value, list):
            # multi-valued attributes like class
            value = ' '.join(value)
        attribs.append((key, value))
    return attribs


def _convert(bs_node, parent):
    for child in bs_node.children:
        if isinstance(child, Tag):
            node = element(child.name, _attributes(child))
            append(parent, node)
            _convert(child, node)
        elif isinstance(child, Doctype):
            append(parent, doctype(str(child)))
        elif isinstance(child, Comment):
            append(parent, _comment(str(child)))
        elif isinstance(child, (Declaration, ProcessingInstruction)):
            continue
        elif isinstance(child, (CData, NavigableString)):
            append(parent, text(str(child)))


def _comment(data):
    """ A comment node, or None if data would not make a well-formed xml comment. """
    if '--' in data or data.endswith('-'):
        debug('Dropping comment: %s', data[:40])
        return None
    return comment(data)


def has_class(node, class_):
    return class_ in (get_attribute(node, 'class') or '').split()


def content_node(doc, tag=None, class_=None):
    """ Find the element that holds the chapter text.

    With tag, the first such element (having class_, if given).
    Otherwise, or if nothing matches, the body, renamed to div.

    """
    if tag:
        for node in find_all(doc, tag):
            if class_ is None or has_class(node, class_):
                return node
        warning('No <%s class="%s"> found, using body' % (tag, class_ or ''))

    body = find_one(doc, 'body')
    if body is None or not body.children:
        critical('body has no contents')
        raise WebbookerBadFileException('body has no contents')
    body.tag = 'div'
    return body


def chapter_title(doc, tag='h1'):
    """ The text of the first tag, or of <title>. """
    for t in (tag, 'title'):
        node = find_one(doc, t)
        title = ' '.join(extract_text(node).split())
        if title:
            debug('Found chapter title in <%s>: %s' % (t, title))
            return title
    return ''
