#!/usr/bin/env python
#  -*- mode: python; indent-tabs-mode: nil; -*- coding: UTF8 -*-

"""

Serializer.py

Copyright 2024 by the WebBooker authors

Distributable under the GNU General Public License Version 3 or newer.

Write a Tree as HTML5 or as XHTML.

The XHTML flavour is what goes into the epub: an xml declaration,
every empty element self-closed, and only attributes that are safe in
XHTML 1.1.  The text content of <script> and <style> is not written;
the tag name is written in its place.

"""

import html
import io

import libgutenberg.GutenbergGlobals as gg

from webbooker.Tree import COMMENT, DOCTYPE, DOCUMENT, ELEMENT, RAW, TEXT

XHTML_ATTRIBUTES = frozenset((
    'alt', 'border', 'class', 'content', 'dir', 'href', 'http-equiv', 'id',
    'lang', 'name', 'src', 'style', 'title', 'type', 'xmlns',
))

VOID_ELEMENTS = frozenset((
    'area', 'base', 'br', 'col', 'embed', 'hr', 'img', 'input', 'link',
    'meta', 'source', 'track', 'wbr',
))

RAW_TEXT_ELEMENTS = frozenset(('script', 'style'))


class Serializer(object):
    """ Writes one tree to a text stream. """

    def __init__(self, fp, xhtml=True):
        self.fp = fp
        self.xhtml = xhtml


    def write(self, node):
        if node is None:
            return
        kind = node.kind
        if kind == DOCUMENT:
            for child in node.children:
                self.write(child)
        elif kind == ELEMENT:
            self.write_element(node)
        elif kind == TEXT:
            self.fp.write(html.escape(node.data))
        elif kind == COMMENT:
            self.fp.write('<!--%s-->' % node.data)
        elif kind == DOCTYPE:
            self.fp.write('<!DOCTYPE %s>' % node.data)
        elif kind == RAW:
            self.fp.write(node.data)


    def write_element(self, node):
        fp = self.fp
        tag = node.data
        fp.write('<')
        fp.write(tag)
        for attr in node.attributes:
            if self.xhtml and not attr.namespace and attr.key not in XHTML_ATTRIBUTES:
                continue
            fp.write(' %s="%s"' % (attr.qname, html.escape(attr.value)))

        if not node.children:
            if self.xhtml or tag in VOID_ELEMENTS:
                fp.write('/>')
            else:
                fp.write('></%s>' % tag)
            return

        fp.write('>')
        for child in node.children:
            if tag in RAW_TEXT_ELEMENTS and child.kind == TEXT:
                # script and css text is replaced by the tag name in xhtml
                fp.write(tag if self.xhtml else child.data)
            else:
                self.write(child)
        fp.write('</%s>' % tag)


def write_xhtml(node, fp):
    """ Write node as an XHTML document to text stream fp. """
    if node is None:
        return
    fp.write(gg.XML_DECLARATION)
    fp.write('\n')
    Serializer(fp, xhtml=True).write(node)
    fp.write('\n')


def write_html(node, fp):
    """ Write node as an HTML5 document to text stream fp. """
    if node is None:
        return
    fp.write(gg.HTML5_DOCTYPE)
    fp.write('\n')
    Serializer(fp, xhtml=False).write(node)
    fp.write('\n')


def render_xhtml(node):
    """ Serialize node as XHTML, utf-8 encoded. """
    buf = io.StringIO()
    write_xhtml(node, buf)
    return buf.getvalue().encode('utf-8')


def render_html(node):
    """ Serialize node as HTML5, utf-8 encoded. """
    buf = io.StringIO()
    write_html(node, buf)
    return buf.getvalue().encode('utf-8')


def tostring(node, xhtml=True):
    """ Serialize a fragment, without declaration or doctype. """
    buf = io.StringIO()
    Serializer(buf, xhtml=xhtml).write(node)
    return buf.getvalue()
