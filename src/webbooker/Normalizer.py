#!/usr/bin/env python
#  -*- mode: python; indent-tabs-mode: nil; -*- coding: UTF8 -*-

"""

Normalizer.py

Copyright 2024 by the WebBooker authors

Distributable under the GNU General Public License Version 3 or newer.

Clean up scraped chapter markup in place.

The base pass handles whitespace text, empty paragraphs, inline
styles, bare spans and images without source.  The extended passes
strip site-relative links, fix table borders, replace <center> and
<big> and flatten doubled lists.

"""

import re
import unicodedata

from libgutenberg.Logger import debug

from webbooker.Tree import (
    CONTAINERS, ELEMENT, RAW, TEXT,
    add_attribute, find_attribute, insert_before, remove, remove_attribute,
    replace_children,
)

# declarations that only restate the reader defaults
STYLE_DENYLIST = frozenset((
    'background-attachment: initial',
    'background-clip: initial',
    'background-image: initial',
    'background-origin: initial',
    'background-position: initial',
    'background-repeat: initial',
    'background-size: initial',
    'break-before: page',
    'margin-bottom: 0in',
    'background: transparent',
    'font-family: Arial',
    'font-family: Segoe UI',
    'font-family: Segoe UI, sans-serif',
    'font-family: Segoe UI, serif',
    'font-style: normal',
    'font-variant: normal',
    'font-weight: normal',
    'margin-bottom: 0',
    'page-break-before: always',
    'text-decoration: none',
    '',
))

STYLE_REWRITES = {
    'font-family: Courier New, monospace': 'font-family:monospace',
}

# removed when empty after cleanup
PRUNE_IF_EMPTY = frozenset(('tbody', 'dd', 'dl'))

# childless elements that still show something
CONTENT_ELEMENTS = frozenset((
    'img', 'image', 'svg', 'math', 'video', 'audio', 'object',
    'embed', 'iframe', 'input', 'canvas',
))

NULL_SRC = 'data:null;,'

RE_SEMICOLON = re.compile(r'\s*;\s*')

WHITESPACE_CONTROLS = frozenset('\t\n\x0b\x0c\r\x1c\x1d\x1e\x1f\x85')


def is_whitespace(s):
    """ True if s consists of separator characters (category Z) or line breaks. """
    for c in s:
        if c not in WHITESPACE_CONTROLS and unicodedata.category(c)[0] != 'Z':
            return False
    return True


def is_spaces(s):
    """ True if s consists of space separators (category Zs) only. """
    for c in s:
        if unicodedata.category(c) != 'Zs':
            return False
    return True


def is_whitespace_only(node):
    """ Does this subtree show nothing but whitespace? """
    if node is None:
        return True
    if node.kind == TEXT:
        return is_whitespace(node.data)
    if node.kind == ELEMENT:
        if node.data in CONTENT_ELEMENTS:
            return False
        for child in node.children:
            if not is_whitespace_only(child):
                return False
        return True
    return node.kind != RAW


def clean_style_value(value):
    """ Drop default declarations from a style attribute value. """
    result = []
    for decl in RE_SEMICOLON.split(value.strip()):
        if decl in STYLE_DENYLIST:
            continue
        result.append(STYLE_REWRITES.get(decl, decl))
    return ';'.join(result)


def normalize(node, extended=True):
    """ Clean up node and its subtree.

    Returns the node, or None if the node itself was removed.

    """
    if extended:
        # first, so spans left without attributes are unwrapped below
        clean_links(node)
    node = clean_style(node)
    if node is not None and extended:
        clean_tables(node)
        clean_center(node)
        clean_doubled(node)
    return node


def clean_style(node):
    """ The base cleanup pass. """

    if node is None:
        return None

    replacement = _clean_style(node)
    if len(replacement) == 1 and replacement[0] is node:
        return node

    if not replacement:
        remove(node)
        return None

    # bare span: splice its children into the parent
    parent = node.parent
    if parent is None:
        replace_children(node, replacement)
        return node
    next_sibling = node.next_sibling
    for child in replacement:
        insert_before(parent, child, next_sibling)
    remove(node)
    return node


def _clean_style(node):
    """ Clean node.  Returns the list of nodes that take its place. """

    if node.kind == TEXT:
        if node.data and is_whitespace(node.data) and not is_spaces(node.data):
            node.data = '\n'
        return [node]

    if node.kind not in CONTAINERS:
        return [node]

    if node.kind == ELEMENT:
        if node.data == 'p':
            if is_whitespace_only(node):
                return []
            align = find_attribute(node, 'align')
            if align is not None and align.value == 'left':
                remove_attribute(node, align)

        style = find_attribute(node, 'style')
        if style is not None:
            value = clean_style_value(style.value)
            if value:
                style.value = value
            else:
                remove_attribute(node, style)

    # one rebuild per parent
    children = []
    for child in list(node.children):
        children.extend(_clean_style(child))
    replace_children(node, children)

    if node.kind != ELEMENT:
        return [node]

    if node.data == 'span' and not node.attributes:
        children = node.children
        replace_children(node, [])
        return children

    if node.data == 'img':
        src = find_attribute(node, 'src')
        if src is None:
            add_attribute(node, 'src', NULL_SRC)
        elif not src.value:
            src.value = NULL_SRC

    return [node]


def clean_links(node):
    """ Strip site-relative hrefs. """

    if node is None or node.kind not in CONTAINERS:
        return
    href = find_attribute(node, 'href')
    if href is not None and href.value.startswith('/'):
        debug('Stripping site-relative link: %s', href.value)
        remove_attribute(node, href)
    for child in list(node.children):
        clean_links(child)


def clean_tables(node):
    """ Make table borders 1 or empty and prune empty table/list parts. """

    if node is None or node.kind not in CONTAINERS:
        return
    border = find_attribute(node, 'border')
    if border is not None and border.value not in ('1', ''):
        border.value = '' if border.value == 'none' else '1'

    for child in list(node.children):
        clean_tables(child)

    if node.kind == ELEMENT and not node.children and node.data in PRUNE_IF_EMPTY:
        remove(node)


def clean_center(node):
    """ Replace <center> and <big>, which XHTML doesn't have. """

    if node is None or node.kind not in CONTAINERS:
        return
    if node.kind == ELEMENT:
        if node.data == 'center':
            node.data = 'div'
            class_ = find_attribute(node, 'class')
            if class_ is not None:
                class_.value += ' mid'
            else:
                add_attribute(node, 'class', 'mid')
        elif node.data == 'big':
            node.data = 'span'
            add_attribute(node, 'style', 'font-size:larger')

    for child in list(node.children):
        clean_center(child)


def clean_doubled(node):
    """ Hoist the items of a <ul> nested directly in a <ul>. """

    if node is None or node.kind not in CONTAINERS:
        return
    for child in list(node.children):
        clean_doubled(child)
        if node.is_element('ul') and child.is_element('ul'):
            next_sibling = child.next_sibling
            remove(child)
            for grandchild in list(child.children):
                insert_before(node, grandchild, next_sibling)
