#!/usr/bin/env python
#  -*- mode: python; indent-tabs-mode: nil; -*- coding: UTF8 -*-

"""

Tree.py

Copyright 2024 by the WebBooker authors

Distributable under the GNU General Public License Version 3 or newer.

A small mutable markup tree.

A node owns its children through its `children` list.  The link back
to the parent is a weak reference and is only used to find a node's
position for removal and reinsertion.

All module-level functions accept None for a node and do nothing, so
trees can be built with conditional parts:

  elem('body', comment(url), elem('h2', text(title)), link(url))

"""

import re
import weakref

DOCUMENT = 'document'
ELEMENT  = 'element'
TEXT     = 'text'
COMMENT  = 'comment'
DOCTYPE  = 'doctype'
RAW      = 'raw'

CONTAINERS = frozenset((DOCUMENT, ELEMENT))

RE_WHITESPACE = re.compile(r'\s+')


class Attribute(object):
    """ One attribute of an element. Namespace is '' for plain attributes. """

    __slots__ = ('namespace', 'key', 'value')

    def __init__(self, key, value, namespace=''):
        self.namespace = namespace
        self.key = key
        self.value = value


    @classmethod
    def from_qname(cls, qname, value):
        """ Make an attribute from 'key' or 'ns:key'. """
        ns, sep, key = qname.partition(':')
        if sep:
            return cls(key, value, ns)
        return cls(qname, value)


    @property
    def qname(self):
        if self.namespace:
            return '%s:%s' % (self.namespace, self.key)
        return self.key


    def __repr__(self):
        return '%s=%r' % (self.qname, self.value)


class Node(object):
    """ A node in the tree. `data` is the tag name for elements. """

    def __init__(self, kind, data='', attributes=None):
        self.kind = kind
        self.data = data
        self.attributes = list(attributes or [])
        self.children = []
        self._parent = None


    @property
    def parent(self):
        if self._parent is None:
            return None
        return self._parent()


    def _set_parent(self, parent):
        self._parent = None if parent is None else weakref.ref(parent)


    @property
    def tag(self):
        return self.data if self.kind == ELEMENT else None


    @tag.setter
    def tag(self, value):
        self.data = value


    def is_element(self, tag=None):
        return self.kind == ELEMENT and (tag is None or self.data == tag)


    @property
    def next_sibling(self):
        parent = self.parent
        if parent is None:
            return None
        siblings = parent.children
        i = _index(siblings, self)
        if i is None or i + 1 >= len(siblings):
            return None
        return siblings[i + 1]


    @property
    def first_child(self):
        return self.children[0] if self.children else None


    def iter(self):
        """ Iterate over this node and all descendants, pre-order. """
        yield self
        for child in self.children:
            for node in child.iter():
                yield node


    def __repr__(self):
        if self.kind == ELEMENT:
            return '<Node %s %s>' % (self.data, self.attributes)
        return '<Node %s %r>' % (self.kind, self.data[:40])


def _index(children, node):
    """ Index of node in children, by identity. """
    for i, child in enumerate(children):
        if child is node:
            return i
    return None


def _make_attributes(attributes):
    if not attributes:
        return []
    if isinstance(attributes, dict):
        return [Attribute.from_qname(k, attributes[k]) for k in sorted(attributes)]
    return [Attribute.from_qname(k, v) for k, v in attributes]


# constructors

def element(tag, attributes=None, *children):
    """ Make an element.

    attributes is either a dict (added in key order) or a sequence of
    (key, value) pairs (added in given order, duplicates kept).

    """
    node = Node(ELEMENT, tag, _make_attributes(attributes))
    return append(node, *children)


def elem(tag, *children):
    """ Make an element without attributes. """
    return element(tag, None, *children)


def text(data):
    return Node(TEXT, data)


def comment(data):
    """ Make a comment node. Empty data makes no node. """
    if not data:
        return None
    return Node(COMMENT, data)


def raw_html(data):
    """ Markup emitted verbatim by the serializer. """
    return Node(RAW, data)


def doctype(name='html'):
    return Node(DOCTYPE, name)


def document(*children):
    return append(Node(DOCUMENT), *children)


# mutation

def append(parent, *children):
    """ Append children to parent.

    A no-op if parent cannot have children.  None children are skipped.
    Children that are attached elsewhere are moved.

    """
    if parent is None or parent.kind not in CONTAINERS:
        return parent
    for child in children:
        if child is None:
            continue
        _check_cycle(parent, child)
        remove(child)
        parent.children.append(child)
        child._set_parent(parent)
    return parent


def remove(node):
    """ Detach node from its parent.  Removing a detached node is a no-op. """
    if node is None:
        return None
    parent = node.parent
    if parent is not None:
        i = _index(parent.children, node)
        if i is not None:
            del parent.children[i]
    node._set_parent(None)
    return node


def insert_before(parent, new_node, reference):
    """ Insert new_node into parent before reference.

    Appends if reference is None or not a child of parent.

    """
    if parent is None or new_node is None or parent.kind not in CONTAINERS:
        return
    _check_cycle(parent, new_node)
    remove(new_node)
    i = None
    if reference is not None and reference.parent is parent:
        i = _index(parent.children, reference)
    if i is None:
        parent.children.append(new_node)
    else:
        parent.children.insert(i, new_node)
    new_node._set_parent(parent)


def replace_children(parent, children):
    """ Make children the children of parent, in one step.

    Old children not in the new list are detached.  None children
    are skipped.

    """
    if parent is None or parent.kind not in CONTAINERS:
        return parent
    old = parent.children
    parent.children = []
    for child in old:
        child._set_parent(None)
    for child in children:
        if child is None:
            continue
        if child.parent is not None:
            remove(child)
        _check_cycle(parent, child)
        parent.children.append(child)
        child._set_parent(parent)
    return parent


def _check_cycle(parent, child):
    node = parent
    while node is not None:
        if node is child:
            raise ValueError('cannot make a node a descendant of itself')
        node = node.parent


# attributes

def get_attribute(node, key):
    """ Value of the first attribute named key, ignoring namespace. """
    if node is None or node.kind != ELEMENT:
        return None
    for attr in node.attributes:
        if attr.key == key:
            return attr.value
    return None


def find_attribute(node, key, namespace=''):
    """ The first Attribute with exactly this namespace and key. """
    if node is None or node.kind != ELEMENT:
        return None
    for attr in node.attributes:
        if attr.namespace == namespace and attr.key == key:
            return attr
    return None


def add_attribute(node, key, value):
    """ Append an attribute.  Does not replace an existing one. """
    if node is not None and node.kind == ELEMENT:
        node.attributes.append(Attribute.from_qname(key, value))


def remove_attribute(node, attr):
    """ Remove this Attribute object from node. """
    if node is not None:
        node.attributes = [a for a in node.attributes if a is not attr]


# queries

def extract_text(node):
    """ Concatenate all text under node, with some layout for br, hr, p and img. """
    buf = []
    _extract_text(node, buf)
    return ''.join(buf)


def _extract_text(node, buf):
    if node is None:
        return
    if node.kind == TEXT:
        buf.append(RE_WHITESPACE.sub(' ', node.data))
        return
    is_p = False
    if node.kind == ELEMENT:
        if node.data == 'br':
            buf.append('\n')
        elif node.data == 'hr':
            buf.append('\n* * *\n')
        elif node.data == 'p':
            buf.append('\n\n')
            is_p = True
        elif node.data == 'img':
            buf.append(get_attribute(node, 'alt') or '')
    for child in node.children:
        _extract_text(child, buf)
    if is_p:
        buf.append('\n\n')


def find_all(node, tag):
    """ All elements named tag, node included, in document order. """
    if node is None:
        return []
    return [n for n in node.iter() if n.kind == ELEMENT and n.data == tag]


def find_one(node, tag, key=None, value=None):
    """ The first element named tag.

    If key is given, the element must also have an attribute key=value.

    """
    if node is None:
        return None
    for n in node.iter():
        if n.kind != ELEMENT or n.data != tag:
            continue
        if key is None:
            return n
        for attr in n.attributes:
            if attr.key == key and attr.value == value:
                return n
    return None
