#!/usr/bin/env python
# -*- coding: utf-8 -*-
'''
run this with
python -m unittest -v tests.test_normalizer
'''
import time
import unittest

from libgutenberg import Logger

from webbooker import Normalizer
from webbooker.Serializer import tostring
from webbooker.Tree import elem, element, extract_text, text

Logger.set_log_level(10) # DEBUG

def normalized(node, extended=True):
    return tostring(Normalizer.normalize(node, extended))


class TestWhitespace(unittest.TestCase):

    def test_is_whitespace(self):
        self.assertTrue(Normalizer.is_whitespace(' \n  '))
        self.assertTrue(Normalizer.is_whitespace(''))
        self.assertFalse(Normalizer.is_whitespace(' x '))

    def test_is_spaces(self):
        self.assertTrue(Normalizer.is_spaces('  '))
        self.assertFalse(Normalizer.is_spaces(' \n'))

    def test_whitespace_text_collapses(self):
        div = elem('div', text('\n   \n'), elem('b', text('x')), text('  '))
        self.assertEqual(normalized(div), '<div>\n<b>x</b>  </div>')


class TestCleanStyle(unittest.TestCase):

    def test_empty_p_removed(self):
        div = elem('div',
                   elem('p', text(' ')),
                   elem('p', elem('span', text(' '))),
                   elem('p', text('kept')))
        self.assertEqual(normalized(div), '<div><p>kept</p></div>')

    def test_p_with_image_kept(self):
        div = elem('div', elem('p', element('img', {'src': 'a.png', 'alt': ''})))
        self.assertEqual(normalized(div),
                         '<div><p><img alt="" src="a.png"/></p></div>')

    def test_top_p_removed(self):
        self.assertIsNone(Normalizer.normalize(elem('p', text(' '))))

    def test_align_left(self):
        div = elem('div',
                   element('p', {'align': 'left'}, text('a')),
                   element('div', {'align': 'left'}, text('b')))
        self.assertEqual(tostring(Normalizer.normalize(div), xhtml=False),
                         '<div><p>a</p><div align="left">b</div></div>')

    def test_style_cleanup(self):
        self.assertEqual(
            Normalizer.clean_style_value(
                'font-weight: normal; color: red;font-family: Courier New, monospace;'),
            'color: red;font-family:monospace')
        p = element('p', {'style': 'margin-bottom: 0; text-decoration: none'}, text('x'))
        self.assertEqual(normalized(p), '<p>x</p>')

    def test_bare_span_unwrapped(self):
        p = elem('p', text('a'),
                 elem('span', text('b'), elem('i', text('c'))),
                 text('d'))
        self.assertEqual(normalized(p), '<p>ab<i>c</i>d</p>')

    def test_span_with_style_kept(self):
        p = elem('p', element('span', {'style': 'color: red'}, text('b')))
        self.assertEqual(normalized(p), '<p><span style="color: red">b</span></p>')

    def test_span_emptied_by_style(self):
        p = elem('p', element('span', {'style': 'font-style: normal'}, text('b')))
        self.assertEqual(normalized(p), '<p>b</p>')

    def test_nested_spans(self):
        p = elem('p', elem('span', elem('span', text('x')), text('y')))
        self.assertEqual(normalized(p), '<p>xy</p>')

    def test_img_src(self):
        div = elem('div', element('img', {'alt': 'a'}), element('img', {'src': ''}))
        self.assertEqual(
            normalized(div),
            '<div><img alt="a" src="data:null;,"/><img src="data:null;,"/></div>')


class TestExtended(unittest.TestCase):

    def test_links(self):
        div = elem('div',
                   element('a', {'href': '/chapter/2'}, text('next')),
                   element('a', {'href': 'https://example.com/'}, text('home')))
        self.assertEqual(
            normalized(div),
            '<div><a>next</a><a href="https://example.com/">home</a></div>')
        div = elem('div', element('a', {'href': '/chapter/2'}, text('next')))
        self.assertEqual(normalized(div, extended=False),
                         '<div><a href="/chapter/2">next</a></div>')

    def test_tables(self):
        div = elem('div',
                   element('table', {'border': '3'}, elem('tbody')),
                   element('table', {'border': 'none'}),
                   elem('dl', elem('dd')))
        self.assertEqual(normalized(div),
                         '<div><table border="1"/><table border=""/></div>')

    def test_center(self):
        div = elem('div',
                   elem('center', text('a')),
                   element('center', {'class': 'x'}, text('b')),
                   elem('big', text('c')))
        self.assertEqual(
            normalized(div),
            '<div><div class="mid">a</div><div class="x mid">b</div>'
            '<span style="font-size:larger">c</span></div>')

    def test_doubled_lists(self):
        ul = elem('ul',
                  elem('li', text('1')),
                  elem('ul', elem('li', text('2')), elem('li', text('3'))),
                  elem('li', text('4')))
        self.assertEqual(normalized(ul),
                         '<ul><li>1</li><li>2</li><li>3</li><li>4</li></ul>')

    def test_idempotent(self):
        def sample():
            return elem(
                'div',
                text('\n\n'),
                element('p', {'align': 'left', 'style': 'font-weight: normal; color: red'},
                        elem('span', text('a'))),
                elem('p', text(' ')),
                elem('center', elem('big', text('b'))),
                element('a', {'href': '/x'}, text('c')),
                element('table', {'border': '2'}, elem('tbody')),
                elem('ul', elem('ul', elem('li', text('d')))),
                element('img', {'alt': ''}),
            )
        once = Normalizer.normalize(sample())
        first = tostring(once)
        twice = tostring(Normalizer.normalize(once))
        self.assertEqual(first, twice)

    def test_empty_chapter(self):
        div = Normalizer.normalize(elem('div', elem('p', text('\n\xa0 '))))
        self.assertEqual(div.children, [])
        self.assertEqual(extract_text(div), '')

    def test_empty_style_span(self):
        p = elem('p', element('span', {'style': ''}, text('x')))
        self.assertEqual(normalized(p), '<p>x</p>')

    def test_link_span_unwrapped_once(self):
        div = elem('div', element('span', {'href': '/x'}, text('a')))
        once = Normalizer.normalize(div)
        self.assertEqual(tostring(once), '<div>a</div>')
        self.assertEqual(tostring(Normalizer.normalize(once)), '<div>a</div>')

    def test_link_span_kept_without_extended(self):
        div = elem('div', element('span', {'href': '/x'}, text('a')))
        self.assertEqual(tostring(Normalizer.normalize(div, extended=False), xhtml=False),
                         '<div><span href="/x">a</span></div>')


class TestLargeTrees(unittest.TestCase):

    def test_many_spans(self):
        n = 20000
        div = elem('div', *[elem('span', text('x')) for dummy in range(n)])
        start = time.monotonic()
        Normalizer.normalize(div)
        self.assertTrue(time.monotonic() - start < 10)
        self.assertEqual(len(div.children), n)
        self.assertTrue(all(child.parent is div for child in div.children))
        self.assertEqual(tostring(div), '<div>%s</div>' % ('x' * n))

    def test_top_level_span(self):
        span = elem('span', text('a'), elem('b', text('c')))
        self.assertIs(Normalizer.normalize(span), span)
        self.assertEqual(tostring(span), '<span>a<b>c</b></span>')
        div = elem('div', text('1'), span, text('2'))
        self.assertIs(Normalizer.clean_style(span), span)
        self.assertIsNone(span.parent)
        self.assertEqual(tostring(div), '<div>1a<b>c</b>2</div>')
