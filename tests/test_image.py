#!/usr/bin/env python
# -*- coding: utf-8 -*-
'''
run this with
python -m unittest -v tests.test_image
'''
import io
import unittest

from PIL import Image

from libgutenberg import Logger

from webbooker.parsers import ImageParser

Logger.set_log_level(10) # DEBUG


def make_image(size, format_, mode='RGB'):
    buf = io.BytesIO()
    color = (0, 0, 255, 0) if mode == 'RGBA' else (0, 0, 255)
    Image.new(mode, size, color).save(buf, format_)
    return buf.getvalue()


class TestCover(unittest.TestCase):

    def test_big_jpeg_unchanged(self):
        data = make_image((500, 700), 'jpeg')
        self.assertEqual(ImageParser.make_cover(data), data)

    def test_small_scaled(self):
        data = make_image((200, 200), 'jpeg')
        cover = Image.open(io.BytesIO(ImageParser.make_cover(data)))
        self.assertEqual(cover.size, (600, 600))

    def test_png_converted(self):
        data = make_image((800, 1200), 'png')
        cover = Image.open(io.BytesIO(ImageParser.make_cover(data)))
        self.assertEqual(cover.format, 'JPEG')
        self.assertEqual(cover.size, (800, 1200))

    def test_transparent_is_grey(self):
        data = make_image((400, 600), 'png', mode='RGBA')
        cover = Image.open(io.BytesIO(ImageParser.make_cover(data)))
        r, g, b = cover.convert('RGB').getpixel((200, 300))
        for c in (r, g, b):
            self.assertTrue(abs(c - 128) < 8)

    def test_min_dimen(self):
        data = make_image((10, 20), 'png')
        cover = Image.open(io.BytesIO(ImageParser.make_cover(data, (100, 100))))
        self.assertEqual(cover.size, (100, 200))

    def test_bad_data(self):
        self.assertIsNone(ImageParser.make_cover(b'not an image'))
        self.assertIsNone(ImageParser.make_cover(b''))
