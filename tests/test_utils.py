#!/usr/bin/env python
# -*- coding: utf-8 -*-
'''
run this with
python -m unittest -v tests.test_utils
'''
import datetime
import unittest

import libgutenberg.GutenbergGlobals as gg

from webbooker import utils


class TestUtils(unittest.TestCase):

    def test_humanize(self):
        self.assertEqual(utils.humanize(0), '0 B')
        self.assertEqual(utils.humanize(2048), '2048 B')
        self.assertEqual(utils.humanize(9999), '9999 B')
        self.assertEqual(utils.humanize(10240), '10 KB')
        self.assertEqual(utils.humanize(10240000), '9 MB')

    def test_strip_accents(self):
        self.assertEqual(utils.strip_accents('Élan Café'), 'Elan Cafe')

    def test_book_filename(self):
        when = datetime.datetime(2024, 5, 1, 12, 30, 5, tzinfo=gg.UTC())
        self.assertEqual(utils.make_book_filename('A Tale: Part 2/3!', when),
                         'A_Tale_Part_2_3__2024-05-01_123005')
        self.assertEqual(utils.make_book_filename('Café v1.0'), 'Cafe_v1.0')

    def test_timestamp(self):
        tz = datetime.timezone(datetime.timedelta(hours=2))
        when = datetime.datetime(2024, 5, 1, 2, 0, 0, tzinfo=tz)
        self.assertEqual(utils.format_timestamp(when), '2024-05-01T00:00:00Z')
        self.assertEqual(utils.format_date(when), '2024-05-01')
        self.assertIsNone(utils.to_utc(None))
