#!/usr/bin/env python
# -*- coding: utf-8 -*-
'''
run this with
python -m unittest -v tests.test_book
'''
import datetime
import unittest

import libgutenberg.GutenbergGlobals as gg

from webbooker.Book import BookMetadata, Chapter
from webbooker.CommonCode import MissingTitleError


def utc(*args):
    return datetime.datetime(*args, tzinfo=gg.UTC())


class TestBook(unittest.TestCase):

    def test_defaults(self):
        book = BookMetadata(title='T')
        self.assertEqual(book.language, 'en')
        self.assertEqual(book.chapters, [])
        self.assertIsNone(book.calculate_last_modified())
        self.assertEqual(book.name(), 'T')

    def test_validate(self):
        BookMetadata(title='T').validate()
        self.assertRaises(MissingTitleError, BookMetadata().validate)
        self.assertRaises(MissingTitleError, BookMetadata(title=' \n').validate)
        # also a ValueError
        self.assertRaises(ValueError, BookMetadata().validate)

    def test_last_modified(self):
        tz = datetime.timezone(datetime.timedelta(hours=-5))
        book = BookMetadata(
            title='My Book',
            modified=utc(2020, 1, 1),
            chapters=[
                Chapter('a', modified=utc(2024, 5, 1, 10)),
                Chapter('b'),
                # 2024-05-01 16:00 UTC
                Chapter('c', modified=datetime.datetime(2024, 5, 1, 11, tzinfo=tz)),
            ])
        self.assertEqual(book.calculate_last_modified(), utc(2024, 5, 1, 16))
        self.assertEqual(book.name(), 'My_Book_2024-05-01_160000')

    def test_book_modified_only(self):
        book = BookMetadata(title='X', modified=utc(2021, 2, 3),
                            chapters=[Chapter('a')])
        self.assertEqual(book.calculate_last_modified(), utc(2021, 2, 3))
