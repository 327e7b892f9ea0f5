#!/usr/bin/env python
# -*- coding: utf-8 -*-
'''
run this with
python -m unittest -v tests.test_cli
'''
import os
import tempfile
import unittest
import zipfile

from libgutenberg import Logger

from webbooker import CommonCode
from webbooker.WebBooker import config, main, parse_content_option

Logger.set_log_level(10) # DEBUG

CHAPTER = """<html><head><title>Serial</title></head><body>
<h1>Part %d</h1>
<div class="entry-content"><p>Words of part %d.</p><p>&nbsp;</p></div>
</body></html>
"""


class TestCli(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.out_dir = self.tmp.name
        self.config_file = os.path.join(self.out_dir, 'webbooker.conf')
        with open(self.config_file, 'w') as fp:
            fp.write('[network]\nuser_agent = TestAgent/1.0\n')
        self.chapters = []
        for i in (1, 2):
            path = os.path.join(self.out_dir, 'part%d.html' % i)
            with open(path, 'w') as fp:
                fp.write(CHAPTER % (i, i))
            self.chapters.append(path)

    def tearDown(self):
        self.tmp.cleanup()

    def args(self, *extra):
        return ['--config', self.config_file, '--output-dir', self.out_dir] + list(extra)

    def outputs(self, ext):
        return [fn for fn in os.listdir(self.out_dir) if fn.endswith(ext)]

    def test_config(self):
        options = config(self.args('--title', 'T', *self.chapters))
        self.assertEqual(CommonCode.get_config('user_agent'), 'TestAgent/1.0')
        self.assertEqual(CommonCode.get_config('outputdir'), '.')
        self.assertEqual(options.urls, self.chapters)
        self.assertTrue(options.extended)

    def test_content_option(self):
        self.assertEqual(parse_content_option('div.entry-content'), ('div', 'entry-content'))
        self.assertEqual(parse_content_option('article'), ('article', None))
        self.assertEqual(parse_content_option('.text'), ('div', 'text'))
        self.assertEqual(parse_content_option(None), (None, None))

    def test_make_epub(self):
        rc = main(self.args('--title', 'Cli Book', '--author', 'Someone',
                            '--content', 'div.entry-content', *self.chapters))
        self.assertEqual(rc, 0)
        epubs = self.outputs('.epub')
        self.assertEqual(len(epubs), 1)
        self.assertTrue(epubs[0].startswith('Cli_Book_'))
        with zipfile.ZipFile(os.path.join(self.out_dir, epubs[0])) as zf:
            ch = zf.read('book/0001.xhtml').decode('utf-8')
            self.assertTrue('<h2 class="chapter">Part 2</h2>' in ch)
            self.assertTrue('Words of part 2.' in ch)
            self.assertFalse('<p>\xa0</p>' in ch)

        # not overwritten without --over
        rc = main(self.args('--title', 'Cli Book', *self.chapters))
        self.assertEqual(rc, 0)
        self.assertEqual(len(self.outputs('.epub')), 1)

    def test_make_both(self):
        rc = main(self.args('--title', 'Both', '--make', 'epub', '--make', 'html',
                            *self.chapters))
        self.assertEqual(rc, 0)
        self.assertEqual(len(self.outputs('.epub')), 1)
        self.assertEqual(len(self.outputs('.html')), 3)

    def test_missing_title(self):
        self.assertEqual(main(self.args(*self.chapters)), 1)
        self.assertEqual(self.outputs('.epub'), [])

    def test_missing_chapter(self):
        rc = main(self.args('--title', 'T', os.path.join(self.out_dir, 'nope.html')))
        self.assertEqual(rc, 1)
