#!/usr/bin/env python
#  -*- mode: python; indent-tabs-mode: nil; -*- coding: utf-8 -*-

"""

EpubWriter.py

Copyright 2024 by the WebBooker authors

Distributable under the GNU General Public License Version 3 or newer.

Writes an EPUB3 file.

Layout of the container:

  mimetype                  stored
  META-INF/container.xml
  book/toc.ncx
  book/content.opf
  book/frontmatter.xhtml
  book/toc.xhtml
  book/cover.jpg            stored, if there is a cover
  book/0000.xhtml ...       one per chapter

"""

import io
import uuid

from lxml import etree
from lxml.builder import ElementMaker

import libgutenberg.GutenbergGlobals as gg
from libgutenberg.GutenbergGlobals import NS
from libgutenberg.Logger import debug, exception, info
from libgutenberg.MediaTypes import mediatypes as mt

from webbooker import Normalizer
from webbooker import writers
from webbooker.CommonCode import PackageError, get_option
from webbooker.Serializer import render_xhtml
from webbooker.Tree import append, elem, element, text
from webbooker.Version import VERSION, GENERATOR
from webbooker.parsers import ImageParser
from webbooker.utils import format_timestamp, now
from webbooker.writers.Container import OEBPSContainer

OEBPS_PATH = 'book/'
CONTENT_OPF = 'content.opf'
TOC_NCX = 'toc.ncx'
TOC_XHTML = 'toc.xhtml'
FRONTMATTER = 'frontmatter.xhtml'
COVER = 'cover.jpg'

BOOK_ID = 'BookID'

EPUB_TYPE = 'epub:type'


class ManifestItem(object):
    """ One item of the manifest. """

    def __init__(self, id_, href, mediatype, prop=None):
        self.id = id_
        self.href = href
        self.mediatype = mediatype
        self.prop = prop


    def __repr__(self):
        return '<ManifestItem %s %s>' % (self.id, self.href)


class Package(object):
    """ Manifest and spine of one epub.

    Ids in the manifest are unique, and every spine entry refers to a
    manifest item.

    """

    def __init__(self):
        self.manifest = []
        self.spine = []
        self.ids = set()


    def manifest_item(self, id_, href, mediatype, prop=None):
        """ Add item to manifest. """
        if id_ in self.ids:
            raise PackageError('Duplicate manifest id: %s' % id_)
        self.ids.add(id_)
        self.manifest.append(ManifestItem(id_, href, mediatype, prop))
        return id_


    def spine_item(self, id_):
        """ Add item to spine. """
        if id_ not in self.ids:
            raise PackageError('Spine item %s is not in the manifest' % id_)
        self.spine.append(id_)


    def check(self):
        for id_ in self.spine:
            if id_ not in self.ids:
                raise PackageError('Spine item %s is not in the manifest' % id_)


    @classmethod
    def from_book(cls, book, has_cover=False):
        """ Build the manifest and spine for a book. """
        package = cls()
        package.manifest_item('frontmatter', FRONTMATTER, mt.xhtml)
        package.manifest_item('toc', TOC_XHTML, mt.xhtml, prop='nav')
        package.manifest_item('ncx', TOC_NCX, mt.ncx)
        if has_cover:
            package.manifest_item('cover', COVER, mt.jpeg, prop='cover-image')

        package.spine_item('frontmatter')
        package.spine_item('toc')
        for i in range(len(book.chapters)):
            package.spine_item(
                package.manifest_item(writers.chapter_id(i),
                                      writers.chapter_filename(i), mt.xhtml))
        return package


class ContentOPF(object):
    """ Class that builds content.opf. """

    def __init__(self, package):
        self.package = package
        self.nsmap = gg.build_nsmap('dc')
        self.nsmap[None] = str(NS.opf)
        self.opf = ElementMaker(namespace=str(NS.opf), nsmap=self.nsmap)
        self.dc = ElementMaker(namespace=str(NS.dc), nsmap=self.nsmap)


    def metadata(self, book, uid, modified, has_cover=False):
        """ Build metadata.

    <metadata>
      <meta property="dcterms:modified">2024-05-01T12:00:00Z</meta>
      <dc:identifier id="BookID">7c3e...</dc:identifier>
      <dc:title>Example</dc:title>
      <dc:language>en</dc:language>
      <dc:creator>Some Author</dc:creator>
      <dc:description>...</dc:description>
      <meta name="generator" content="WebBooker 0.3.0"/>
      <meta name="cover" content="cover"/>
    </metadata>
        """

        opf = self.opf
        dc = self.dc

        metadata = opf.metadata(
            opf.meta(format_timestamp(modified), property='dcterms:modified'),
            dc.identifier(uid, id=BOOK_ID),
            dc.title(book.title),
            dc.language(book.language),
        )
        if book.authors:
            metadata.append(dc.creator(book.authors))
        if book.comments:
            metadata.append(dc.description(book.comments))
        metadata.append(opf.meta(name='generator', content=GENERATOR % VERSION))
        if has_cover:
            # register mobipocket style
            metadata.append(opf.meta(name='cover', content='cover'))
        return metadata


    def manifest(self):
        manifest = self.opf.manifest()
        for item in self.package.manifest:
            atts = {'id': item.id, 'href': item.href, 'media-type': item.mediatype}
            if item.prop:
                atts['properties'] = item.prop
            manifest.append(self.opf.item(**atts))
        return manifest


    def spine(self):
        spine = self.opf.spine(toc='ncx')
        for id_ in self.package.spine:
            spine.append(self.opf.itemref(idref=id_))
        return spine


    def guide(self):
        return self.opf.guide(
            self.opf.reference(type='cover', title='Cover page', href=FRONTMATTER),
            self.opf.reference(type='toc', title='Table of contents', href=TOC_XHTML),
        )


    def serialize(self, book, uid, modified):
        """ Serialize content.opf as unicode string. """

        self.package.check()
        has_cover = any(item.prop == 'cover-image' for item in self.package.manifest)

        package = self.opf.package(
            self.metadata(book, uid, modified, has_cover),
            self.manifest(),
            self.spine(),
            self.guide(),
            **{'version': '3.0', 'unique-identifier': BOOK_ID})

        content_opf = "%s\n\n%s" % (gg.XML_DECLARATION,
                                    etree.tostring(package,
                                                   encoding=str,
                                                   pretty_print=True))
        if get_option('verbose', 0) >= 3:
            debug(content_opf)
        return content_opf


class TocNCX(object):
    """ Class that builds toc.ncx. """

    def __init__(self, book):
        self.book = book
        self.ncx = ElementMaker(namespace=str(NS.ncx),
                                nsmap={None: str(NS.ncx)})


    def toc(self):
        """ [(id, href, label), ...] with the frontmatter first. """
        toc = [('frontmatter', FRONTMATTER, 'Front Matter')]
        for i, chapter in enumerate(self.book.chapters):
            toc.append((writers.chapter_id(i), writers.chapter_filename(i), chapter.title))
        return toc


    def serialize(self, uid):
        """ Serialize toc.ncx as unicode string. """
        ncx = self.ncx
        book = self.book

        head = ncx.head(
            ncx.meta(name='dtb:uid', content=uid),
            ncx.meta(name='dtb:depth', content='1'),
            ncx.meta(name='dtb:generator', content=GENERATOR % VERSION),
            ncx.meta(name='dtb:totalPageCount', content='0'),
            ncx.meta(name='dtb:maxPageNumber', content='0'))

        root = ncx.ncx(
            head,
            ncx.docTitle(ncx.text(book.title)),
            **{'version': '2005-1', NS.xml.lang: book.language})
        if book.authors:
            root.append(ncx.docAuthor(ncx.text(book.authors)))
        root.append(self._make_navmap())

        toc_ncx = "%s\n\n%s" % (gg.XML_DECLARATION,
                                etree.tostring(root,
                                               doctype=gg.NCX_DOCTYPE,
                                               encoding=str,
                                               pretty_print=True))
        if get_option('verbose', 0) >= 3:
            debug(toc_ncx)
        return toc_ncx


    def _make_navmap(self):
        """ Build the flat navMap. playOrder counts from 1. """
        ncx = self.ncx
        navmap = ncx.navMap()
        for play_order, (id_, href, label) in enumerate(self.toc(), 1):
            navmap.append(ncx.navPoint(
                ncx.navLabel(ncx.text(label)),
                ncx.content(src=href),
                **{'class': 'chapter', 'id': id_, 'playOrder': str(play_order)}))
        return navmap


class Writer(writers.BaseWriter):
    """ Class that writes epub files. """

    ext = '.epub'

    @staticmethod
    def toc_page(book):
        """ The EPUB3 navigation document. """
        return writers.html_root(
            book.language,
            writers.head(book.title),
            elem('body',
                 element('nav', {EPUB_TYPE: 'toc'},
                         elem('h2', text('Contents')),
                         writers.toc_list(book))),
            epub=True)


    @staticmethod
    def frontmatter_page(book, cover, modified):
        body = elem('body')
        append(body, *writers.frontmatter_blocks(book, COVER if cover else None, modified))
        return writers.html_root(book.language, writers.head(book.title), body)


    @staticmethod
    def chapter_page(book, chapter, backlink=None):
        body = elem('body')
        append(body, *writers.chapter_blocks(chapter, backlink))
        return writers.html_root(book.language, writers.head(chapter.title), body)


    def write(self, book, fp):
        """ Write book as epub to binary stream fp.

        Nothing is written to fp unless the whole epub was built.

        """
        book.validate()

        uid = str(uuid.uuid4())
        modified = book.calculate_last_modified()
        opf_modified = modified or now()
        debug("Writing epub %s for %s" % (uid, book.title))

        cover = None
        if book.cover:
            cover = ImageParser.make_cover(book.cover)

        extended = get_option('extended', True)
        for chapter in book.chapters:
            chapter.content = Normalizer.normalize(chapter.content, extended)

        package = Package.from_book(book, cover is not None)

        try:
            buf = io.BytesIO()
            ocf = OEBPSContainer(buf, OEBPS_PATH)
            ocf.add_container_xml(CONTENT_OPF, modified)
            ocf.add_unicode(TOC_NCX, TocNCX(book).serialize(uid), modified)
            ocf.add_unicode(CONTENT_OPF,
                            ContentOPF(package).serialize(book, uid, opf_modified),
                            modified)
            ocf.add_deflated(FRONTMATTER,
                             render_xhtml(self.frontmatter_page(book, cover, modified)),
                             modified)
            ocf.add_deflated(TOC_XHTML, render_xhtml(self.toc_page(book)), modified)
            if cover:
                ocf.add_stored(COVER, cover, modified)

            last = len(book.chapters) - 1
            for i, chapter in enumerate(book.chapters):
                backlink = chapter.url if i == last else None
                ocf.add_deflated(writers.chapter_filename(i),
                                 render_xhtml(self.chapter_page(book, chapter, backlink)),
                                 chapter.modified or modified)
            ocf.commit()
        except Exception as what:
            exception("Error building Epub: %s" % what)
            raise

        data = buf.getvalue()
        fp.write(data)
        info("Epub has %d chapters" % len(book.chapters))
        return len(data)
