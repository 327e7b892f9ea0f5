#!/usr/bin/env python
#  -*- mode: python; indent-tabs-mode: nil; -*- coding: utf-8 -*-

"""

Container.py

Copyright 2024 by the WebBooker authors

Distributable under the GNU General Public License Version 3 or newer.

The OCF zip container of an epub.

"""

import os
import zipfile

from lxml import etree
from lxml.builder import ElementMaker

from libgutenberg.Logger import debug, error
from libgutenberg.MediaTypes import mediatypes as mt

from webbooker.CommonCode import ContainerWriteError
from webbooker.utils import to_utc

# zip can't represent times outside of these
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)
ZIP_END = (2107, 12, 31, 23, 59, 58)

NS_OASIS = 'urn:oasis:names:tc:opendocument:xmlns:container'


def zip_date_time(modified):
    """ Convert a datetime into a zip date_time tuple in UTC. """
    if modified is None:
        return ZIP_EPOCH
    t = to_utc(modified).timetuple()[:6]
    if t < ZIP_EPOCH:
        return ZIP_EPOCH
    if t > ZIP_END:
        return ZIP_END
    return t


class OEBPSContainer(zipfile.ZipFile):
    """ Class representing an OEBPS Container.

    Writes to a binary stream.  The first entry is the uncompressed
    mimetype.  After the first failed write all further writes are
    skipped; commit() raises the failure.

    """

    def __init__(self, fp, oebps_path='book/'):
        """ Create the zip file and write the mimetype. """

        self.oebps_path = oebps_path
        self.error = None

        zipfile.ZipFile.__init__(self, fp, 'w', zipfile.ZIP_DEFLATED)

        # OCF wants mimetype first and uncompressed
        i = self.zi(compress_type=zipfile.ZIP_STORED)
        i.filename = 'mimetype'
        self.write_entry(i, mt.epub.encode('ascii'))


    def commit(self):
        """ Close OCF Container. Raise the first error seen. """
        try:
            self.close()
        except (OSError, ValueError) as what:
            if self.error is None:
                self.error = what
        if self.error is not None:
            raise ContainerWriteError(
                'Error writing epub container: %s' % self.error) from self.error


    def zi(self, filename=None, modified=None, compress_type=zipfile.ZIP_DEFLATED):
        """ Make a ZipInfo. """
        z = zipfile.ZipInfo()
        z.date_time = zip_date_time(modified)
        z.compress_type = compress_type
        z.external_attr = 0x81a40000
        if filename:
            z.filename = os.path.join(self.oebps_path, filename)
        return z


    def write_entry(self, zinfo, bytes_):
        """ Write one entry unless an earlier write failed. """
        if self.error is not None:
            debug("Skipping %s after earlier error" % zinfo.filename)
            return False
        try:
            self.writestr(zinfo, bytes_)
        except (OSError, ValueError, zipfile.LargeZipFile) as what:
            error("Error writing %s: %s" % (zinfo.filename, what))
            self.error = what
            return False
        debug("Added %s (%s)" % (
            zinfo.filename,
            'stored' if zinfo.compress_type == zipfile.ZIP_STORED else 'deflated'))
        return True


    def add_deflated(self, name, bytes_, modified=None):
        """ Add compressed file. """
        return self.write_entry(self.zi(name, modified), bytes_)


    def add_stored(self, name, bytes_, modified=None):
        """ Add uncompressed file. """
        return self.write_entry(
            self.zi(name, modified, compress_type=zipfile.ZIP_STORED), bytes_)


    def add_unicode(self, name, u, modified=None):
        """ Add compressed file from unicode string. """
        return self.add_deflated(name, u.encode('utf-8'), modified)


    def add_container_xml(self, rootfilename, modified=None):
        """ Write container.xml

        <?xml version='1.0' encoding='UTF-8'?>

        <container xmlns='urn:oasis:names:tc:opendocument:xmlns:container'
                   version='1.0'>
          <rootfiles>
            <rootfile full-path='$path'
                      media-type='application/oebps-package+xml' />
          </rootfiles>
        </container>

        """

        rootfilename = os.path.join(self.oebps_path, rootfilename)

        ocf = ElementMaker(namespace=NS_OASIS,
                           nsmap={None: NS_OASIS})

        container = ocf.container(
            ocf.rootfiles(
                ocf.rootfile(**{
                    'full-path': rootfilename,
                    'media-type': 'application/oebps-package+xml'})),
            version='1.0')

        i = self.zi(modified=modified)
        i.filename = 'META-INF/container.xml'
        return self.write_entry(i, etree.tostring(
            container, encoding='utf-8', xml_declaration=True, pretty_print=True))
