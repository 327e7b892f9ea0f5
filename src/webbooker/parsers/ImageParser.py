#!/usr/bin/env python
#  -*- mode: python; indent-tabs-mode: nil; -*- coding: UTF8 -*-

"""

ImageParser.py

Copyright 2024 by the WebBooker authors

Distributable under the GNU General Public License Version 3 or newer.

Make a cover image out of whatever the site gave us.

"""

import io

from PIL import Image, ImageFile

from libgutenberg.Logger import debug, error

# works around problems with bad checksums in a small number of png files
ImageFile.LOAD_TRUNCATED_IMAGES = True

COVER_MIN_DIMEN = (400, 600)  # in pixels
COVER_QUALITY = 80
BACKGROUND = (128, 128, 128)


def save_jpeg_with_scale(data, min_width, min_height):
    """ Return data as jpeg at least min_width x min_height.

    A jpeg that is big enough is returned unchanged.  Smaller images
    are scaled up, keeping the aspect ratio, over a grey background.

    """

    image = Image.open(io.BytesIO(data))
    image.load()
    width, height = image.size

    if image.format == 'JPEG' and width >= min_width and height >= min_height:
        debug("Cover: %d x %d jpeg, unchanged" % (width, height))
        return data

    dimen = image.size
    if width < min_width or height < min_height:
        scale = max(min_width / float(width), min_height / float(height))
        dimen = (int(round(width * scale)), int(round(height * scale)))

    image = image.convert('RGBA')
    if dimen != image.size:
        image = image.resize(dimen, Image.BILINEAR)

    # composite over grey, jpeg has no alpha
    canvas = Image.new('RGB', dimen, BACKGROUND)
    canvas.paste(image, (0, 0), image)

    buf = io.BytesIO()
    canvas.save(buf, 'jpeg', quality=COVER_QUALITY)
    debug("Cover: %d x %d (was %d x %d)" % (dimen[0], dimen[1], width, height))
    return buf.getvalue()


def make_cover(data, min_dimen=COVER_MIN_DIMEN):
    """ Make the cover jpeg, or None if the image is unusable. """
    try:
        return save_jpeg_with_scale(data, *min_dimen)
    except (IOError, ValueError, ZeroDivisionError, Image.DecompressionBombError) as what:
        error("Could not make cover: %s", what)
        return None
