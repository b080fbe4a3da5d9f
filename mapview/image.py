# This file is part of the MapView project.
# Copyright (C) 2024 Omniscale <http://omniscale.de>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Decoding of tile images and placeholder images.
"""

import threading

from PIL import Image

import logging
log = logging.getLogger('mapview.image')

magic_bytes = [
    ('png', (b"\211PNG\r\n\032\n",)),
    ('jpeg', (b"\xFF\xD8",)),
    ('gif', (b"GIF87a", b"GIF89a",)),
    ('webp', (b"RIFF",)),
]

def peek_image_format(data):
    """
    Guess the image format from the first bytes of `data`.

    >>> peek_image_format(b'\\x89PNG\\r\\n\\x1a\\n....')
    'png'
    >>> peek_image_format(b'<html>') is None
    True
    """
    for format, prefixes in magic_bytes:
        if data.startswith(prefixes):
            return format
    return None

def load_image(filename):
    """
    Read and decode the image file `filename`.
    Raises `IOError` if the file is missing or not a valid image.
    """
    with open(filename, 'rb') as f:
        img = Image.open(f)
        img.load()
    return img

def create_waiting_image(size=256, color=(221, 221, 221)):
    """
    Create a plain image to show while a tile is loading.
    """
    return Image.new('RGB', (size, size), color)

_waiting_image = None
_waiting_image_lock = threading.Lock()

def default_waiting_image():
    """
    Shared placeholder image for tiles that are not loaded yet.
    """
    global _waiting_image
    with _waiting_image_lock:
        if _waiting_image is None:
            _waiting_image = create_waiting_image()
        return _waiting_image
