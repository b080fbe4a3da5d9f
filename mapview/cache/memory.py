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
In-memory tier of the tile cache.
"""

import threading
import weakref

from mapview.util.collections import LRU


class MemoryTileCache(object):
    """
    Thread-safe mapping of tile URIs to decoded images.

    The last `size` images are kept alive. Older images stay available
    as long as they are referenced elsewhere (e.g. by the map view) and are
    forgotten when they are garbage collected.
    """
    def __init__(self, size=256):
        self.size = size
        self._lock = threading.Lock()
        self._recent = LRU(size)
        self._weak = weakref.WeakValueDictionary()

    def get(self, uri):
        with self._lock:
            image = self._recent.get(uri)
            if image is None:
                image = self._weak.get(uri)
                if image is not None:
                    self._recent[uri] = image
            return image

    def put(self, uri, image):
        with self._lock:
            self._recent[uri] = image
            self._weak[uri] = image

    def __contains__(self, uri):
        return self.get(uri) is not None

    def __len__(self):
        with self._lock:
            return len(self._weak)

    def clear(self):
        with self._lock:
            self._recent.clear()
            self._weak.clear()
