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
Resolution of tile requests from memory, disk or the tile server.

.. digraph:: Tile request

    node [shape="box", height="0", width="0"]
    req  [label="TileCache.request"]
    mem  [label="MemoryTileCache"]
    disk [label="disk cache"]
    q    [label="TileQueue"]
    w    [label="worker"]
    dl   [label="TileDownloader"]
    req -> mem -> disk -> q -> w -> dl
"""

import os
import threading

from PIL import Image

from mapview.cache.memory import MemoryTileCache
from mapview.cache.path import tile_location
from mapview.client.http import TileDownloader
from mapview.config import cache_options
from mapview.image import load_image
from mapview.util.async_ import TileQueue

import logging
log = logging.getLogger('mapview.cache.tile')


class Tile(object):
    """
    Request for the tile `uri` of `source` at `zoom`.

    Images are delivered to the optional `sink` callable. ``None``
    is delivered when the tile is not available.
    """
    def __init__(self, source, uri, zoom, sink=None):
        self.source = source
        self.uri = uri
        self.zoom = zoom
        self.sink = sink
        self.image = None

    def set_image(self, image):
        self.image = image
        if self.sink is not None:
            self.sink(image)

    def set_image_from_path(self, path):
        """
        Load the image from `path` and deliver it. Returns ``None``
        if the file could not be decoded.
        """
        try:
            image = load_image(path)
        except (IOError, OSError, ValueError, Image.DecompressionBombError) as ex:
            log.warning('unable to load tile %s from %s: %s', self.uri, path, ex)
            return None
        self.set_image(image)
        return image

    def __repr__(self):
        return '%s(%r, zoom=%r)' % (self.__class__.__name__, self.uri, self.zoom)


class TileCache(object):
    """
    Loads tiles from the memory cache, the disk cache or the network,
    in this order.

    Tiles that are not cached are downloaded in the background by a
    fixed number of workers. Requests are queued up to
    ``queue_capacity``, further requests are dropped.

    :param options: `mapview.config.cache_options`
    :param downloader: `mapview.client.http.TileDownloader`
    """
    def __init__(self, options=None, downloader=None):
        if options is None:
            options = cache_options()
        self.cache_dir = options.cache_dir
        self.download_allowed = options.download_allowed
        self.pool_size = options.pool_size
        self.dispose_timeout = options.dispose_timeout
        self.waiting_image = options.waiting_image
        self.memory = MemoryTileCache(options.memory_size)
        self.queue = TileQueue(options.queue_capacity)
        if downloader is None:
            downloader = TileDownloader(user_agent=options.user_agent,
                accept=options.accept, timeout=options.client_timeout)
        self.downloader = downloader
        self._disposed = threading.Event()
        self.pool = options.pool_factory(options.pool_size)
        self.pool.start(self._worker)

    def tile_location(self, tile):
        return tile_location(tile.uri, self.cache_dir, tile.source.cache_prefix)

    @property
    def pending_tile_count(self):
        return self.queue.qsize()

    @property
    def disposed(self):
        return self._disposed.is_set()

    def request(self, tile):
        """
        Deliver the image of `tile`. Cached images are delivered
        immediately, all other tiles get the waiting image and are
        queued for download.
        """
        image = self.memory.get(tile.uri)
        if image is not None:
            log.debug('memory hit for %s', tile.uri)
            tile.set_image(image)
            return

        location = self.tile_location(tile)
        if os.path.exists(location) and self._load_from_disk(tile, location) is not None:
            log.debug('disk hit for %s', tile.uri)
            return

        tile.set_image(self.waiting_image())
        if self.disposed:
            log.debug('cache disposed, ignoring %s', tile.uri)
            return
        if not self.queue.offer(tile):
            log.warning('tile queue full, dropping request for %s', tile.uri)
            return
        log.debug('queued %s', tile.uri)

    def retain_pending_tiles(self, zoom):
        """
        Remove all queued requests that are not for `zoom`.
        Running downloads are not affected.
        """
        removed = self.queue.retain(lambda tile: tile is None or tile.zoom == zoom)
        if removed:
            log.debug('removed %d pending tiles not in zoom level %s', removed, zoom)
        return removed

    def dispose(self, timeout=None):
        """
        Stop all workers. Queued requests are dropped, running downloads
        get `timeout` seconds (default ``dispose_timeout``) to finish.
        Returns the workers that are still running.
        """
        if self._disposed.is_set():
            return []
        self._disposed.set()
        dropped = self.queue.close(self.pool_size)
        if dropped:
            log.debug('dropped %d pending tiles', dropped)
        if timeout is None:
            timeout = self.dispose_timeout
        alive = self.pool.join(timeout)
        if alive:
            log.warning('%d tile workers still running after %ss', len(alive), timeout)
        return alive

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.dispose()

    def _worker(self):
        while True:
            tile = self.queue.take()
            try:
                if tile is None:
                    break
                self._process(tile)
            except Exception:
                log.exception('unable to process %r', tile)
            finally:
                self.queue.task_done()
        log.debug('worker %s stopped', threading.current_thread().name)

    def _process(self, tile):
        location = self.tile_location(tile)
        if (not os.path.exists(location) and self.download_allowed
                and not self.disposed):
            self.downloader.download(tile.uri, location)
        if os.path.exists(location) and self._load_from_disk(tile, location) is not None:
            return
        tile.set_image(None)

    def _load_from_disk(self, tile, location):
        image = tile.set_image_from_path(location)
        if image is None:
            # broken files are downloaded again
            try:
                os.remove(location)
            except OSError as ex:
                log.warning('unable to remove %s: %s', location, ex)
            return None
        self.memory.put(tile.uri, image)
        return image
