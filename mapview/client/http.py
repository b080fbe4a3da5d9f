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
Tile download via HTTP.
"""
import time
import threading

import requests

from mapview.client.log import log_request
from mapview.image import peek_image_format
from mapview.util.fs import ensure_directory, write_atomic

import logging
log = logging.getLogger('mapview.client.http')

# some tile servers block the default agents of HTTP libraries
USER_AGENT = 'curl/8.7.1'


class TileDownloader(object):
    """
    Downloads single tiles into the disk cache.

    Each thread uses its own `requests.Session`. Failed downloads are
    logged and not retried.
    """
    def __init__(self, user_agent=USER_AGENT, accept='*/*', timeout=60):
        self.headers = {
            'User-Agent': user_agent,
            'Accept': accept,
        }
        self.timeout = timeout
        self._local = threading.local()

    @property
    def session(self):
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self._local.session = requests.Session()
            session.headers.update(self.headers)
        return session

    def download(self, url, location):
        """
        Fetch `url` and store the tile as `location`.
        Returns ``True`` if the tile was stored.
        """
        code = None
        resp = None
        start_time = time.time()
        try:
            resp = self.session.get(url, timeout=self.timeout, allow_redirects=True)
            code = resp.status_code
        except requests.RequestException as ex:
            log.error('no response from %s: %s', url, ex)
            return False
        finally:
            log_request(url, code, resp, duration=time.time()-start_time)

        if code == 200:
            if peek_image_format(resp.content) is None:
                log.error('response for %s is not an image (Content-Type: %s)',
                    url, resp.headers.get('Content-Type', '-'))
                return False
            try:
                ensure_directory(location)
                write_atomic(location, resp.content)
            except OSError as ex:
                log.error('unable to store tile %s in %s: %s', url, location, ex)
                return False
            log.debug('stored %s in %s', url, location)
            return True

        if code == 503:
            # no retry, the tile is requested again with the next view change
            log.warning('tile server unavailable (503) for %s', url)
            return False

        log.error('unexpected response %s for %s, headers: %s', code, url, dict(resp.headers))
        if resp.headers.get('Content-Type', '').lower().startswith('text/'):
            # always decoded as UTF-8, the charset of the response is ignored
            log.error('response from %s:\n%s', url, resp.content.decode('utf-8', 'replace'))
        return False

    def close(self):
        session = getattr(self._local, 'session', None)
        if session is not None:
            session.close()
            self._local.session = None

    def __repr__(self):
        return '%s(%r)' % (self.__class__.__name__, self.headers['User-Agent'])
