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

import logging
logger = logging.getLogger('mapview.source.request')

def log_request(url, status, response=None, method='GET', duration=None):
    """
    Log a single tile request as ``METHOD URL STATUS SIZE_KB DURATION_MS``.
    Redirects are appended as ``-> final_url``.
    """
    if not logger.isEnabledFor(logging.INFO):
        return

    url = url.replace(' ', '')
    size = '-'
    if response is not None:
        length = response.headers.get('Content-Length')
        if length is None and response.content is not None:
            length = len(response.content)
        if length:
            size = '%.1f' % (int(length)/1024.0, )
        if response.url and response.url != url:
            url = '%s -> %s' % (url, response.url)
    duration = '%d' % (duration*1000) if duration else '-'
    logger.info('%s %s %s %s %s', method, url, status or '-', size, duration)
