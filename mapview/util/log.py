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

import sys
import logging
from logging.config import fileConfig

def setup_logging(logging_conf=None, level=logging.WARN):
    """
    Configure logging for applications that embed the map core.
    `logging_conf` is an optional INI file for `logging.config.fileConfig`.
    """
    if logging_conf is not None:
        fileConfig(logging_conf, {'here': './'})

    mapview_log = logging.getLogger('mapview')
    mapview_log.setLevel(level)

    # repeated calls only change the level
    if any(getattr(h, 'stream', None) is sys.stdout for h in mapview_log.handlers):
        return mapview_log

    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(logging.DEBUG)
    formatter = logging.Formatter(
        "[%(asctime)s] %(name)s - %(levelname)s - %(message)s")
    ch.setFormatter(formatter)
    mapview_log.addHandler(ch)
    return mapview_log
