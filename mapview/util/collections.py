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

from collections import OrderedDict
from itertools import islice

class LRU(object):
    """
    Least Recently Used dictionary.

    Stores `size` key-value pairs. Removes the least recently used
    key-value pair when the dict is full.

    >>> lru = LRU(2)
    >>> lru['a'] = 1
    >>> lru['b'] = 2
    >>> lru['a']
    1
    >>> lru['c'] = 3
    >>> 'b' in lru, 'a' in lru
    (False, True)
    """
    def __init__(self, size=100):
        self.size = size
        self.values = OrderedDict()

    def get(self, key, default=None):
        if key not in self.values:
            return default
        return self[key]

    def __repr__(self):
        last_values = list(islice(reversed(self.values.items()), 10))
        return '<LRU size=%d values=%s%s>' % (
            self.size, repr(last_values)[:-1],
            ', ...]' if len(self) > 10 else ']')

    def __getitem__(self, key):
        result = self.values[key]
        self.values.move_to_end(key)
        return result

    def __setitem__(self, key, value):
        if self.size <= 0:
            return
        self.values[key] = value
        self.values.move_to_end(key)
        while len(self.values) > self.size:
            self.values.popitem(last=False)

    def __len__(self):
        return len(self.values)

    def __delitem__(self, key):
        self.values.pop(key, None)

    def __contains__(self, key):
        return key in self.values

    def clear(self):
        self.values.clear()
