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
Bounded work queue and fixed-size thread pool for the tile fetch pipeline.
"""

import queue
import time
import threading

import logging
log = logging.getLogger('mapview.system')

Full = queue.Full

class TileQueue(queue.Queue):
    """
    Bounded FIFO queue with non-blocking `offer`, blocking `take`
    and in-place filtering of pending items.

    A ``None`` item is the stop sentinel for consumers.

    >>> q = TileQueue(2)
    >>> q.offer(1), q.offer(2), q.offer(3)
    (True, True, False)
    >>> q.retain(lambda item: item > 1)
    1
    >>> q.take()
    2
    """
    def offer(self, item):
        try:
            self.put_nowait(item)
        except queue.Full:
            return False
        return True

    def take(self, timeout=None):
        return self.get(timeout=timeout)

    def retain(self, predicate):
        """
        Remove all pending items for which `predicate` returns False.
        Returns the number of removed items.
        """
        with self.mutex:
            kept = [item for item in self.queue if predicate(item)]
            removed = len(self.queue) - len(kept)
            if removed:
                self.queue.clear()
                self.queue.extend(kept)
                self._discarded(removed)
            return removed

    def close(self, consumers):
        """
        Drop all pending items and wake up `consumers` waiting
        threads with a stop sentinel. The sentinels are added even
        if the queue is at its capacity.
        Returns the number of dropped items.
        """
        with self.mutex:
            removed = len(self.queue)
            self.queue.clear()
            self._discarded(removed)
            for _ in range(consumers):
                self.queue.append(None)
            self.unfinished_tasks += consumers
            self.not_empty.notify_all()
            return removed

    def _discarded(self, count):
        # caller holds self.mutex
        self.unfinished_tasks -= count
        self.not_full.notify_all()
        if self.unfinished_tasks <= 0:
            self.unfinished_tasks = 0
            self.all_tasks_done.notify_all()


class WorkerPool(object):
    """
    Fixed number of daemon threads that all run the same `target`.
    """
    def __init__(self, size=10, name='mapview-worker'):
        self.size = size
        self.name = name
        self.workers = []

    def start(self, target):
        for i in range(self.size):
            worker = threading.Thread(target=target, name='%s-%d' % (self.name, i))
            worker.daemon = True
            worker.start()
            self.workers.append(worker)
        log.debug('started %d worker threads', self.size)
        return self

    def join(self, timeout=None):
        """
        Wait up to `timeout` seconds for all workers.
        Returns the workers that are still running.
        """
        deadline = None if timeout is None else time.time() + timeout
        for worker in self.workers:
            if deadline is None:
                worker.join()
            else:
                worker.join(max(0, deadline - time.time()))
        return [w for w in self.workers if w.is_alive()]

    def __repr__(self):
        return '%s(size=%d)' % (self.__class__.__name__, self.size)
