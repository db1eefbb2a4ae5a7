"""RegenerationLoop: the single consumer of change signals.

The watcher only enqueues; one worker thread dequeues and calls
PageGenerator.generate, so two generations never run at the same time.
"""

import queue
import threading
from typing import Optional

from .generator import PageGenerator
from .utils import logger

IDLE = 'idle'
GENERATING = 'generating'
STOPPED = 'stopped'


class ChangeSignal:
    """The document set may have changed. Carries no payload."""

    __slots__ = ()

    def __repr__(self):
        return 'ChangeSignal()'


CHANGED = ChangeSignal()
_STOP = object()


class RegenerationLoop:
    def __init__(self, generator: PageGenerator):
        self.generator = generator
        self._signals: 'queue.Queue[object]' = queue.Queue()
        self._stopping = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.state = IDLE
        self.generations = 0
        self.failures = 0

    def notify(self):
        if not self._stopping.is_set():
            self._signals.put(CHANGED)

    def start(self):
        self._thread = threading.Thread(target=self._run, name='apihub-regen', daemon=True)
        self._thread.start()

    def _run(self):
        while True:
            item = self._signals.get()
            if item is _STOP or self._stopping.is_set():
                break
            self.state = GENERATING
            try:
                self.generator.generate()
                self.generations += 1
            except Exception:
                # keep serving the last good page
                self.failures += 1
                logger.exception('Regenerating %s failed', self.generator.opts.output_path)
            finally:
                self.state = IDLE
        self.state = STOPPED
        logger.info('Regeneration loop stopped')

    def stop(self, timeout: Optional[float] = None) -> bool:
        """Request shutdown and wait for the worker to acknowledge it."""
        self._stopping.set()
        self._signals.put(_STOP)
        if self._thread is None:
            self.state = STOPPED
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()
