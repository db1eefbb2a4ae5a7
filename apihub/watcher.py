import os
from typing import Callable, Optional

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .config import WatchError
from .utils import logger


class Handler(FileSystemEventHandler):
    """Turns structural file-system events into change notifications.

    Creation, deletion and rename change the document set; in-place
    modifications do not and are ignored.
    """

    def __init__(self, on_change: Callable[[], None]):
        self.on_change = on_change

    def _notify(self, event: FileSystemEvent):
        logger.debug('fs event %s: %s', event.event_type, event.src_path)
        try:
            self.on_change()
        except Exception:
            logger.exception('change callback failed for %s', event.src_path)

    def on_created(self, event):
        self._notify(event)

    def on_deleted(self, event):
        self._notify(event)

    def on_moved(self, event):
        self._notify(event)


class DirectoryWatcher:
    def __init__(self, path: str, on_change: Callable[[], None]):
        self.path = path
        self.handler = Handler(on_change)
        self.observer: Optional[Observer] = None

    def start(self):
        """Subscribe to events under path.

        Raises WatchError if the subscription cannot be established.
        """
        if not os.path.isdir(self.path):
            raise WatchError(f'cannot watch {self.path}: not a directory')
        observer = Observer()
        try:
            observer.schedule(self.handler, self.path, recursive=True)
            observer.start()
        except OSError as e:
            raise WatchError(f'cannot watch {self.path}: {e}') from e
        self.observer = observer
        logger.info('Watching %s', self.path)

    @property
    def alive(self) -> bool:
        return self.observer is not None and self.observer.is_alive()

    def stop(self, timeout: Optional[float] = None) -> bool:
        """Stop the observer; return True once its thread has exited."""
        if self.observer is None:
            return True
        self.observer.stop()
        self.observer.join(timeout)
        if self.observer.is_alive():
            return False
        self.observer = None
        return True
