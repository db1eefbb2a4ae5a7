"""DocScanner: discover API specification documents below a directory.

Every call performs a fresh, complete walk. Entries are visited in lexical
order at every level so a given file-system state always yields the same
DocumentSet.
"""

import fnmatch
import os
from typing import Iterable, Iterator, List, Optional

from .config import ScanError
from .utils import logger

DEFAULT_PATTERNS = ('*.json', '*.yaml', '*.yml')


class DocScanner:
    def __init__(self, patterns: Optional[Iterable[str]] = None):
        self.patterns = tuple(p.lower() for p in (patterns or DEFAULT_PATTERNS))

    def is_spec_file(self, name: str) -> bool:
        lname = name.lower()
        return any(fnmatch.fnmatchcase(lname, p) for p in self.patterns)

    def _entries(self, path: str) -> List[os.DirEntry]:
        try:
            with os.scandir(path) as it:
                return sorted(it, key=lambda e: e.name)
        except OSError as e:
            raise ScanError(f'cannot scan {path}: {e}') from e

    def _visit(self, entries: List[os.DirEntry]) -> Iterator[str]:
        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
                is_file = not is_dir and entry.is_file()
            except FileNotFoundError:
                # removed since listing; the watcher triggers a fresh scan
                logger.debug('skip vanished %s', entry.path)
                continue
            except OSError as e:
                raise ScanError(f'cannot stat {entry.path}: {e}') from e

            if is_dir:
                try:
                    sub = self._entries(entry.path)
                except ScanError as e:
                    if isinstance(e.__cause__, FileNotFoundError):
                        logger.debug('skip vanished %s', entry.path)
                        continue
                    raise
                yield from self._visit(sub)
            elif is_file and self.is_spec_file(entry.name):
                yield entry.path

    def scan(self, base_dir: str) -> List[str]:
        """Return every matching file under base_dir in walk order.

        Raises ScanError when base_dir or any directory below it cannot be
        listed. Entries deleted while the walk is in progress are skipped.
        """
        return list(self._visit(self._entries(base_dir)))
