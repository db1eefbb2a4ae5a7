"""apihub - serve API specification documents with a live index page

This package provides:
- DocScanner: finds specification files below the api/ directory
- PageGenerator: renders index.html from index.tpl and the scanned documents
- DirectoryWatcher: watchdog subscription that reports structural changes
- RegenerationLoop: single worker that regenerates the page on each change
"""

from .config import Options
from .generator import PageGenerator
from .loop import RegenerationLoop
from .scanner import DocScanner
from .watcher import DirectoryWatcher

__all__ = ["Options", "DocScanner", "PageGenerator", "DirectoryWatcher", "RegenerationLoop"]
__version__ = "0.1.0"
