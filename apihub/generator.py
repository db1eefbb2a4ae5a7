"""PageGenerator: render index.html from index.tpl and the scanned documents.

The template is handled as raw bytes so everything outside the marker is
written back unchanged whatever its encoding.
"""

import html
import os
import tempfile
from typing import List, Optional
from urllib.parse import quote

from .config import MARKER, GenerateError, Options
from .scanner import DocScanner
from .utils import logger

SELECT_OPEN = '<select id="input_baseUrl" name="baseUrl">'
SELECT_CLOSE = '</select>'


class PageGenerator:
    """Regenerates the landing page for one document root.

    Not reentrant: callers must serialize generate() calls.
    """

    def __init__(self, opts: Options, scanner: Optional[DocScanner] = None):
        self.opts = opts
        self.scanner = scanner or DocScanner()

    def _rel(self, path: str) -> str:
        return os.path.relpath(path, self.opts.api_dir).replace(os.path.sep, '/')

    def public_url(self, path: str) -> str:
        # quote the on-disk bytes; names need not be valid UTF-8
        return f'{self.opts.base_url}/{quote(os.fsencode(self._rel(path)), safe=b"/")}'

    def display_url(self, path: str) -> str:
        return f'{self.opts.base_url}/{self._rel(path)}'

    def render_select(self, paths: List[str]) -> bytes:
        parts = [SELECT_OPEN]
        for p in paths:
            value = html.escape(self.public_url(p))
            label = html.escape(self.display_url(p))
            parts.append(f'<option value="{value}">{label}</option>')
        parts.append(SELECT_CLOSE)
        return ''.join(parts).encode('utf-8', 'surrogateescape')

    def _load_template(self) -> bytes:
        try:
            with open(self.opts.template_path, 'rb') as f:
                return f.read()
        except OSError as e:
            raise GenerateError(f'cannot read template {self.opts.template_path}: {e}') from e

    def _write(self, content: bytes):
        out = self.opts.output_path
        fd, tmp = tempfile.mkstemp(prefix='.index.', suffix='.tmp', dir=os.path.dirname(out) or '.')
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(content)
            os.chmod(tmp, 0o644)
            os.replace(tmp, out)
        except OSError as e:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise GenerateError(f'cannot write {out}: {e}') from e

    def generate(self) -> List[str]:
        tpl = self._load_template()
        paths = self.scanner.scan(self.opts.api_dir)
        logger.info('Find docs: %s', paths)
        self._write(tpl.replace(MARKER.encode('ascii'), self.render_select(paths)))
        return paths
