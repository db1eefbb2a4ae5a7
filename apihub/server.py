"""Static file serving for the document root."""

from functools import partial
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer

from .utils import logger


class DocRequestHandler(SimpleHTTPRequestHandler):
    def log_message(self, format, *args):
        logger.info('%s - %s', self.address_string(), format % args)


def make_server(root: str, port: int, host: str = '') -> ThreadingHTTPServer:
    """Bind a threaded HTTP server serving files below root.

    Raises OSError if the address cannot be bound.
    """
    handler = partial(DocRequestHandler, directory=root)
    httpd = ThreadingHTTPServer((host, port), handler)
    return httpd
