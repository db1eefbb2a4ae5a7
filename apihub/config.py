"""Command line options and the apihub error hierarchy."""

import os
from dataclasses import dataclass

from .utils import dir_exists

MAX_PORT = 65535

API_SUBDIR = 'api'
TEMPLATE_NAME = 'index.tpl'
OUTPUT_NAME = 'index.html'
MARKER = '${baseURLs}'

# bound on every shutdown handshake, in seconds
SHUTDOWN_TIMEOUT = 5.0

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_LOG = 2
EXIT_RUN = 3


class ApiHubError(Exception):
    """Base class for apihub errors."""


class ConfigError(ApiHubError):
    pass


class ScanError(ApiHubError):
    pass


class GenerateError(ApiHubError):
    pass


class WatchError(ApiHubError):
    pass


@dataclass(frozen=True)
class Options:
    port: int = 80
    domain: str = 'apihub.idcos.net'
    dir: str = ''
    log_file: str = 'doc-server.log'
    verbose: bool = False

    @property
    def api_dir(self) -> str:
        return os.path.join(self.dir, API_SUBDIR)

    @property
    def template_path(self) -> str:
        return os.path.join(self.dir, TEMPLATE_NAME)

    @property
    def output_path(self) -> str:
        return os.path.join(self.dir, OUTPUT_NAME)

    @property
    def base_url(self) -> str:
        return f'http://{self.domain}:{self.port}/{API_SUBDIR}'

    def validate(self):
        if self.port < 0 or self.port > MAX_PORT:
            raise ConfigError(f'invalid port: {self.port}')
        if not dir_exists(self.dir):
            raise ConfigError(f'invalid directory: {self.dir!r}')
