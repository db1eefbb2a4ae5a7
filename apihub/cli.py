import argparse
import signal
import sys

from .config import (EXIT_CONFIG, EXIT_LOG, EXIT_OK, EXIT_RUN, SHUTDOWN_TIMEOUT,
                     ApiHubError, ConfigError, Options, WatchError)
from .generator import PageGenerator
from .loop import RegenerationLoop
from .server import make_server
from .utils import close_log, init_log, logger
from .watcher import DirectoryWatcher


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='apihub', description='Serve a directory of API docs with a live index page')
    parser.add_argument('--port', type=int, default=80, help='HTTP port')
    parser.add_argument('--domain', default='apihub.idcos.net', help='domain used in document URLs')
    parser.add_argument('--dir', required=True, help='document root to serve (must contain index.tpl and api/)')
    parser.add_argument('--log', default='doc-server.log', help='log file path')
    parser.add_argument('--verbose', action='store_true', help='log debug output')
    return parser


def _raise_interrupt(signum, frame):
    raise KeyboardInterrupt


def run(opts: Options) -> int:
    generator = PageGenerator(opts)
    try:
        generator.generate()
    except ApiHubError as e:
        logger.error('%s', e)
        print(e, file=sys.stderr)
        return EXIT_RUN
    except Exception as e:
        logger.exception('Initial generation failed')
        print(f'initial generation failed: {e}', file=sys.stderr)
        return EXIT_RUN

    loop = RegenerationLoop(generator)
    watcher = DirectoryWatcher(opts.api_dir, loop.notify)
    try:
        watcher.start()
    except WatchError as e:
        logger.error('%s; live updates disabled, serving the last generated page', e)

    loop.start()

    httpd = None
    try:
        try:
            httpd = make_server(opts.dir, opts.port)
        except OSError as e:
            logger.error('%s', e)
            print(e, file=sys.stderr)
            return EXIT_RUN
        logger.info('Start doc service(port=%d, dir=%s, log=%s)', opts.port, opts.dir, opts.log_file)
        try:
            httpd.serve_forever()
        except KeyboardInterrupt:
            logger.info('Interrupted, shutting down')
    finally:
        if httpd is not None:
            httpd.server_close()
        if not watcher.stop(SHUTDOWN_TIMEOUT):
            logger.warning('watcher did not stop within %.1fs', SHUTDOWN_TIMEOUT)
        if not loop.stop(SHUTDOWN_TIMEOUT):
            logger.warning('regeneration loop did not stop within %.1fs', SHUTDOWN_TIMEOUT)
    return EXIT_OK


def main(argv=None) -> int:
    try:
        args = build_parser().parse_args(argv)
    except SystemExit as e:
        # usage errors are configuration errors; --help exits cleanly
        return EXIT_CONFIG if e.code else EXIT_OK
    opts = Options(port=args.port, domain=args.domain, dir=args.dir, log_file=args.log, verbose=args.verbose)

    try:
        opts.validate()
    except ConfigError as e:
        print(e, file=sys.stderr)
        return EXIT_CONFIG

    try:
        init_log(opts.log_file, opts.verbose)
    except OSError as e:
        print(e, file=sys.stderr)
        return EXIT_LOG

    previous = signal.signal(signal.SIGTERM, _raise_interrupt)
    try:
        return run(opts)
    finally:
        signal.signal(signal.SIGTERM, previous)
        close_log()


if __name__ == '__main__':
    sys.exit(main())
