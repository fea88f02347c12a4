"""Open a shell in a running server container.

Lists the running containers named like `<name>_<8 hex digits>`, lets you
pick one and starts an interactive /bin/bash inside it.

Usage:
  enterthematrix [options]

Options:
  -h, --help    Show this help.
  --version     Print version and exit.

Environment:
  DOCKER_HOST, DOCKER_TLS_VERIFY, DOCKER_CERT_PATH
                                Where and how to reach the Docker engine.
  DOCKER_API_VERSION            Docker API version to speak.
  ENTERTHEMATRIX_HTTP_TIMEOUT   Timeout in seconds for Docker API requests.
  ENTERTHEMATRIX_VERBOSE        Show more output.
  ENTERTHEMATRIX_LOG_LEVEL      DEBUG, INFO, WARNING, ERROR or CRITICAL.
"""
import functools
import logging
import os
import sys

from docopt import docopt

from . import errors
from . import signals
from ..container import ContainerCatalog
from ..environment import Environment
from ..errors import OperationFailedError
from ..pty import ResizeWatcher
from ..pty import StreamProxy
from ..pty import Terminal
from ..pty import tty
from ..session import ExecSession
from .docker_client import get_client
from .errors import UserError
from .formatter import ConsoleWarningFormatter
from .selector import select_container
from .utils import get_version_info


log = logging.getLogger(__name__)
console_handler = logging.StreamHandler(sys.stderr)


def main():
    signals.set_signal_handlers()
    try:
        command = dispatch()
        command()
    except (KeyboardInterrupt, signals.ShutdownException, signals.HangUpException):
        log.error("Aborting.")
        sys.exit(1)
    except (UserError, OperationFailedError) as e:
        log.error(e.msg)
        sys.exit(1)
    except errors.ConnectionError:
        sys.exit(1)


def dispatch():
    setup_logging()
    docopt(__doc__, sys.argv[1:], version=get_version_info('full'))

    environment = Environment.from_env_file(os.getcwd())
    verbose = environment.get_boolean('ENTERTHEMATRIX_VERBOSE')
    setup_console_handler(console_handler,
                          verbose,
                          environment.get('ENTERTHEMATRIX_LOG_LEVEL') or None)
    return functools.partial(enter_the_matrix, environment, verbose)


def enter_the_matrix(environment, verbose=False):
    client = get_client(environment, verbose=verbose)
    with errors.handle_connection_errors(client):
        catalog = ContainerCatalog(client)
        container = select_container(catalog.filter(catalog.list()))
        if not open_shell(client, container):
            sys.exit(1)


def open_shell(client, container, stdin=None, stdout=None):
    """
    Run /bin/bash in `container` on the local terminal until it exits.

    The terminal is only made raw once the exec session is attached, so any
    error before that is printed on a cooked terminal. Everything acquired
    here is released in reverse order on every way out.
    """
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    session = ExecSession(client)
    handle = session.create(container.id)
    stdout.flush()

    with session.attach(handle) as stream:
        with Terminal(stdin):
            watcher = ResizeWatcher(
                functools.partial(session.resize, handle),
                size=functools.partial(tty.size, stdin),
            )
            with watcher:
                return StreamProxy(stdin, stdout, stream).run()


def setup_logging():
    root_logger = logging.getLogger()
    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.DEBUG)

    # Disable requests logging
    logging.getLogger("requests").propagate = False
    logging.getLogger("urllib3").propagate = False


def setup_console_handler(handler, verbose, level=None):
    if handler.stream.isatty():
        format_class = ConsoleWarningFormatter
        # the terminal may be raw while we log
        handler.terminator = '\r\n'
    else:
        format_class = logging.Formatter

    if verbose:
        handler.setFormatter(format_class('%(name)s.%(funcName)s: %(message)s'))
        loglevel = logging.DEBUG
    else:
        handler.setFormatter(format_class())
        loglevel = logging.INFO

    if level is not None:
        levels = {
            'DEBUG': logging.DEBUG,
            'INFO': logging.INFO,
            'WARNING': logging.WARNING,
            'ERROR': logging.ERROR,
            'CRITICAL': logging.CRITICAL,
        }
        loglevel = levels.get(level.upper())
        if loglevel is None:
            raise UserError(
                'Invalid value for ENTERTHEMATRIX_LOG_LEVEL. '
                'Expected one of DEBUG, INFO, WARNING, ERROR, CRITICAL.'
            )

    handler.setLevel(loglevel)
