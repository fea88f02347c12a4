import errno
import logging
import socket
import threading
from collections import namedtuple

from docker.errors import APIError
from docker.errors import DockerException

from .const import SHELL_COMMAND
from .const import STREAM_CHUNK_SIZE
from .errors import ExecAttachError
from .errors import ExecCreateError
from .errors import ResizeError
from .utils import explain

log = logging.getLogger(__name__)


ExecHandle = namedtuple('ExecHandle', 'id container_id command tty')


def unwrap_socket(sock):
    # The unix and plain http transports hand back a SocketIO wrapper.
    return getattr(sock, '_sock', sock)


def disable_socket_timeout(sock):
    """
    Make reads on `sock` block until data arrives, whatever timeout the
    Docker client was configured with.
    """
    for s in (sock, getattr(sock, '_sock', None)):
        if not hasattr(s, 'settimeout'):
            continue
        timeout = -1
        if hasattr(s, 'gettimeout'):
            timeout = s.gettimeout()
        if timeout is None or timeout == 0.0:
            continue
        s.settimeout(None)


class AttachedStream:
    """
    The hijacked connection of an exec session.

    Reads return what the remote pseudo-terminal prints, writes are fed to
    the remote process as input. The read side and the write side may be
    used from different threads. `close()` closes both sides exactly once,
    no matter how many times it is called.
    """

    def __init__(self, raw):
        # Keep `raw` around: it holds a reference to the HTTP response and
        # TLS sockets are closed when that response is garbage collected.
        self.raw = raw
        self.sock = unwrap_socket(raw)
        self.lock = threading.Lock()
        self.write_closed = False
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()

    def fileno(self):
        return self.sock.fileno()

    def read(self, n=STREAM_CHUNK_SIZE):
        """
        Return up to `n` bytes from the remote side, or b'' at end of stream.
        """
        return self.sock.recv(n)

    def write(self, data):
        if not data:
            return None
        if self.write_closed:
            raise BrokenPipeError(errno.EPIPE, "exec stream is closed for writing")

        self.sock.sendall(data)
        return len(data)

    def close_write(self):
        with self.lock:
            if self.write_closed:
                return
            self.write_closed = True

        try:
            if hasattr(self.sock, 'shutdown_write'):
                self.sock.shutdown_write()
            else:
                self.sock.shutdown(socket.SHUT_WR)
        except OSError as e:
            log.debug("Failed to half-close exec stream: %s", e)

    def close(self):
        with self.lock:
            if self.closed:
                return
            self.closed = True

        self.close_write()
        self.sock.close()
        if self.raw is not self.sock:
            self.raw.close()

    def __repr__(self):
        return "{cls}({sock})".format(cls=type(self).__name__, sock=self.sock)


class ExecSession:
    """
    Creates exec instances in a container, attaches to them and keeps the
    remote pseudo-terminal sized.

    Every method is a single round trip to the Docker API. Nothing is retried.
    """

    def __init__(self, client):
        self.client = client

    def create(self, container_id, command=SHELL_COMMAND, tty=True):
        try:
            response = self.client.exec_create(
                container_id,
                command,
                stdin=True,
                stdout=True,
                stderr=True,
                tty=tty,
            )
        except APIError as e:
            raise ExecCreateError(
                "Failed to create an exec environment: {}".format(explain(e)))

        handle = ExecHandle(response['Id'], container_id, list(command), tty)
        log.debug("Created exec %s in container %s", handle.id, container_id)
        return handle

    def attach(self, handle):
        try:
            raw = self.client.exec_start(handle.id, tty=handle.tty, socket=True)
        except APIError as e:
            raise ExecAttachError(
                "Failed to attach to exec environment: {}".format(explain(e)))

        disable_socket_timeout(raw)
        return AttachedStream(raw)

    def resize(self, handle, width, height):
        try:
            self.client.exec_resize(handle.id, height=height, width=width)
        except (DockerException, OSError) as e:
            # The exec may already be gone when the session is closing.
            raise ResizeError("Failed to resize container TTY: {}".format(explain(e)))
        log.debug("Resized exec %s to %dx%d", handle.id, width, height)
