# enterthematrix: pty/io.py, adapted from dockerpty
#
# Copyright 2014 Chris Corbyn <chris@w3style.co.uk>
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import errno
import logging
import os

from ..const import STREAM_CHUNK_SIZE
from ..utils import start_background_thread

log = logging.getLogger(__name__)


class Stream:
    """
    Generic Stream class.

    This is a file-like abstraction on top of os.read() and os.write(), which
    add consistency to the reading of sockets and files alike. Streams are
    used in blocking mode, each from a single thread.
    """

    """
    Recoverable IO/OS Errors.
    """
    ERRNO_RECOVERABLE = [
        errno.EINTR,
        errno.EDEADLK,
        errno.EWOULDBLOCK,
    ]

    def __init__(self, fd):
        """
        Initialize the Stream for the file descriptor `fd`.

        The `fd` object must have a `fileno()` method.
        """
        self.fd = fd

    def fileno(self):
        return self.fd.fileno()

    def read(self, n=STREAM_CHUNK_SIZE):
        """
        Return up to `n` bytes of data from the Stream, or b'' at end of stream.
        """
        while True:
            try:
                if hasattr(self.fd, 'recv'):
                    return self.fd.recv(n)
                return os.read(self.fd.fileno(), n)
            except OSError as e:
                if e.errno not in Stream.ERRNO_RECOVERABLE:
                    raise

    def write(self, data):
        """
        Write all of `data` to the Stream.

        Returns the number of bytes written, or None if there was nothing to
        write.
        """
        if not data:
            return None

        view = memoryview(data)
        while view:
            try:
                if hasattr(self.fd, 'send'):
                    written = self.fd.send(view)
                else:
                    written = os.write(self.fd.fileno(), view)
                view = view[written:]
            except OSError as e:
                if e.errno not in Stream.ERRNO_RECOVERABLE:
                    raise
        return len(data)

    def __repr__(self):
        return "{cls}({fd})".format(cls=type(self).__name__, fd=self.fd)


class Pump:
    """
    Stream pump class.

    A Pump wraps two Streams, reading from one and writing its data into
    the other, much like a pipe but manually managed.
    """

    def __init__(self, from_stream, to_stream):
        self.from_stream = from_stream
        self.to_stream = to_stream

    def flush(self, n=STREAM_CHUNK_SIZE):
        """
        Flush up to `n` bytes of data from the reader Stream to the writer
        Stream.

        Returns the number of bytes that were flushed. If EOF has been reached
        on the reader, or the writer has gone away, `None` is returned.
        """
        try:
            return self.to_stream.write(self.from_stream.read(n))
        except OSError as e:
            if e.errno != errno.EPIPE:
                raise
            return None

    def run(self):
        """Flush until EOF."""
        while self.flush() is not None:
            pass

    def __repr__(self):
        return "{cls}(from={from_stream}, to={to_stream})".format(
            cls=type(self).__name__,
            from_stream=self.from_stream,
            to_stream=self.to_stream)


class StreamProxy:
    """
    Copies bytes between the local terminal and an attached exec stream.

    Local input is forwarded on a background thread. Remote output is
    forwarded on the thread calling `run()`, which returns as soon as the
    remote side reaches end of stream. The input thread is not waited for.

    When local input ends first, the write side of the remote stream is
    closed so the remote process sees end of input, and the proxy keeps
    forwarding output until the remote side closes.
    """

    def __init__(self, local_in, local_out, remote):
        self.remote = remote
        self.input_pump = Pump(Stream(local_in), remote)
        self.output_pump = Pump(remote, Stream(local_out))
        self.input_thread = None

    def run(self):
        """
        Returns True when the remote side closed the stream, False when the
        connection broke.
        """
        self.input_thread = start_background_thread(target=self.forward_input)
        try:
            self.output_pump.run()
        except OSError as e:
            log.error("Lost connection to the exec session: %s", e)
            return False

        log.debug("Remote end of stream reached")
        return True

    def forward_input(self):
        try:
            self.input_pump.run()
        except OSError as e:
            log.debug("Stopped forwarding input: %s", e)
            return

        log.debug("End of local input, closing remote input")
        self.remote.close_write()
