import functools
import logging
import queue
import signal
import sys
import threading

from . import tty
from ..const import RESIZE_SETTLE_DELAY
from ..errors import ResizeError
from ..errors import TerminalQueryError
from ..utils import start_background_thread

log = logging.getLogger(__name__)


NOTIFICATION = object()
STOP = object()


class ResizeWatcher:
    """
    Keeps a remote pseudo-terminal sized the same as the local tty.

    While started, SIGWINCH notifications are handed to a worker thread
    which reads the current size of the local tty and passes it to
    `resize(width, height)`. The signal handler only puts a marker on a
    `queue.SimpleQueue`, whose `put` never blocks and may be re-entered from
    a nested handler. The worker drains every pending marker before reading
    the size, so a burst of signals results in a single resize.

    One notification is synthesized `settle_delay` seconds after `start()`
    so the remote side gets the local size before output begins.
    """

    def __init__(self, resize, size=None, settle_delay=RESIZE_SETTLE_DELAY):
        self.resize = resize
        self.size = size or functools.partial(tty.size, sys.stdin)
        self.settle_delay = settle_delay
        self.pending = queue.SimpleQueue()
        self.closed = threading.Event()
        self.original_handler = None
        self.worker = None
        self.timer = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *_):
        self.stop()

    def start(self):
        """
        Start trapping WINCH signals and resizing the remote PTY.

        Must be called from the main thread.
        """
        def handle(signum, frame):
            if signum == signal.SIGWINCH:
                self.notify()

        self.original_handler = signal.signal(signal.SIGWINCH, handle)
        self.worker = start_background_thread(target=self.watch)

        self.timer = threading.Timer(self.settle_delay, self.notify)
        self.timer.daemon = True
        self.timer.start()

    def stop(self):
        """
        Stop trapping WINCH signals and restore the previous WINCH handler.

        Does not wait for a resize that is already in flight.
        """
        self.closed.set()
        if self.timer is not None:
            self.timer.cancel()

        if self.original_handler is not None:
            signal.signal(signal.SIGWINCH, self.original_handler)
            self.original_handler = None

        self.pending.put(STOP)

    def notify(self):
        if self.closed.is_set():
            return
        self.pending.put(NOTIFICATION)

    def watch(self):
        while True:
            items = self.drain()
            if STOP in items or self.closed.is_set():
                break
            self.resize_once()

    def drain(self):
        """Wait for a notification, then take every other one already queued."""
        items = [self.pending.get()]
        while True:
            try:
                items.append(self.pending.get_nowait())
            except queue.Empty:
                return items

    def resize_once(self):
        try:
            width, height = self.size()
        except TerminalQueryError as e:
            log.error(e.msg)
            return

        try:
            self.resize(width, height)
        except ResizeError as e:
            log.error(e.msg)
