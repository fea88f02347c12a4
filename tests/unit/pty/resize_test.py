import os
import queue
import signal
import subprocess
import sys
import threading

import pytest

from ... import mock
from ... import unittest
from enterthematrix.errors import ResizeError
from enterthematrix.errors import TerminalQueryError
from enterthematrix.pty.resize import ResizeWatcher
from enterthematrix.pty.tty import TerminalSize


PROJECT_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

# Runs in a child process so a hang cannot take the test run down with it.
# The first hand-off raises a second SIGWINCH, whose handler runs before the
# first hand-off has finished.
NESTED_WINCH_SCRIPT = """
import os
import queue
import signal
import threading

from enterthematrix.pty.resize import ResizeWatcher


class NestingQueue:
    def __init__(self):
        self.queue = queue.SimpleQueue()
        self.nested = False

    def put(self, item):
        if not self.nested:
            self.nested = True
            os.kill(os.getpid(), signal.SIGWINCH)
        self.queue.put(item)

    def get(self):
        return self.queue.get()

    def get_nowait(self):
        return self.queue.get_nowait()


resized = threading.Event()
watcher = ResizeWatcher(lambda width, height: resized.set(),
                        size=lambda: (80, 24),
                        settle_delay=60)
watcher.pending = NestingQueue()
with watcher:
    os.kill(os.getpid(), signal.SIGWINCH)
    assert watcher.pending.nested
    assert resized.wait(5)
print("resized")
"""


class ResizeWatcherTest(unittest.TestCase):

    def setUp(self):
        self.calls = queue.Queue()
        self.sizes = queue.Queue()
        self.previous_handler = signal.getsignal(signal.SIGWINCH)

    def tearDown(self):
        signal.signal(signal.SIGWINCH, self.previous_handler)

    def resize(self, width, height):
        self.calls.put((width, height))

    def size(self):
        return self.sizes.get(timeout=5)

    def next_call(self):
        return self.calls.get(timeout=5)

    def make_watcher(self, **kwargs):
        kwargs.setdefault('resize', self.resize)
        kwargs.setdefault('size', self.size)
        kwargs.setdefault('settle_delay', 0)
        return ResizeWatcher(**kwargs)

    def test_initial_resize_and_one_per_change(self):
        watcher = self.make_watcher()
        self.sizes.put(TerminalSize(100, 30))
        with watcher:
            assert self.next_call() == (100, 30)

            self.sizes.put(TerminalSize(80, 24))
            watcher.notify()
            assert self.next_call() == (80, 24)

            self.sizes.put(TerminalSize(120, 40))
            watcher.notify()
            assert self.next_call() == (120, 40)

        watcher.worker.join(5)
        assert not watcher.worker.is_alive()
        assert self.calls.empty()

    def test_window_change_signal(self):
        watcher = self.make_watcher()
        self.sizes.put(TerminalSize(100, 30))
        with watcher:
            assert self.next_call() == (100, 30)

            self.sizes.put(TerminalSize(90, 20))
            os.kill(os.getpid(), signal.SIGWINCH)
            assert self.next_call() == (90, 20)

    def test_initial_resize_waits_for_settle_delay(self):
        timer = mock.Mock()
        with mock.patch('enterthematrix.pty.resize.threading.Timer', return_value=timer) as Timer:
            watcher = self.make_watcher(settle_delay=0.1)
            with watcher:
                Timer.assert_called_once_with(0.1, watcher.notify)
                timer.start.assert_called_once_with()
                assert self.calls.empty()

        timer.cancel.assert_called_once_with()

    def test_size_failure_skips_cycle(self):
        attempted = threading.Event()

        def size():
            if not attempted.is_set():
                attempted.set()
                raise TerminalQueryError("Failed to get terminal size: not a tty")
            return self.size()

        with mock.patch('enterthematrix.pty.resize.log') as fake_log:
            watcher = self.make_watcher(size=size)
            with watcher:
                assert attempted.wait(5)

                self.sizes.put(TerminalSize(80, 24))
                watcher.notify()
                assert self.next_call() == (80, 24)

        fake_log.error.assert_called_once_with("Failed to get terminal size: not a tty")

    def test_resize_error_keeps_watching(self):
        results = iter([ResizeError("Failed to resize container TTY: gone"), None])

        def resize(width, height):
            self.calls.put((width, height))
            result = next(results)
            if result is not None:
                raise result

        with mock.patch('enterthematrix.pty.resize.log') as fake_log:
            watcher = self.make_watcher(resize=resize)
            self.sizes.put(TerminalSize(100, 30))
            with watcher:
                assert self.next_call() == (100, 30)

                self.sizes.put(TerminalSize(80, 24))
                watcher.notify()
                assert self.next_call() == (80, 24)

        fake_log.error.assert_called_once_with("Failed to resize container TTY: gone")

    def test_notify_after_stop(self):
        size = mock.Mock()
        watcher = self.make_watcher(size=size, settle_delay=60)
        watcher.start()
        watcher.stop()
        watcher.notify()

        watcher.worker.join(5)
        assert not watcher.worker.is_alive()
        assert not size.called

    def test_stop_restores_previous_handler(self):
        def previous(signum, frame):
            pass

        signal.signal(signal.SIGWINCH, previous)
        watcher = self.make_watcher(settle_delay=60)
        with watcher:
            assert signal.getsignal(signal.SIGWINCH) is not previous

        assert signal.getsignal(signal.SIGWINCH) is previous

    def test_window_change_during_window_change(self):
        result = subprocess.run(
            [sys.executable, '-c', NESTED_WINCH_SCRIPT],
            cwd=PROJECT_DIR,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            timeout=10,
        )
        assert result.returncode == 0, result.stderr.decode('utf-8', 'replace')
        assert result.stdout.strip() == b'resized'

    def test_burst_of_notifications_is_coalesced(self):
        watcher = self.make_watcher(settle_delay=60)
        self.sizes.put(TerminalSize(80, 24))
        for _ in range(5):
            watcher.notify()

        watcher.start()
        try:
            assert self.next_call() == (80, 24)
            with pytest.raises(queue.Empty):
                self.calls.get(timeout=0.2)
        finally:
            watcher.stop()
