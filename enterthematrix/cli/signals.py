import signal


class ShutdownException(Exception):
    pass


class HangUpException(Exception):
    pass


def shutdown(signum, frame):
    raise ShutdownException()


def hang_up(signum, frame):
    raise HangUpException()


def set_signal_handlers():
    """
    Turn SIGINT, SIGTERM and SIGHUP into exceptions on the main thread, so
    that every `with` block is unwound and the terminal is restored.

    SIGINT only reaches us while the terminal is cooked, in raw mode ^C is
    forwarded to the container like any other key.
    """
    signal.signal(signal.SIGINT, shutdown)
    signal.signal(signal.SIGTERM, shutdown)
    signal.signal(signal.SIGHUP, hang_up)
