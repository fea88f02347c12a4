# enterthematrix: pty/tty.py, adapted from dockerpty
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

import logging
import os
import termios
import tty
from collections import namedtuple

from ..errors import TerminalModeError
from ..errors import TerminalQueryError

log = logging.getLogger(__name__)


TerminalSize = namedtuple('TerminalSize', 'width height')


def size(fd):
    """
    Return the TerminalSize of the TTY `fd`.

    Raises TerminalQueryError if the size cannot be determined.
    """
    try:
        columns, lines = os.get_terminal_size(fd.fileno())
    except (OSError, ValueError) as e:
        raise TerminalQueryError("Failed to get terminal size: {}".format(e))

    return TerminalSize(columns, lines)


class Terminal:
    """
    Terminal temporarily makes the tty raw.

    Example:

        with Terminal(sys.stdin):
            do_things_in_raw_mode()

    The original attributes are restored at most once, when the `with` block
    is left for whatever reason.
    """

    def __init__(self, fd):
        """
        Initialize a terminal for the tty with stdin attached to `fd`.

        Initializing the Terminal has no immediate side effects.
        """
        self.fd = fd
        self.original_attributes = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *_):
        self.stop()

    def israw(self):
        return self.original_attributes is not None

    def start(self):
        """
        Saves the current terminal attributes and makes the tty raw.

        Raises TerminalModeError if the tty cannot be made raw, in which case
        the terminal is left as it was.
        """
        try:
            self.original_attributes = termios.tcgetattr(self.fd)
            tty.setraw(self.fd)
        except (termios.error, OSError, ValueError) as e:
            self.stop()
            raise TerminalModeError("Failed to make terminal raw: {}".format(e))

    def stop(self):
        """
        Restores the terminal attributes back to before setting raw mode.

        If the raw terminal was not started, or was already restored, does
        nothing. The saved attributes are only forgotten once the restore
        has been attempted, so an interrupted call can be repeated.
        """
        if self.original_attributes is None:
            return

        try:
            termios.tcsetattr(self.fd, termios.TCSADRAIN, self.original_attributes)
        except (termios.error, OSError, ValueError) as e:
            log.warning("Failed to restore terminal: %s", e)
        self.original_attributes = None

    def __repr__(self):
        return "{cls}({fd}, raw={raw})".format(
            cls=type(self).__name__,
            fd=self.fd,
            raw=self.israw())
