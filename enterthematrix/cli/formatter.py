import logging
import shutil

import texttable

from . import colors


def get_tty_width():
    # Pretend the terminal is huge when piped so rows stay on one line
    width, _ = shutil.get_terminal_size(fallback=(999, 0))
    return int(width)


class Formatter:
    """Format tabular data for printing."""

    @staticmethod
    def table(headers, rows):
        table = texttable.Texttable(max_width=get_tty_width())
        table.set_cols_dtype(['t' for h in headers])
        table.add_rows([headers] + rows)
        table.set_deco(table.HEADER)
        table.set_chars(['-', '|', '+', '-'])

        return table.draw()


class ConsoleWarningFormatter(logging.Formatter):
    """A logging.Formatter which prints WARNING and ERROR messages with
    a prefix of the log level colored appropriate for the log level.

    Line breaks are written as CRLF so messages printed while the terminal
    is in raw mode still start at the first column.
    """

    def get_level_message(self, record):
        separator = ': '
        if record.levelno == logging.WARNING:
            return colors.yellow(record.levelname) + separator
        if record.levelno == logging.ERROR:
            return colors.red(record.levelname) + separator

        return ''

    def format(self, record):
        if isinstance(record.msg, bytes):
            record.msg = record.msg.decode('utf-8')
        message = super().format(record).replace('\r\n', '\n').replace('\n', '\r\n')
        return '{}{}'.format(self.get_level_message(record), message)
