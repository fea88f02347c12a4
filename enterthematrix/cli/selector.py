import logging

from ..errors import SelectionInputError
from .errors import UserError
from .formatter import Formatter
from .utils import input

log = logging.getLogger(__name__)


def parse_choice(answer, count):
    """
    Return the index picked by `answer` out of `count` choices.

    Raises SelectionInputError when `answer` is not a number or is out of
    range.
    """
    try:
        choice = int(answer.strip())
    except ValueError as e:
        raise SelectionInputError("Hmm, that doesn't look like a number: {}".format(e))

    if choice < 0 or choice >= count:
        raise SelectionInputError(
            "Please enter a number between 0 and {} inclusive.".format(count - 1))

    return choice


def build_menu(candidates):
    rows = [
        ['[{}]'.format(n), c.name, c.short_id, c.status]
        for n, c in enumerate(candidates)
    ]
    return Formatter.table(['', 'NAME', 'CONTAINER ID', 'STATUS'], rows)


def select_container(candidates):
    if len(candidates) == 1:
        container = candidates[0]
        log.info("Automatically selected %s, as it's the only running server.", container.name)
        return container

    print("There are {} running servers:".format(len(candidates)))
    print(build_menu(candidates))
    print()

    while True:
        try:
            answer = input("Choice: ")
        except EOFError:
            raise UserError("No server selected.")

        try:
            return candidates[parse_choice(answer, len(candidates))]
        except SelectionInputError as e:
            log.warning(e.msg)
