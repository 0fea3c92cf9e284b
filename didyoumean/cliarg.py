# Copyright 2022, didyoumean, https://github.com/hisbaan/didyoumean
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.

from .argx import arg, UserError
from functools import wraps

MAX_SUGGESTIONS = 1000


def positive_int(value):
    try:
        number = int(value)
    except (TypeError, ValueError) as ex:
        raise UserError("Invalid number {!r}".format(value)) from ex
    if number < 1:
        raise UserError("Number of suggestions must be at least 1, got {}".format(number))
    if number > MAX_SUGGESTIONS:
        raise UserError("Number of suggestions must be at most {}, got {}".format(MAX_SUGGESTIONS, number))
    return number


def number_of_suggestions(fun):
    """-n/--number, falling back to the `number` key of the config file"""
    arg(
        "-n",
        "--number",
        default=None,
        help="Number of suggestions to show, at most 1000 (default: 5)",
    )(fun)

    @wraps(fun)
    def wrapped(self):
        value = self.args.number
        if value is None:
            value = 5 if self.config.number is None else self.config.number
        self.args.number = positive_int(value)
        return fun(self)

    return wrapped


arg.search_term = arg(
    "search_term",
    nargs="?",
    help="Word to look up; read from standard input when omitted",
)
arg.lang = arg("-l", "--lang", default=None, help="Language code of the word list to use (default: en)")
arg.clean_output = arg("-c", "--clean-output", action="store_true", help="Print results without header or numbering")
arg.verbose = arg("-v", "--verbose", action="store_true", help="Print the edit distance of each suggestion")
arg.yank = arg("-y", "--yank", action="store_true", help="Pick a suggestion and copy it to the clipboard")
arg.json = arg("--json", help="Raw json output", action="store_true", default=False)
arg.table = arg("--table", help="Print suggestions as a table", action="store_true", default=False)
arg.all = arg("--all", help="Also show empty slots that matched nothing", action="store_true", default=False)
arg.format = arg("--format", help="Format string for output, e.g. '{word} {distance}'")
arg.number_of_suggestions = number_of_suggestions
