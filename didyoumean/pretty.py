# Copyright 2022, didyoumean, https://github.com/hisbaan/didyoumean
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Pretty-print suggestions as numbered lists or tables"""
from __future__ import annotations

from .argx import UserError
from .speller import Suggestion
from termcolor import colored
from typing import Any, Collection, Iterable, Iterator, Mapping, Sequence, TextIO

import json as jsonlib
import sys

HEADER = "Did you mean?"
ResultType = Collection[Mapping[str, Any]]


def paint(text: str, color: str | None = None, attrs: Sequence[str] | None = None, enabled: bool = True) -> str:
    if not enabled:
        return text
    return colored(text, color, attrs=list(attrs) if attrs else None)


def format_item(value: Any) -> str:
    if isinstance(value, str):
        # json encode strings, but only if that changes more than adding quotes
        json_v = jsonlib.dumps(value, ensure_ascii=False)
        return value if json_v == '"{}"'.format(value) else json_v
    return "{}".format(value)


def yield_suggestions(
    suggestions: Sequence[Suggestion],
    clean: bool = False,
    verbose: bool = False,
    color: bool = True,
    number: int | None = None,
) -> Iterator[str]:
    """Yield one line per suggestion, numbered unless `clean` is set.

    Numbers are right aligned to the width of `number`, the count of
    suggestions asked for, even when fewer words matched.
    """
    indent = len(str(number if number is not None else len(suggestions)))
    for index, (word, distance) in enumerate(suggestions, start=1):
        line = word
        if not clean:
            position = paint(str(index).rjust(indent), "magenta", enabled=color)
            line = "{}{} {}".format(position, paint(".", "magenta", enabled=color), word)
        if verbose:
            line += f" (edit distance: {distance})"
        yield line


def yield_table(result: ResultType, fields: Sequence[str] | None = None, header: bool = True) -> Iterator[str]:
    """
    format a list of dicts in a table yielding string rows

    :param list result: List of dicts to be printed.
    :param list fields: Columns to print, defaults to the sorted keys of all rows.
    :param bool header: True to print the field names
    """
    formatted_values: list[dict[str, str]] = []
    widths: dict[str, int] = {}
    for item in result:
        formatted_row = {key: format_item(value) for key, value in item.items()}
        formatted_values.append(formatted_row)
        for key, value in formatted_row.items():
            widths[key] = max(len(key), len(value), widths.get(key, 1))

    if fields is None:
        fields = sorted(widths)
    for field in fields:
        widths.setdefault(field, len(field))

    if header:
        yield "  ".join(f.upper().ljust(widths[f]) for f in fields).rstrip()
        yield "  ".join("=" * widths[f] for f in fields)
    for formatted_row in formatted_values:
        yield "  ".join(formatted_row.get(f, "").ljust(widths[f]) for f in fields).rstrip()


def print_lines(lines: Iterable[str], file: TextIO | None = None) -> None:
    for line in lines:
        print(line, file=file or sys.stdout)


def print_table(
    result: ResultType | None,
    fields: Sequence[str] | None = None,
    header: bool = True,
    file: TextIO | None = None,
) -> None:
    """print a list of dicts in a table"""
    if not result:
        return
    print_lines(yield_table(result, fields=fields, header=header), file=file)


def print_rows(
    rows: ResultType | Mapping[str, Any],
    json: bool = False,
    format: str | None = None,
    fields: Sequence[str] | None = None,
    header: bool = True,
    file: TextIO | None = None,
) -> None:
    """Print rows as `format` lines, a JSON document, or a table

    `format` wins over `json`. A mapping is only meaningful with `json`, it is dumped as is.
    """
    file = file or sys.stdout
    if format is not None:
        for row in rows:
            try:
                print(format.format(**row), file=file)
            except (KeyError, IndexError) as ex:
                raise UserError("Invalid --format {!r}: unknown field {}".format(format, ex)) from ex
    elif json:
        print(jsonlib.dumps(rows, indent=4, sort_keys=True, ensure_ascii=False), file=file)
    else:
        print_table(rows, fields=fields, header=header, file=file)  # type: ignore[arg-type]
