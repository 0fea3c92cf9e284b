# Copyright 2022, didyoumean, https://github.com/hisbaan/didyoumean
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from typing import Callable, Sequence

import pyperclip

PROMPT = "[number to select, enter/q to cancel]: "


class ClipboardError(Exception):
    """Clipboard is not available"""


def yank(text: str) -> None:
    """Copy `text` to the system clipboard"""
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as ex:
        raise ClipboardError(str(ex)) from ex


def select_item(items: Sequence[str], read: Callable[[str], str] = input) -> int | None:
    """Show numbered `items` and return the index picked, or None when nothing was picked"""
    if not items:
        return None

    for item in items:
        print(item)

    while True:
        try:
            answer = read(PROMPT).strip()
        except EOFError:
            return None
        if answer in {"", "q", "Q"}:
            return None
        if answer.isdigit() and 1 <= int(answer) <= len(items):
            return int(answer) - 1
        print("Please enter a number between 1 and {}".format(len(items)))
