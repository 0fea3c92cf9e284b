# Copyright 2022, didyoumean, https://github.com/hisbaan/didyoumean
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from . import argx, clipboard, envdefault, pretty, speller
from .cliarg import arg
from .langs import describe_unsupported, SUPPORTED_LANGS
from .wordlist_client import Error, iter_words, WordListClient
from argparse import ArgumentParser
from typing import Callable, Protocol, Sequence

import requests.exceptions
import sys

DEFAULT_LANG = "en"
SUGGESTION_FIELDS = ["word", "distance"]


class ClientFactory(Protocol):
    def __call__(
        self,
        base_url: str,
        data_dir: str,
        show_http: bool,
        request_timeout: int | None,
        progress: bool,
    ) -> WordListClient:
        ...


class DidYouMeanCLI(argx.CommandLineTool):
    client: WordListClient

    def __init__(self, client_factory: ClientFactory = WordListClient):
        argx.CommandLineTool.__init__(self, "dym")
        self.client_factory = client_factory

    def add_args(self, parser: ArgumentParser) -> None:
        parser.add_argument(
            "--data-dir",
            help="Directory for downloaded word lists [DYM_DATA_DIR], default %(default)r",
            default=envdefault.DYM_DATA_DIR,
            metavar="DIR",
        )
        parser.add_argument(
            "--wordlist-url",
            help="Base url of the word list repository [DYM_WORDLIST_URL], default %(default)r",
            default=envdefault.DYM_WORDLIST_URL,
        )
        parser.add_argument("--show-http", help="Show HTTP requests and responses", action="store_true")
        parser.add_argument("--no-color", help="Do not color the output", action="store_true")
        parser.add_argument(
            "--request-timeout",
            type=int,
            default=None,
            help="Wait for up to N seconds for a response to a request (default: infinite)",
        )

    def pre_run(self, func: Callable[[], int | None]) -> None:
        self.client = self.client_factory(
            base_url=self.args.wordlist_url,
            data_dir=self.args.data_dir,
            show_http=self.args.show_http,
            request_timeout=self.args.request_timeout,
            progress=sys.stderr.isatty(),
        )

    def expected_errors(self) -> Sequence[type[BaseException]]:
        return [Error, clipboard.ClipboardError, requests.exceptions.ConnectionError, requests.exceptions.Timeout]

    @property
    def use_color(self) -> bool:
        return not self.args.no_color and sys.stdout.isatty()

    def get_search_term(self) -> str:
        """Return the search term from the command line, or the first line of piped input"""
        search_term = self.args.search_term
        if search_term is None:
            if sys.stdin.isatty():
                raise argx.UserError(
                    "The SEARCH_TERM argument was not provided. "
                    "Either provide it as an argument or pass it in from standard input."
                )
            search_term = sys.stdin.readline().rstrip("\r\n")
        if not search_term:
            raise argx.UserError("Search term must not be empty")
        return search_term

    def get_lang(self) -> str:
        """Return the language given on the command line, in the environment or in the config file"""
        lang = self.args.lang or envdefault.DYM_LANG or self.config.default_lang or DEFAULT_LANG
        if lang not in SUPPORTED_LANGS:
            raise argx.UserError(describe_unsupported(lang))
        return lang

    def print_header(self) -> None:
        if not self.args.clean_output:
            print(pretty.paint(pretty.HEADER, "blue", attrs=["bold"], enabled=self.use_color))

    @arg.search_term
    @arg.number_of_suggestions
    @arg.lang
    @arg.clean_output
    @arg.verbose
    @arg.yank
    @arg.all
    @arg.json
    @arg.table
    @arg.format
    def suggest(self) -> int | None:
        """Suggest words close to a misspelled search term"""
        search_term = self.get_search_term()
        lang = self.get_lang()
        word_list = self.client.fetch(lang)

        suggestions = speller.suggest(search_term, iter_words(word_list), number=self.args.number)
        if not self.args.all:
            sentinel = speller.get_sentinel(search_term)
            suggestions = [item for item in suggestions if item.distance < sentinel]

        if self.args.json or self.args.format or self.args.table:
            pretty.print_rows(
                [item._asdict() for item in suggestions],
                json=self.args.json,
                format=self.args.format,
                fields=SUGGESTION_FIELDS,
            )
            return None

        self.print_header()
        lines = list(
            pretty.yield_suggestions(
                suggestions,
                clean=self.args.clean_output,
                verbose=self.args.verbose,
                color=self.use_color,
                number=self.args.number,
            )
        )
        if not self.args.yank:
            pretty.print_lines(lines)
            return None

        index = clipboard.select_item(lines)
        if index is None:
            print(pretty.paint("No selection made", "red", enabled=self.use_color))
            return 1

        word = suggestions[index].word
        clipboard.yank(word)
        print(pretty.paint(f'"{word}" copied to clipboard', "green", enabled=self.use_color))
        return None

    @arg.json
    def lang__list(self) -> None:
        """List supported languages"""
        if self.args.json:
            pretty.print_rows(dict(sorted(SUPPORTED_LANGS.items())), json=True)
            return

        print("Supported Languages:")
        for code, name in sorted(SUPPORTED_LANGS.items()):
            print(f" - {code}: {name}")

    @arg()
    def lang__update(self) -> None:
        """Download every cached word list again"""
        updated = self.client.update_all()
        if not updated:
            self.log.info("No word lists have been downloaded yet")
            return
        self.log.info("Updated word lists: %s", ", ".join(updated))
