# Copyright 2022, didyoumean, https://github.com/hisbaan/didyoumean
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
"""Turn methods tagged with @arg into dym subcommands and run them"""
from __future__ import annotations

from didyoumean import envdefault
from os import PathLike
from typing import Any, Callable, Iterator, NoReturn, Sequence, TYPE_CHECKING, TypeVar

import argparse
import errno
import json
import logging
import sys

# Optional shell completions
try:
    import argcomplete  # type: ignore

    ARGCOMPLETE_INSTALLED = True
except ImportError:
    ARGCOMPLETE_INSTALLED = False

try:
    from .version import __version__
except ImportError:
    __version__ = "UNKNOWN"

ARG_LIST_PROP = "_arg_list"
LOG_FORMAT = "%(levelname)s\t%(message)s"


class UserError(Exception):
    """User error"""


class HelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Append the default of options that have a meaningful one, e.g. a url or a timeout"""

    def _get_help_string(self, action: argparse.Action) -> str:
        help_text = action.help or ""
        default = action.default
        if not action.option_strings or "%(default)" in help_text:
            return help_text
        if (isinstance(default, int) and not isinstance(default, bool)) or (isinstance(default, str) and default):
            help_text += " (default: %(default)s)"
        return help_text


F = TypeVar("F", bound=Callable)


class Arg:
    """Declares an argument of a dym command.

    Accepts the arguments of `argparse.ArgumentParser.add_argument`. Every
    method carrying at least one `@arg` becomes a subcommand, and the parsed
    values are available as `self.args`::

        class DidYouMeanCLI(CommandLineTool):

            @arg("search_term")
            def suggest(self):
                print(self.args.search_term)
    """

    def __call__(self, *args: Any, **kwargs: Any) -> Callable[[F], F]:
        def wrap(func: F) -> F:
            arg_list = getattr(func, ARG_LIST_PROP, None)
            if arg_list is None:
                arg_list = []
                setattr(func, ARG_LIST_PROP, arg_list)

            # decorators run bottom-up, prepend to keep declaration order
            if args or kwargs:
                arg_list.insert(0, (args, kwargs))

            return func

        return wrap

    if TYPE_CHECKING:

        def __getattr__(self, name: str) -> Callable:
            ...

        def __setattr__(self, name: str, value: Callable) -> None:
            ...


arg = Arg()


def name_to_cmd_parts(name: str) -> list[str]:
    """`lang__list` is `dym lang list`, single underscores become dashes"""
    return [part.replace("_", "-") for part in name.split("__")]


class Config(dict):
    """Settings read from the JSON config file; a missing file means no settings"""

    def __init__(self, file_path: PathLike | str):
        dict.__init__(self)
        self.file_path = file_path
        try:
            with open(file_path, encoding="utf-8") as fp:
                self.update(json.load(fp))
        except OSError as ex:
            if ex.errno != errno.ENOENT:
                raise UserError(
                    "Failed to load configuration file {!r}: {}: {}".format(file_path, ex.__class__.__name__, ex)
                ) from ex
        except ValueError as ex:
            raise UserError("Invalid JSON in configuration file {!r}".format(file_path)) from ex

    @property
    def default_lang(self) -> str | None:
        return self.get("default_lang")

    @property
    def number(self) -> Any:
        return self.get("number")


class CommandLineTool:
    config: Config

    def __init__(self, name: str):
        self.log = logging.getLogger(name)
        self.parser = argparse.ArgumentParser(prog=name, formatter_class=HelpFormatter)
        self.parser.add_argument(
            "--config",
            help="config file location [DYM_CLIENT_CONFIG], default %(default)r",
            default=envdefault.DYM_CLIENT_CONFIG,
        )
        self.parser.add_argument("--version", action="version", version="didyoumean {}".format(__version__))
        self.subparsers = self.parser.add_subparsers(title="commands", dest="command", help="", metavar="")
        self._groups: dict[str, argparse._SubParsersAction] = {}
        self.args = argparse.Namespace()

    def add_args(self, parser: argparse.ArgumentParser) -> None:
        pass  # override in sub-class

    def commands(self) -> Iterator[Callable]:
        for prop in sorted(dir(self)):
            # properties read self.args, which only exists once parsing is done
            if isinstance(getattr(type(self), prop, None), property):
                continue
            func = getattr(self, prop, None)
            if callable(func) and getattr(func, ARG_LIST_PROP, None) is not None:
                yield func

    def add_cmd(self, func: Callable) -> None:
        assert func.__doc__, f"Missing docstring for {func.__qualname__}"

        *groups, cmd = name_to_cmd_parts(func.__name__)
        subparsers = self.subparsers
        # only one level of grouping is used: `dym lang list`
        for group in groups:
            if group not in self._groups:
                group_parser = subparsers.add_parser(group, help=group.title() + " commands", formatter_class=HelpFormatter)
                self._groups[group] = group_parser.add_subparsers(title="commands", metavar="")
            subparsers = self._groups[group]

        parser = subparsers.add_parser(cmd, help=func.__doc__, description=func.__doc__, formatter_class=HelpFormatter)
        parser.set_defaults(func=func)
        for args, kwargs in getattr(func, ARG_LIST_PROP):
            parser.add_argument(*args, **kwargs)

    def parse_args(self, args: Sequence[str]) -> None:
        self.add_args(self.parser)
        for func in self.commands():
            self.add_cmd(func)

        if ARGCOMPLETE_INSTALLED:
            argcomplete.autocomplete(self.parser)

        self.args = self.parser.parse_args(args=args)

    def pre_run(self, func: Callable) -> None:
        """Override in sub-class"""

    def expected_errors(self) -> Sequence[type[BaseException]]:
        return []

    def run(self, args: Sequence[str] | None = None) -> int | None:
        args = args or sys.argv[1:]
        if not args:
            args = ["--help"]

        self.parse_args(args)
        try:
            self.config = Config(self.args.config)
            return self.run_actual(args)
        except (UserError, *self.expected_errors()) as ex:
            self.log.error("command failed: {0.__class__.__name__}: {0}".format(ex))
            return 1
        except OSError as ex:
            if ex.errno != errno.EPIPE:
                raise
            self.log.error("*** output truncated ***")
            return 13  # SIGPIPE
        except KeyboardInterrupt:
            self.log.error("*** terminated by keyboard ***")
            return 2  # SIGINT

    def run_actual(self, args_for_help: Sequence[str]) -> int | None:
        func = getattr(self.args, "func", None)
        if not func:
            # `dym lang` without a subcommand
            self.parser.parse_args(list(args_for_help) + ["--help"])
            return 1

        self.pre_run(func)
        return func()

    def main(self, args: Sequence[str] | None = None) -> NoReturn:
        logging.basicConfig(level=logging.INFO, format=LOG_FORMAT)
        logging.getLogger("requests").setLevel(logging.WARNING)
        logging.getLogger("urllib3").setLevel(logging.WARNING)
        sys.exit(self.run(args))
