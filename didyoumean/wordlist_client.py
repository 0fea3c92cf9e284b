# Copyright 2022, didyoumean, https://github.com/hisbaan/didyoumean
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from .langs import LOCALES, SUPPORTED_LANGS
from requests import adapters, models, PreparedRequest, Response, Session
from tqdm import tqdm
from typing import Any, Final, Iterator, NamedTuple
from urllib.parse import quote

import datetime
import logging
import os
import requests
import time

try:
    from .version import __version__
except ImportError:
    __version__ = "UNKNOWN"

CHUNK_SIZE = 64 * 1024


class RetrySpec(NamedTuple):
    attempts: int = 3
    sleep: datetime.timedelta = datetime.timedelta(milliseconds=200)


class TimeoutAdapter(adapters.HTTPAdapter):
    """Apply --request-timeout to every request that does not set its own"""

    def __init__(self, timeout: int | None = None, **kwargs: Any) -> None:
        self.timeout = timeout
        super().__init__(**kwargs)

    def send(self, request: PreparedRequest, **kwargs: Any) -> models.Response:
        kwargs["timeout"] = kwargs.get("timeout") or self.timeout
        return super().send(request, **kwargs)


class WordListClient:
    """Download word lists and keep them cached in a data directory"""

    DEFAULT_RETRY: Final = RetrySpec()

    def __init__(
        self,
        base_url: str,
        data_dir: str,
        show_http: bool = False,
        request_timeout: int | None = None,
        progress: bool = True,
        default_retry_spec: RetrySpec = DEFAULT_RETRY,
    ) -> None:
        self.log = logging.getLogger("WordListClient")
        self.base_url = base_url.rstrip("/")
        self.data_dir = data_dir
        self.log.debug("using %r, caching in %r", self.base_url, self.data_dir)
        self.session = self.new_session(request_timeout)
        self.http_log = logging.getLogger("dym_http")
        self.init_http_logging(show_http)
        self.progress = progress
        self.retry_spec: Final = default_retry_spec

    @staticmethod
    def new_session(timeout: int | None) -> Session:
        session = Session()
        adapter = TimeoutAdapter(timeout=timeout)
        for prefix in ("http://", "https://"):
            session.mount(prefix, adapter)
        session.headers.update({"accept": "text/plain", "user-agent": f"didyoumean/{__version__}"})
        return session

    def init_http_logging(self, show_http: bool) -> None:
        if not self.http_log.handlers:
            http_handler = logging.StreamHandler()
            http_handler.setFormatter(logging.Formatter("%(message)s"))
            self.http_log.addHandler(http_handler)
        self.http_log.propagate = False
        self.http_log.setLevel(logging.DEBUG if show_http else logging.INFO)

    def get_path(self, lang: str) -> str:
        return os.path.join(self.data_dir, lang)

    def is_cached(self, lang: str) -> bool:
        return os.path.isfile(self.get_path(lang))

    def ensure_data_dir(self) -> None:
        if not os.path.isdir(self.data_dir):
            os.makedirs(self.data_dir)

    def _execute(self, url: str) -> Response:
        self.http_log.debug("-----Request Begin-----")
        self.http_log.debug("GET %s", url)
        for header, header_value in self.session.headers.items():
            self.http_log.debug("%s: %s", header, header_value)
        self.http_log.debug("-----Request End-----")

        response = self.session.get(url, stream=True)

        self.http_log.debug("-----Response Begin-----")
        self.http_log.debug("%s %s", response.status_code, response.reason)
        for header, header_value in response.headers.items():
            self.http_log.debug("%s: %s", header, header_value)
        self.http_log.debug("-----Response End-----")

        if not str(response.status_code).startswith("2"):
            # reads the body for the message, so the connection can be released
            error = Error(response, status=response.status_code)
            response.close()
            raise error

        return response

    def get(self, lang: str) -> Response:
        """HTTP GET of the word list for `lang`, retrying connection errors"""
        attempts = self.retry_spec.attempts
        url = self.base_url + "/" + quote(lang, safe="")

        while True:
            attempts -= 1
            try:
                return self._execute(url)
            except requests.exceptions.ConnectionError as ex:
                if attempts <= 0:
                    raise
                self.log.warning(
                    "GET %s failed: %s: %s; retrying in %s seconds, %s attempts left",
                    url,
                    ex.__class__.__name__,
                    ex,
                    self.retry_spec.sleep.total_seconds(),
                    attempts,
                )
                time.sleep(self.retry_spec.sleep.total_seconds())

    def fetch(self, lang: str, force: bool = False) -> str:
        """Make sure the word list for `lang` is cached and return its path"""
        file_path = self.get_path(lang)
        if not force and self.is_cached(lang):
            return file_path

        self.ensure_data_dir()
        self.log.info("Downloading %s word list...", LOCALES.get(lang, lang))
        response = self.get(lang)
        content_length = response.headers.get("content-length")
        total_size = int(content_length) if content_length and content_length.isdigit() else None

        # Download next to the target so a failed transfer never leaves a truncated list behind
        part_path = file_path + ".part"
        try:
            with open(part_path, "wb") as fp, tqdm(
                total=total_size,
                unit="B",
                unit_scale=True,
                unit_divisor=1024,
                disable=not self.progress,
            ) as progress_bar:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    fp.write(chunk)
                    progress_bar.update(len(chunk))
            os.replace(part_path, file_path)
        except BaseException:
            if os.path.exists(part_path):
                os.remove(part_path)
            raise
        finally:
            response.close()

        return file_path

    def cached_langs(self) -> list[str]:
        if not os.path.isdir(self.data_dir):
            return []
        return sorted(name for name in os.listdir(self.data_dir) if name in SUPPORTED_LANGS and self.is_cached(name))

    def update_all(self) -> list[str]:
        """Download every cached supported word list again"""
        self.ensure_data_dir()
        updated = []
        for lang in self.cached_langs():
            self.fetch(lang, force=True)
            updated.append(lang)
        return updated


def iter_words(file_path: str) -> Iterator[str]:
    """Yield each line of a word list without its line terminator.

    Blank lines are yielded as empty words. Bytes that are not valid UTF-8
    become U+FFFD, so a damaged entry is still scored like any other word.
    """
    with open(file_path, encoding="utf-8", errors="replace") as fp:
        for line in fp:
            yield line[:-1] if line.endswith("\n") else line


class Error(Exception):
    """Request error"""

    def __init__(self, response: Response, status: int = 520) -> None:
        Exception.__init__(self, response.text, status)
        self.response = response
        self.status = status

    def __str__(self) -> str:
        response_text, status = self.args
        return f"status {status}: {response_text.strip()}"
