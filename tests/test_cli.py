# Copyright 2022, didyoumean, https://github.com/hisbaan/didyoumean
#
# This file is under the Apache License, Version 2.0.
# See the file `LICENSE` for details.
from __future__ import annotations

from _pytest.logging import LogCaptureFixture
from didyoumean import envdefault
from didyoumean.cli import DidYouMeanCLI
from didyoumean.wordlist_client import WordListClient
from pathlib import Path
from pytest import CaptureFixture
from typing import Any, Sequence
from unittest import mock

import io
import json
import logging
import pytest
import requests

WORDS = ["test", "tests", "rest", "zebra"]


@pytest.fixture(name="data_dir")
def fixture_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setattr(envdefault, "DYM_LANG", None)
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    (data_dir / "en").write_text("\n".join(WORDS) + "\n", encoding="utf-8")
    return data_dir


def run(data_dir: Path, *args: str, config: dict[str, Any] | None = None) -> int | None:
    config_path = data_dir.parent / "didyoumean.json"
    if config is not None:
        config_path.write_text(json.dumps(config))
    return DidYouMeanCLI().run(["--config", str(config_path), "--data-dir", str(data_dir), *args])


class TTY(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_cli() -> None:
    with pytest.raises(SystemExit) as excinfo:
        DidYouMeanCLI().run(args=["--help"])
    assert excinfo.value.code == 0


def test_suggest(data_dir: Path, capsys: CaptureFixture[str]) -> None:
    assert run(data_dir, "suggest", "-n", "3", "tset") is None
    assert capsys.readouterr().out == "Did you mean?\n1. test\n2. tests\n3. rest\n"


def test_suggest_pads_numbers_to_requested_count(data_dir: Path, capsys: CaptureFixture[str]) -> None:
    (data_dir / "en").write_text("ab\nabc\nxyz\n", encoding="utf-8")
    assert run(data_dir, "suggest", "-n", "10", "ab") is None
    assert capsys.readouterr().out.splitlines()[1] == " 1. ab"


def test_suggest_survives_invalid_utf8(data_dir: Path, capsys: CaptureFixture[str]) -> None:
    (data_dir / "en").write_bytes(b"test\nb\xffad\nrest\n")
    assert run(data_dir, "suggest", "-n", "3", "tset") is None
    assert capsys.readouterr().out == "Did you mean?\n1. test\n2. rest\n3. b\ufffdad\n"


def test_suggest_clean_verbose(data_dir: Path, capsys: CaptureFixture[str]) -> None:
    assert run(data_dir, "suggest", "-n", "2", "-c", "-v", "tset") is None
    assert capsys.readouterr().out == "test (edit distance: 1)\ntests (edit distance: 2)\n"


def test_suggest_json(data_dir: Path, capsys: CaptureFixture[str]) -> None:
    assert run(data_dir, "suggest", "-n", "2", "--json", "tset") is None
    assert json.loads(capsys.readouterr().out) == [
        {"word": "test", "distance": 1},
        {"word": "tests", "distance": 2},
    ]


def test_suggest_format(data_dir: Path, capsys: CaptureFixture[str]) -> None:
    assert run(data_dir, "suggest", "-n", "2", "--format", "{word}:{distance}", "tset") is None
    assert capsys.readouterr().out == "test:1\ntests:2\n"


def test_suggest_table(data_dir: Path, capsys: CaptureFixture[str]) -> None:
    assert run(data_dir, "suggest", "-n", "1", "--table", "tset") is None
    assert capsys.readouterr().out == "WORD  DISTANCE\n====  ========\ntest  1\n"


def test_suggest_hides_empty_slots(data_dir: Path, capsys: CaptureFixture[str]) -> None:
    (data_dir / "en").write_text("abc\n")
    assert run(data_dir, "suggest", "-n", "3", "abd") is None
    assert capsys.readouterr().out == "Did you mean?\n1. abc\n"

    assert run(data_dir, "suggest", "-n", "3", "--all", "--json", "abd") is None
    assert json.loads(capsys.readouterr().out) == [
        {"word": "abc", "distance": 1},
        {"word": "", "distance": 30},
        {"word": "", "distance": 30},
    ]


def test_suggest_from_stdin(data_dir: Path, capsys: CaptureFixture[str], monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("tset\nignored\n"))
    assert run(data_dir, "suggest", "-n", "1", "-c") is None
    assert capsys.readouterr().out == "test\n"


def test_suggest_requires_search_term(
    data_dir: Path, caplog: LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr("sys.stdin", TTY())
    assert run(data_dir, "suggest") == 1
    assert "The SEARCH_TERM argument was not provided" in caplog.text


def test_suggest_rejects_empty_search_term(
    data_dir: Path, caplog: LogCaptureFixture, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("\n"))
    assert run(data_dir, "suggest") == 1
    assert "Search term must not be empty" in caplog.text


@pytest.mark.parametrize(
    "lang,message",
    [
        ("ja", "There is currently no word list for Japanese"),
        ("qq", "qq is not a recognized locale code"),
    ],
)
def test_suggest_unsupported_lang(data_dir: Path, caplog: LogCaptureFixture, lang: str, message: str) -> None:
    assert run(data_dir, "suggest", "-l", lang, "tset") == 1
    assert message in caplog.text


@pytest.mark.parametrize("number", ["0", "-2", "many", "1001"])
def test_suggest_invalid_number(data_dir: Path, caplog: LogCaptureFixture, number: str) -> None:
    assert run(data_dir, "suggest", "-n", number, "tset") == 1
    assert "command failed: UserError" in caplog.text


def test_suggest_uses_config_defaults(data_dir: Path, capsys: CaptureFixture[str]) -> None:
    (data_dir / "de").write_text("haus\nmaus\n", encoding="utf-8")
    assert run(data_dir, "suggest", "-c", "hasu", config={"default_lang": "de", "number": 1}) is None
    assert capsys.readouterr().out == "haus\n"


def test_suggest_lang_from_environment(
    data_dir: Path, capsys: CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    (data_dir / "fr").write_text("maison\n", encoding="utf-8")
    monkeypatch.setattr(envdefault, "DYM_LANG", "fr")
    assert run(data_dir, "suggest", "-c", "-n", "1", "masion") is None
    assert capsys.readouterr().out == "maison\n"


def test_suggest_downloads_missing_list(data_dir: Path, capsys: CaptureFixture[str]) -> None:
    def fake_fetch(self: WordListClient, lang: str, force: bool = False) -> str:
        path = Path(self.get_path(lang))
        path.write_text("hola\nadios\n", encoding="utf-8")
        return str(path)

    with mock.patch.object(WordListClient, "fetch", autospec=True, side_effect=fake_fetch) as fetch_mock:
        assert run(data_dir, "suggest", "-l", "es", "-c", "-n", "1", "hloa") is None
    assert fetch_mock.call_count == 1
    assert fetch_mock.call_args.args[1] == "es"
    assert capsys.readouterr().out == "hola\n"


def test_suggest_download_failure(data_dir: Path, caplog: LogCaptureFixture) -> None:
    with mock.patch.object(WordListClient, "fetch", side_effect=requests.exceptions.ConnectionError("down")):
        assert run(data_dir, "suggest", "-l", "es", "hloa") == 1
    assert "command failed: ConnectionError: down" in caplog.text


def test_suggest_yank(data_dir: Path, capsys: CaptureFixture[str]) -> None:
    with mock.patch("didyoumean.clipboard.select_item", return_value=1) as select_mock, mock.patch(
        "pyperclip.copy"
    ) as copy_mock:
        assert run(data_dir, "suggest", "-n", "3", "-y", "tset") is None

    lines: Sequence[str] = select_mock.call_args.args[0]
    assert lines == ["1. test", "2. tests", "3. rest"]
    copy_mock.assert_called_once_with("tests")
    assert capsys.readouterr().out == 'Did you mean?\n"tests" copied to clipboard\n'


def test_suggest_yank_without_selection(data_dir: Path, capsys: CaptureFixture[str]) -> None:
    with mock.patch("didyoumean.clipboard.select_item", return_value=None), mock.patch("pyperclip.copy") as copy_mock:
        assert run(data_dir, "suggest", "-y", "tset") == 1
    copy_mock.assert_not_called()
    assert capsys.readouterr().out.endswith("No selection made\n")


def test_lang_list(data_dir: Path, capsys: CaptureFixture[str]) -> None:
    assert run(data_dir, "lang", "list") is None
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "Supported Languages:"
    assert " - en: English" in lines
    assert lines[1:] == sorted(lines[1:])


def test_lang_list_json(data_dir: Path, capsys: CaptureFixture[str]) -> None:
    assert run(data_dir, "lang", "list", "--json") is None
    langs = json.loads(capsys.readouterr().out)
    assert langs["de"] == "German"


def test_lang_update(data_dir: Path, caplog: LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    with mock.patch.object(WordListClient, "fetch", return_value="unused") as fetch_mock:
        assert run(data_dir, "lang", "update") is None
    fetch_mock.assert_called_once_with("en", force=True)
    assert "Updated word lists: en" in caplog.text


def test_lang_update_nothing_cached(tmp_path: Path, caplog: LogCaptureFixture) -> None:
    caplog.set_level(logging.INFO)
    assert run(tmp_path / "empty", "lang", "update") is None
    assert "No word lists have been downloaded yet" in caplog.text
