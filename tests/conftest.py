"""Shared fixtures: BaniDB-shaped payloads, test doubles and isolated app directories."""

from concurrent.futures import Executor, Future
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pytest

from banis.bani_cache import BaniCache
from banis.banidb_client import BaniDBError
from banis.models import Bani, BaniLine
from banis.settings import PreferencesStore


def make_verse(
    verse_id: int = 1,
    gurmukhi: str = "ੴ ਸਤਿ ਨਾਮੁ",
    translation: Optional[dict] = None,
    **extra: Any,
) -> dict:
    """One element of the ``verses`` array as BaniDB returns it."""
    verse: dict = {"verseId": verse_id, "verse": {"gurmukhi": gurmukhi, "unicode": gurmukhi}}
    if translation is not None:
        verse["translation"] = translation
    verse.update(extra)
    return {"header": 0, "mangalPosition": None, "verse": verse}


def make_payload(bani_id: int = 2, verses: Optional[list] = None, **info: Any) -> dict:
    bani_info = {"baniID": bani_id, "gurmukhi": "jpujI swihb", "gurmukhiUni": "ਜਪੁਜੀ ਸਾਹਿਬ"}
    bani_info.update(info)
    if verses is None:
        verses = [
            make_verse(
                1,
                "ੴ ਸਤਿ ਨਾਮੁ ਕਰਤਾ ਪੁਰਖੁ",
                translation={
                    "en": {"bdb": "One Universal Creator God.", "ms": "", "ssk": None},
                    "hi": {"ss": "ईश्वर एक है"},
                },
            ),
            make_verse(
                2,
                "॥ ਜਪੁ ॥",
                translation={"en": {"bdb": "Chant And Meditate:"}},
                transliteration="॥ जपु ॥",
            ),
            make_verse(3, "ਆਦਿ ਸਚੁ ਜੁਗਾਦਿ ਸਚੁ ॥"),
        ]
    return {"baniInfo": bani_info, "verses": verses}


def hindi_payload(bani_id: int) -> dict:
    return make_payload(bani_id, verses=[make_verse(1, "ੴ", translation={"hi": {"ss": "ईश्वर"}})])


def plain_bani(bani_id: int = 2) -> Bani:
    return Bani(id=bani_id, name="ਜਪੁਜੀ ਸਾਹਿਬ", lines=(BaniLine(id=1, line="ੴ", translation="One"),))


class FakeClient:
    """Serves canned payloads by BaniDB id; an Exception value is raised instead."""

    def __init__(self, responses: Dict[int, Union[dict, Exception]]):
        self.responses = responses
        self.requested: List[int] = []
        self.closed = False

    def fetch_bani_json(self, bani_id: int) -> dict:
        self.requested.append(bani_id)
        response = self.responses.get(bani_id, BaniDBError(f"HTTP 404 for {bani_id}"))
        if isinstance(response, Exception):
            raise response
        return response

    def close(self) -> None:
        self.closed = True


class ManualExecutor(Executor):
    """Holds submitted jobs until a test runs them, in whatever order it likes."""

    def __init__(self) -> None:
        self.jobs: list = []

    def submit(self, fn, *args, **kwargs):  # type: ignore[override]
        future: Future = Future()
        self.jobs.append((future, fn, args, kwargs))
        return future

    def run(self, index: int) -> None:
        future, fn, args, kwargs = self.jobs[index]
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as e:
            future.set_exception(e)

    def run_all(self) -> None:
        for index in range(len(self.jobs)):
            if not self.jobs[index][0].done():
                self.run(index)


class ImmediateExecutor(ManualExecutor):
    """Runs every job as soon as it is submitted."""

    def submit(self, fn, *args, **kwargs):  # type: ignore[override]
        future = super().submit(fn, *args, **kwargs)
        self.run(len(self.jobs) - 1)
        return future


@pytest.fixture
def payload() -> dict:
    return make_payload()


@pytest.fixture
def cache(tmp_path: Path) -> BaniCache:
    return BaniCache(tmp_path / "cachedBanis.json")


@pytest.fixture
def preferences(tmp_path: Path) -> PreferencesStore:
    return PreferencesStore(tmp_path / "prefs.json")


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep cache and config files out of the real user directories."""
    home = tmp_path / "banis-home"
    monkeypatch.setenv("BANIS_HOME", str(home))
    return home
