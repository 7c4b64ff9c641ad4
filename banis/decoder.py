# banis/decoder.py
"""
Decode BaniDB ``/v2/banis/<id>`` responses into :class:`Bani` values.

Per-field problems inside a verse (a missing or oddly shaped translation)
degrade to ``None``. A verse without its id or Gurmukhi text, or a Bani
without its id or title, fails the whole decode so that nothing partial
ever reaches the cache.
"""
import json
from typing import Any, Dict, Mapping, Optional, Union

from .models import Bani, BaniLine
from .resolver import first_provider_best, resolve_best


class BaniDecodeError(ValueError):
    """A required field was missing or malformed."""


def _require_mapping(container: Any, key: str, where: str) -> Mapping:
    value = container.get(key) if isinstance(container, Mapping) else None
    if not isinstance(value, Mapping):
        raise BaniDecodeError(f"{where}: missing object '{key}'")
    return value


def _require_int(container: Mapping, key: str, where: str) -> int:
    value = container.get(key)
    # bool is an int subclass; true/false is never a valid id
    if not isinstance(value, int) or isinstance(value, bool):
        raise BaniDecodeError(f"{where}: '{key}' must be an integer, got {value!r}")
    return value


def _lookup(container: Any, key: str) -> Any:
    if isinstance(container, Mapping):
        return container.get(key)
    return None


def _resolve_language(value: Any) -> Optional[str]:
    """Resolve the value under a language key (normally a provider mapping)."""
    if isinstance(value, Mapping):
        best = first_provider_best(value)
    else:
        best = resolve_best(value)
    return best or None


def _decode_hindi(verse: Mapping) -> Optional[str]:
    # 1) True Hindi translation
    translations = verse.get("translation")
    for key in ("hi", "hindi"):
        hindi = _resolve_language(_lookup(translations, key))
        if hindi:
            return hindi

    # 2) Flat Devanagari transliteration
    transliteration = verse.get("transliteration")
    if isinstance(transliteration, str) and transliteration:
        return transliteration

    # 3) Keyed transliterations, by language first and then any provider
    transliterations = verse.get("transliterations")
    if isinstance(transliterations, Mapping):
        for key in ("hi", "hindi"):
            hindi = resolve_best(transliterations.get(key))
            if hindi:
                return hindi
        return first_provider_best(transliterations)

    if isinstance(transliteration, Mapping):
        return first_provider_best(transliteration)
    return None


def decode_line(entry: Any, where: str = "verse") -> BaniLine:
    """Decode one element of the ``verses`` array."""
    verse = _require_mapping(entry, "verse", where)
    verse_id = _require_int(verse, "verseId", where)

    inner = _require_mapping(verse, "verse", f"{where} {verse_id}")
    text = inner.get("gurmukhi")
    if not isinstance(text, str):
        raise BaniDecodeError(f"{where} {verse_id}: missing Gurmukhi text")

    english = _resolve_language(_lookup(verse.get("translation"), "en"))

    return BaniLine(
        id=verse_id,
        line=text,
        translation=english,
        hindi_translation=_decode_hindi(verse),
    )


def decode_bani(payload: Union[bytes, str, Mapping]) -> Bani:
    """
    Decode a full Bani response body.

    Args:
        payload: Raw response bytes/text, or an already parsed JSON object.

    Raises:
        BaniDecodeError: If the body is not JSON, or any required field of
            the Bani or of any one of its verses is missing.
    """
    if isinstance(payload, (bytes, str)):
        try:
            payload = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
            raise BaniDecodeError(f"Invalid JSON body: {e}") from e

    info = _require_mapping(payload, "baniInfo", "bani")
    bani_id = _require_int(info, "baniID", "baniInfo")

    # Unicode title first, legacy-font title as fallback
    name = info.get("gurmukhiUni")
    if not isinstance(name, str):
        name = info.get("gurmukhi")
    if not isinstance(name, str):
        raise BaniDecodeError(f"bani {bani_id}: missing title")

    verses = payload.get("verses")
    if not isinstance(verses, list):
        raise BaniDecodeError(f"bani {bani_id}: missing 'verses' list")

    lines = tuple(
        decode_line(entry, where=f"bani {bani_id} verse #{index}")
        for index, entry in enumerate(verses)
    )
    return Bani(id=bani_id, name=name, lines=lines)


def encode_bani(bani: Bani) -> Dict[str, Any]:
    """Inverse of the response envelope: re-wrap id/title, flatten the lines."""
    return {
        "baniInfo": {"baniID": bani.id, "gurmukhiUni": bani.name},
        "verses": [
            {
                "id": line.id,
                "line": line.line,
                "translation": line.translation,
                "hindiTranslation": line.hindi_translation,
            }
            for line in bani.lines
        ],
    }
