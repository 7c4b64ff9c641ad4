# banis/resolver.py
"""
Pick a single usable string out of the loosely shaped values BaniDB puts
under a translation or transliteration key.

A provider value shows up in three shapes:

    "plain text"
    {"text": "..."} / {"translation": "..."} / {"value": "..."}
    ["", {"text": "..."}, ...]

Anything else is treated as "no value" rather than an error.
"""
from typing import Any, Mapping, Optional

# Tried in this order on object-shaped values
KNOWN_TEXT_FIELDS = ("text", "translation", "value")


def resolve_best(value: Any) -> Optional[str]:
    """Return the best string held by a JSON value, or None if there is none."""
    if isinstance(value, str):
        return value

    if isinstance(value, Mapping):
        for field in KNOWN_TEXT_FIELDS:
            candidate = value.get(field)
            if isinstance(candidate, str):
                return candidate
        return None

    if isinstance(value, list):
        for entry in value:
            best = resolve_best(entry)
            if best:
                return best
        return None

    return None


def first_provider_best(providers: Any) -> Optional[str]:
    """First non-empty string among the values of a provider-keyed mapping."""
    if not isinstance(providers, Mapping):
        return None
    # Insertion order of the response; at most one provider is expected to be non-empty
    for value in providers.values():
        best = resolve_best(value)
        if best:
            return best
    return None
