# banis/bani_cache.py
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError

from .models import Bani, BaniLine, BaniType
from .utils import get_app_path

logger = logging.getLogger(__name__)

CACHE_FILE_NAME = "cachedBanis.json"


# --- On-disk records: only what the reader needs, no response metadata ---

class CachedLine(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    line: str
    translation: Optional[str] = None
    hindi_translation: Optional[str] = Field(default=None, alias="hindiTranslation")

    @classmethod
    def from_line(cls, line: BaniLine) -> "CachedLine":
        return cls(
            id=line.id,
            line=line.line,
            translation=line.translation,
            hindi_translation=line.hindi_translation,
        )

    def to_line(self) -> BaniLine:
        return BaniLine(
            id=self.id,
            line=self.line,
            translation=self.translation,
            hindi_translation=self.hindi_translation,
        )


class CachedBani(BaseModel):
    id: int
    name: str
    lines: List[CachedLine] = Field(default_factory=list)

    @classmethod
    def from_bani(cls, bani: Bani) -> "CachedBani":
        return cls(id=bani.id, name=bani.name, lines=[CachedLine.from_line(line) for line in bani.lines])

    def to_bani(self) -> Bani:
        return Bani(id=self.id, name=self.name, lines=tuple(line.to_line() for line in self.lines))


class CacheFile(RootModel[Dict[BaniType, CachedBani]]):
    """Whole cache file: BaniType value -> cached Bani."""


def encode_cache(banis: Dict[BaniType, Bani]) -> str:
    """Serialize a type-keyed mapping of Banis to the cache file format."""
    record = CacheFile({bani_type: CachedBani.from_bani(bani) for bani_type, bani in banis.items()})
    data = record.model_dump(mode="json", by_alias=True, exclude_none=True)
    return json.dumps(data, ensure_ascii=False, indent=2)


def decode_cache(text: Union[str, bytes]) -> Dict[BaniType, Bani]:
    """
    Parse the cache file format back into Banis.

    Raises:
        ValueError: On invalid JSON, an unknown Bani key or a malformed entry.
    """
    record = CacheFile.model_validate_json(text)
    return {bani_type: cached.to_bani() for bani_type, cached in record.root.items()}


class BaniCache:
    """Type-keyed store of decoded Banis, backed by a single JSON file."""

    def __init__(self, cache_file: Optional[Union[str, Path]] = None):
        self.cache_file = Path(cache_file) if cache_file else get_app_path("cache", CACHE_FILE_NAME)
        logger.debug("Bani cache path: %s", self.cache_file)
        self.banis: Dict[BaniType, Bani] = {}
        self.load()

    def load(self) -> Dict[BaniType, Bani]:
        """Re-read the cache file. A missing or unreadable file means an empty cache."""
        self.banis = {}
        if not self.cache_file.exists():
            logger.debug("No banis file found at %s", self.cache_file)
            return self.banis
        try:
            self.banis = decode_cache(self.cache_file.read_bytes())
            logger.debug("Loaded %d banis from disk", len(self.banis))
        except (OSError, ValidationError, ValueError) as e:
            logger.warning("Could not load cache file %s, starting empty: %s", self.cache_file, e)
            self.banis = {}
        return self.banis

    def save(self) -> bool:
        """Rewrite the whole cache file from memory. Returns False if the write failed."""
        try:
            self.cache_file.parent.mkdir(parents=True, exist_ok=True)
            payload = encode_cache(self.banis)
            # Write next to the target and swap in, so a failed write never truncates the cache
            fd, tmp_name = tempfile.mkstemp(dir=self.cache_file.parent, prefix=".cachedBanis-", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(payload)
                os.replace(tmp_name, self.cache_file)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except (OSError, ValueError) as e:
            logger.error("Error saving banis to disk at %s: %s", self.cache_file, e)
            return False
        logger.debug("Banis saved to disk at %s", self.cache_file)
        return True

    def get(self, bani_type: BaniType) -> Optional[Bani]:
        """Cached Bani for a type, or None. Always reads the file first."""
        return self.load().get(bani_type)

    def put(self, bani_type: BaniType, bani: Bani) -> bool:
        """Insert or overwrite one Bani and persist the full mapping immediately."""
        if bani_type.is_bundled_pdf:
            raise ValueError(f"{bani_type.value} is a bundled PDF and is never cached")
        self.load()
        self.banis[bani_type] = bani
        return self.save()

    def clear(self):
        """Delete the cache file. Not an error if there is nothing to delete."""
        self.banis = {}
        try:
            self.cache_file.unlink()
            logger.info("Banis cache cleared.")
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.error("Failed to clear cache %s: %s", self.cache_file, e)

    def cached_types(self) -> List[BaniType]:
        return list(self.load())
