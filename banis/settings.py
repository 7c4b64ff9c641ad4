# banis/settings.py
import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import BaseModel, ValidationError

from .utils import get_app_path

logger = logging.getLogger(__name__)

PREF_FILENAME = "Banis-Settings.json"


class Preferences(BaseModel):
    show_translation: bool = True        # English under each line
    show_hindi_translation: bool = False  # Hindi, or Devanagari transliteration when the API has none
    has_preloaded_banis: bool = False     # bulk download already ran on this install


class PreferencesStore:
    """Loads and saves user preferences as JSON in the per-user config dir."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = Path(path) if path else get_app_path("config", PREF_FILENAME)
        self.preferences = self.load()

    def load(self) -> Preferences:
        """Load preferences from file, falling back to defaults."""
        if not self.path.exists():
            return Preferences()
        try:
            return Preferences.model_validate_json(self.path.read_bytes())
        except ValidationError as e:
            logger.warning("Preferences file '%s' is corrupted, resetting: %s", self.path, e)
        except OSError as e:
            logger.error("Error loading preferences from '%s': %s", self.path, e)
        return Preferences()

    def save(self) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self.preferences.model_dump(), f, ensure_ascii=False, indent=4)
        except OSError as e:
            logger.error("Error saving preferences to '%s': %s", self.path, e)
            return False
        return True

    def update(self, **changes) -> Preferences:
        """Apply changes and persist them straight away."""
        unknown = set(changes) - set(Preferences.model_fields)
        if unknown:
            raise KeyError(f"Unknown preference(s): {', '.join(sorted(unknown))}")
        self.preferences = Preferences.model_validate({**self.preferences.model_dump(), **changes})
        self.save()
        return self.preferences
