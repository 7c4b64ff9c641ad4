# banis/banidb_client.py
import json
import logging
from typing import Dict, Optional

import requests

from . import __version__

logger = logging.getLogger(__name__)


class BaniDBError(Exception):
    """Base exception for BaniDB API errors"""


class BaniDBClient:
    BASE_URL = "https://api.banidb.com/v2/"
    TIMEOUT = 10
    # Unicode Gurmukhi, English + Hindi translations, Devanagari transliteration as Hindi fallback
    QUERY = "script=unicode&translation=en,hi&transliteration=hi"

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        self.base_url = (base_url or self.BASE_URL).rstrip("/") + "/"
        self.timeout = timeout or self.TIMEOUT
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": f"BanisCLI/{__version__}"})

    def make_url(self, bani_id: int) -> str:
        if bani_id <= 0:
            raise BaniDBError(f"Invalid Bani ID: {bani_id}")
        return f"{self.base_url}banis/{bani_id}?{self.QUERY}"

    def _handle_response(self, response: requests.Response) -> Dict:
        """Handle API response and return JSON data"""
        try:
            response.raise_for_status()
            return response.json()
        except requests.exceptions.RequestException as e:
            raise BaniDBError(f"Request failed: {e}")
        except (json.JSONDecodeError, ValueError, RecursionError) as e:
            raise BaniDBError(f"Invalid JSON response: {e}")

    def fetch_bani_json(self, bani_id: int) -> Dict:
        """Fire one GET for a Bani and return the parsed body. No retries."""
        url = self.make_url(bani_id)
        logger.debug("Fetching from URL: %s", url)
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise BaniDBError(f"Network error for bani {bani_id}: {e}")
        return self._handle_response(response)

    def close(self):
        self.session.close()
