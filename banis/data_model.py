# banis/data_model.py
"""
Cache-or-network coordinator for Bani requests.

Downloads run on a small thread pool. Their completions are posted to a
queue and only applied (cache write, published ``current_bani``) by the
thread that owns this object, when it calls :meth:`process_completions`
or iterates :meth:`iter_completions`. Completions are applied in arrival
order, so the last one to finish wins.
"""
import json
import logging
import queue
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from typing import Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from .bani_cache import BaniCache
from .banidb_client import BaniDBClient, BaniDBError
from .decoder import BaniDecodeError, decode_bani
from .models import Bani, BaniType
from .settings import PreferencesStore

logger = logging.getLogger(__name__)


class FetchOutcome(BaseModel):
    """Result of one applied download."""

    model_config = ConfigDict(frozen=True)

    bani_type: BaniType
    bani: Optional[Bani] = None
    error: Optional[str] = None
    persisted: bool = False
    interactive: bool = False  # requested by the reader, as opposed to bulk preload

    @property
    def ok(self) -> bool:
        return self.bani is not None


class BaniDataModel:
    MAX_WORKERS = 5

    def __init__(self, cache: BaniCache, client: BaniDBClient, preferences: PreferencesStore,
                 executor: Optional[Executor] = None):
        self.cache = cache
        self.client = client
        self.preferences = preferences
        self._executor = executor or ThreadPoolExecutor(max_workers=self.MAX_WORKERS)
        self._owns_executor = executor is None
        self._completions: "queue.Queue[Tuple[BaniType, bool, Future]]" = queue.Queue()
        self._pending = 0
        self._pending_interactive = 0

        self.current_bani: Optional[Bani] = None
        self.is_loading = False

    @property
    def pending(self) -> int:
        """Downloads submitted but not yet applied."""
        return self._pending

    def _wants_hindi(self) -> bool:
        return self.preferences.preferences.show_hindi_translation

    def _download(self, bani_type: BaniType) -> Bani:
        """Worker side: network + decode only, no shared state touched."""
        data = self.client.fetch_bani_json(bani_type.numeric_id)
        try:
            return decode_bani(data)
        except BaniDecodeError:
            logger.debug("Raw JSON response for %s: %s", bani_type.value, json.dumps(data, ensure_ascii=False))
            raise

    def _submit(self, bani_type: BaniType, interactive: bool) -> Future:
        future = self._executor.submit(self._download, bani_type)
        self._pending += 1
        if interactive:
            self._pending_interactive += 1
        future.add_done_callback(lambda f: self._completions.put((bani_type, interactive, f)))
        return future

    def fetch_bani(self, bani_type: BaniType) -> Optional[Future]:
        """
        Show a Bani, from the cache when possible.

        Returns the download future when a network fetch was started, or None
        when the request was served from the cache or cannot be fetched.
        """
        if bani_type.is_bundled_pdf:
            logger.info("%s is a bundled PDF, skipping fetch.", bani_type.value)
            return None

        cached = self.cache.get(bani_type)
        if cached is not None:
            # Presence-only check: a Bani the API has no Hindi for is refetched every time
            if self._wants_hindi() and not cached.has_any_hindi:
                logger.info("Cached %s missing Hindi; refetching from API...", bani_type.value)
                self.current_bani = cached  # keep serving it if the refetch fails
            else:
                self.is_loading = bool(self._pending_interactive)
                self.current_bani = cached
                return None

        if not bani_type.is_fetchable:
            logger.error("Invalid Bani ID for %s", bani_type.value)
            return None

        self.is_loading = True
        return self._submit(bani_type, interactive=True)

    def preload_all_banis(self, force: bool = False) -> int:
        """Queue a download of every fetchable Bani, once per install. Returns the number queued."""
        if self.preferences.preferences.has_preloaded_banis and not force:
            logger.info("Banis already preloaded.")
            return 0

        logger.info("Preloading all Banis...")
        bani_types = BaniType.fetchable()
        for bani_type in bani_types:
            self._submit(bani_type, interactive=False)

        self.preferences.update(has_preloaded_banis=True)
        return len(bani_types)

    def _apply(self, bani_type: BaniType, interactive: bool, future: Future) -> FetchOutcome:
        self._pending -= 1
        if interactive:
            self._pending_interactive -= 1
            if not self._pending_interactive:
                self.is_loading = False

        try:
            bani = future.result()
        except BaniDBError as e:
            logger.error("Network error for %s: %s", bani_type.value, e)
            return FetchOutcome(bani_type=bani_type, error=str(e), interactive=interactive)
        except BaniDecodeError as e:
            logger.error("Error decoding %s: %s", bani_type.value, e)
            return FetchOutcome(bani_type=bani_type, error=str(e), interactive=interactive)
        except CancelledError:
            return FetchOutcome(bani_type=bani_type, error="cancelled", interactive=interactive)
        except Exception as e:
            logger.error("Unexpected error fetching %s: %s", bani_type.value, e)
            return FetchOutcome(bani_type=bani_type, error=str(e), interactive=interactive)

        persisted = self.cache.put(bani_type, bani)
        if interactive:
            self.current_bani = bani
            if self._wants_hindi() and not bani.has_any_hindi:
                logger.info("No Hindi translation or transliteration found in API for %s.", bani_type.value)
        elif persisted:
            logger.info("Saved %s to disk", bani_type.value)
        return FetchOutcome(bani_type=bani_type, bani=bani, persisted=persisted, interactive=interactive)

    def process_completions(self, block: bool = False, timeout: Optional[float] = None) -> List[FetchOutcome]:
        """
        Apply finished downloads on the calling thread.

        Args:
            block: Wait (up to ``timeout``) for the first completion if none is ready.
            timeout: Seconds to wait when blocking, None for no limit.

        Returns:
            Outcomes applied by this call, in completion order.
        """
        outcomes: List[FetchOutcome] = []
        while self._pending:
            try:
                item = self._completions.get(block=block and not outcomes, timeout=timeout)
            except queue.Empty:
                break
            outcomes.append(self._apply(*item))
        return outcomes

    def iter_completions(self, timeout: Optional[float] = None) -> Iterator[FetchOutcome]:
        """Yield each outcome as it is applied, until nothing is pending."""
        while self._pending:
            try:
                item = self._completions.get(timeout=timeout)
            except queue.Empty:
                raise TimeoutError(f"{self._pending} download(s) still pending after {timeout}s")
            yield self._apply(*item)

    def wait_for_pending(self, timeout: Optional[float] = None) -> List[FetchOutcome]:
        return list(self.iter_completions(timeout=timeout))

    def shutdown(self, wait: bool = True):
        if self._owns_executor:
            self._executor.shutdown(wait=wait)
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()
