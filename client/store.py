"""Client-side view state for the mood chart.

Two cache slots, one per window, are filled either by an explicit fetch or
by a pushed log event. A pushed event that carries both views replaces the
slots wholesale; one without views triggers a refetch of the active window.
"""
import logging
import threading
from typing import Callable, Dict, List

from pydantic import ValidationError

from schemas import WINDOWS, parse_event

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], List[Dict]]


class MoodStore:
    def __init__(self, fetcher: Fetcher, active_window: str = 'weekly'):
        if active_window not in WINDOWS:
            raise ValueError(f"Unknown window '{active_window}'")
        self.fetcher = fetcher
        self.active_window = active_window
        self.cache: Dict[str, List[Dict]] = {kind: [] for kind in WINDOWS}
        self.chart_data: List[Dict] = []
        self.loading = False
        # Bumped by every pushed view; a fetch started under an older value is stale
        self._generation = 0
        # Socket callbacks arrive on the client's background thread
        self._lock = threading.RLock()

    def select_window(self, kind: str) -> bool:
        """Show ``kind``; returns True when a network fetch was needed."""
        if kind not in WINDOWS:
            raise ValueError(f"Unknown window '{kind}'")
        with self._lock:
            self.active_window = kind
            if self.cache[kind]:
                self.chart_data = self.cache[kind]
                return False
        self.fetch(kind)
        return True

    def fetch(self, kind: str = None) -> None:
        kind = kind or self.active_window
        with self._lock:
            self.loading = True
            generation = self._generation
        try:
            data = self.fetcher(kind)
        except Exception as e:
            logger.error(f"Error fetching {kind} data: {str(e)}", exc_info=True)
            return
        finally:
            with self._lock:
                self.loading = False

        with self._lock:
            if generation != self._generation:
                logger.info(f"Discarding {kind} fetch overtaken by a pushed update")
                return
            self.cache[kind] = data
            if kind == self.active_window:
                self.chart_data = data

    def apply_notification(self, payload) -> None:
        """Reconcile the cache with one pushed log event."""
        try:
            event = parse_event(payload)
        except ValidationError as e:
            logger.warning(f"Malformed log event, refetching: {str(e)}")
            self.fetch()
            return

        if event.summary_data is None:
            self.fetch()
            return

        views = event.summary_data.model_dump(by_alias=True)
        with self._lock:
            self._generation += 1
            self.cache = {kind: views[kind] for kind in WINDOWS}
            self.chart_data = self.cache[self.active_window]
            self.loading = False

    def on_connect(self) -> None:
        # The channel has no backlog, so every (re)connection starts from a full fetch
        self.fetch()
