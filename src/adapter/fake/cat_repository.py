"""In-memory implementation of CatRepository for testing."""

import itertools
import threading
from dataclasses import replace

from domain.model.cat import Cat


class FakeCatRepository:
    def __init__(self):
        self.store: dict[int, Cat] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    # ── write operations ─────────────────────────────────────

    def insert(self, cat: Cat) -> Cat:
        with self._lock:
            cat_id = cat.id if cat.id is not None else next(self._ids)
            stored = replace(cat, id=cat_id)
            self.store[cat_id] = stored
        return replace(stored)

    # ── read operations ──────────────────────────────────────

    def list_all(self) -> list[Cat]:
        with self._lock:
            return [replace(cat) for cat in self.store.values()]
