from __future__ import annotations

import threading
from typing import Callable, Dict, Iterator, Mapping, Optional, Tuple


class ResultCache:
    """Surface word -> chosen segmentation, shared by the workers of one stream.

    Entries are never evicted. All access goes through one lock, so a single
    instance may be shared across threads.
    """

    def __init__(self, seed: Optional[Mapping[str, str]] = None):
        self._entries: Dict[str, str] = dict(seed or {})
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, word: str) -> Optional[str]:
        with self._lock:
            value = self._entries.get(word)
            if value is None:
                self.misses += 1
            else:
                self.hits += 1
            return value

    def put(self, word: str, segmentation: str) -> None:
        with self._lock:
            self._entries[word] = segmentation

    def get_or_compute(self, word: str, compute: Callable[[str], str]) -> str:
        cached = self.get(word)
        if cached is not None:
            return cached
        # Computed outside the lock; concurrent misses on one word agree anyway.
        value = compute(word)
        with self._lock:
            return self._entries.setdefault(word, value)

    def items(self) -> Iterator[Tuple[str, str]]:
        with self._lock:
            snapshot = list(self._entries.items())
        return iter(snapshot)

    def __contains__(self, word: object) -> bool:
        with self._lock:
            return word in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
