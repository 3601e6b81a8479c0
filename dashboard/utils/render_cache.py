"""Cache of rendered page fragments keyed by route path."""

from __future__ import annotations

import threading
from typing import Callable, Dict, Tuple

from flask import current_app

CacheKey = Tuple[str, str]


class RenderCache:
    """Thread-safe store of rendered HTML fragments.

    Entries are keyed by ``(path, variant)`` where ``variant`` is usually the
    query string, so every page and filter of a listing is cached separately
    while :meth:`revalidate` drops all of them at once.
    """

    def __init__(self) -> None:
        self._entries: Dict[CacheKey, str] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    def get(self, path: str, variant: str = "") -> str | None:
        with self._lock:
            return self._entries.get((path, variant))

    # ------------------------------------------------------------------
    def set(self, path: str, variant: str, content: str) -> None:
        with self._lock:
            self._entries[(path, variant)] = content

    # ------------------------------------------------------------------
    def get_or_render(
        self, path: str, variant: str, render: Callable[[], str]
    ) -> str:
        cached = self.get(path, variant)
        if cached is not None:
            return cached
        content = render()
        self.set(path, variant, content)
        return content

    # ------------------------------------------------------------------
    def revalidate(self, path: str) -> int:
        """Drop every cached rendering of ``path`` and return how many."""
        with self._lock:
            stale = [key for key in self._entries if key[0] == path]
            for key in stale:
                del self._entries[key]
        return len(stale)

    # ------------------------------------------------------------------
    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


# ----------------------------------------------------------------------
def get_render_cache() -> RenderCache:
    app = current_app._get_current_object()
    cache = app.extensions.get("render_cache")
    if cache is None:
        cache = app.extensions["render_cache"] = RenderCache()
    return cache


def revalidate_path(path: str) -> int:
    """Mark cached renderings of ``path`` stale so the next request re-renders."""
    dropped = get_render_cache().revalidate(path)
    current_app.logger.debug("Revalidated %s (%d cached renderings)", path, dropped)
    return dropped
