"""In-process cache of rendered dashboard views, keyed by path"""

import threading
from typing import Any, Dict, Optional

from app.core.logging import get_logger

logger = get_logger(__name__)


class ViewCache:
    """
    Holds the last rendered payload for a path and its query variants.

    Keys are (path, variant) so that a paginated listing can be cached per
    page while a single revalidate_path drops every variant of the path.

    Each path also has a generation that every invalidation bumps. A reader
    takes the generation before rendering and passes it to `set`; a render
    that started before a write is then discarded instead of cached.
    """

    def __init__(self):
        self._entries: Dict[str, Dict[str, Any]] = {}
        self._generations: Dict[str, int] = {}
        self._lock = threading.Lock()

    def get(self, path: str, variant: str = "") -> Optional[Any]:
        with self._lock:
            return self._entries.get(path, {}).get(variant)

    def generation(self, path: str) -> int:
        with self._lock:
            return self._generations.get(path, 0)

    def set(
        self, path: str, value: Any, variant: str = "", generation: Optional[int] = None
    ) -> bool:
        """
        Store a render of `path`.

        Returns:
            False if `generation` is given and the path was invalidated since
        """
        with self._lock:
            if generation is not None and generation != self._generations.get(path, 0):
                return False
            self._entries.setdefault(path, {})[variant] = value
            return True

    def invalidate(self, path: str) -> None:
        with self._lock:
            dropped = self._entries.pop(path, None)
            self._generations[path] = self._generations.get(path, 0) + 1
        logger.debug(
            "View cache invalidated",
            extra={"path": path, "variants": len(dropped) if dropped else 0},
        )

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


# Global view cache instance
view_cache = ViewCache()


def revalidate_path(path: str) -> None:
    """Drop any cached render of `path`."""
    view_cache.invalidate(path)
