"""In-memory warp registry backed by a pluggable store."""

from __future__ import annotations

import logging
import threading
from types import MappingProxyType
from typing import Mapping

from better_warps.errors import InvalidArgumentError, WarpError, WarpNotFoundError
from better_warps.models import WarpPoint, normalize_name
from better_warps.storage import InMemoryWarpStore, WarpStore

__all__ = ["WarpRegistry", "normalize_name"]


class WarpRegistry:
    """Name-keyed warp mapping, flushed to its store after every mutation.

    Names are normalized on every entry point, so ``"Home "`` and ``"home"``
    address the same warp. Storage failures are logged and never raised to
    callers: the server must keep running even if the warp file is broken.
    """

    def __init__(
        self,
        store: WarpStore | None = None,
        *,
        persist_on_mutation: bool = True,
        logger: logging.Logger | None = None,
    ) -> None:
        self._store = store or InMemoryWarpStore()
        self._persist_on_mutation = persist_on_mutation
        self._logger = logger or logging.getLogger("better_warps.registry")
        self._lock = threading.RLock()
        self._warps: dict[str, WarpPoint] = {}

    @property
    def store(self) -> WarpStore:
        return self._store

    def __len__(self) -> int:
        with self._lock:
            return len(self._warps)

    def __contains__(self, name: object) -> bool:
        if not isinstance(name, str):
            return False
        return self.find_warp(name) is not None

    def load(self) -> bool:
        """Replace in-memory state with the stored document.

        Returns ``False`` and keeps the previous state when the store fails.
        """
        with self._lock:
            try:
                warps = self._store.load()
            except WarpError:
                self._logger.exception("warp_store_load_failed", extra={"kept_warp_count": len(self._warps)})
                return False
            self._warps = dict(warps)
            self._logger.info("warp_registry_loaded", extra={"warp_count": len(self._warps)})
            return True

    def save(self) -> bool:
        """Write the full mapping to the store; returns ``False`` on failure."""
        with self._lock:
            try:
                self._store.save(dict(self._warps))
            except WarpError:
                self._logger.exception("warp_store_save_failed", extra={"warp_count": len(self._warps)})
                return False
            return True

    def set_warp(self, name: str, point: WarpPoint) -> None:
        key = normalize_name(name)
        with self._lock:
            self._warps[key] = point
            self._logger.info("warp_saved", extra={"warp": key, "dimension": point.dimension_id})
            self._flush()

    def get_warp(self, name: str) -> WarpPoint:
        key = normalize_name(name)
        with self._lock:
            try:
                return self._warps[key]
            except KeyError:
                raise WarpNotFoundError(key) from None

    def find_warp(self, name: str) -> WarpPoint | None:
        try:
            return self.get_warp(name)
        except (WarpNotFoundError, ValueError):
            return None

    def del_warp(self, name: str) -> bool:
        try:
            key = normalize_name(name)
        except InvalidArgumentError:
            return False
        with self._lock:
            if self._warps.pop(key, None) is None:
                return False
            self._logger.info("warp_deleted", extra={"warp": key})
            self._flush()
            return True

    def rename_warp(self, old_name: str, new_name: str) -> None:
        """Move a warp to a new name, replacing any warp already stored there.

        Permission nodes that mention the old name are left untouched.
        """
        old_key = normalize_name(old_name)
        new_key = normalize_name(new_name)
        with self._lock:
            if old_key not in self._warps:
                raise WarpNotFoundError(old_key)
            if old_key == new_key:
                return
            self._warps[new_key] = self._warps.pop(old_key)
            self._logger.info("warp_renamed", extra={"warp": new_key, "previous_name": old_key})
            self._flush()

    def list_warps(self) -> Mapping[str, WarpPoint]:
        """Return a read-only snapshot in insertion order."""
        with self._lock:
            return MappingProxyType(dict(self._warps))

    def _flush(self) -> None:
        if self._persist_on_mutation:
            self.save()
