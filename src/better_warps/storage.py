"""JSON persistence for the warp registry.

The on-disk document is versioned::

    {
      "version": 1,
      "warps": {
        "<name>": {"dimension": "minecraft:overworld", "x": 0.5, "y": 64.5, "z": 0.5, "yaw": 0.0, "pitch": 0.0}
      }
    }

Unversioned documents written by older plugin releases are still readable:
either a flat ``name -> record`` object or a ``dimension -> name -> record``
object. Both are migrated to the current shape on the next save.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Mapping, Protocol

from better_warps.errors import InvalidArgumentError, PreconditionError, WarpStorageError
from better_warps.models import WarpPoint, normalize_name

DOCUMENT_VERSION = 1

_LEAF_KEYS = frozenset({"x", "y", "z"})


class WarpStore(Protocol):
    """Persistence contract for the full warp mapping."""

    def load(self) -> dict[str, WarpPoint]:
        """Return every stored warp keyed by normalized name."""

    def save(self, warps: Mapping[str, WarpPoint]) -> None:
        """Replace the stored document with ``warps``."""


class InMemoryWarpStore:
    """Store that keeps the last saved snapshot in memory."""

    def __init__(self, initial: Mapping[str, WarpPoint] | None = None) -> None:
        self._warps: dict[str, WarpPoint] = dict(initial or {})
        self.save_count = 0

    def load(self) -> dict[str, WarpPoint]:
        return dict(self._warps)

    def save(self, warps: Mapping[str, WarpPoint]) -> None:
        self._warps = dict(warps)
        self.save_count += 1


def encode_document(warps: Mapping[str, WarpPoint]) -> dict[str, Any]:
    return {
        "version": DOCUMENT_VERSION,
        "warps": {name: point.to_json() for name, point in warps.items()},
    }


def decode_document(root: Any, *, logger: logging.Logger | None = None) -> dict[str, WarpPoint]:
    """Decode any supported document shape into a flat ``name -> WarpPoint`` mapping."""
    logger = logger or logging.getLogger("better_warps.storage")
    if not isinstance(root, dict):
        raise InvalidArgumentError(f"Warp document must be a JSON object, got {type(root).__name__}")

    version = root.get("version")
    # A legacy flat file may hold a warp named "version"; that value is an object, not a number.
    if isinstance(version, int) and not isinstance(version, bool):
        if version != DOCUMENT_VERSION:
            raise InvalidArgumentError(f"Unsupported warp document version: {version!r}")
        body = root.get("warps", {})
        if not isinstance(body, dict):
            raise InvalidArgumentError("'warps' must be a JSON object")
        return _decode_flat(body)

    if all(_looks_like_leaf(value) for value in root.values()):
        return _decode_flat(root)

    warps: dict[str, WarpPoint] = {}
    for dimension, by_name in root.items():
        if not isinstance(by_name, dict):
            raise InvalidArgumentError(f"Dimension entry {dimension!r} must be a JSON object")
        for name, point in _decode_flat(by_name).items():
            if name in warps:
                logger.warning(
                    "warp_store_duplicate_name",
                    extra={"warp": name, "dimension": dimension, "kept_dimension": warps[name].dimension_id},
                )
                continue
            warps[name] = point
    return warps


def _looks_like_leaf(value: Any) -> bool:
    return isinstance(value, dict) and _LEAF_KEYS.issubset(value.keys())


def _decode_flat(body: dict[str, Any]) -> dict[str, WarpPoint]:
    return {normalize_name(name): WarpPoint.from_json(record) for name, record in body.items()}


class JsonWarpStore:
    """Pretty-printed JSON document on disk, replaced atomically on save."""

    def __init__(self, file_path: str | Path | None = None, *, logger: logging.Logger | None = None) -> None:
        self._path = Path(file_path) if file_path is not None else None
        self._logger = logger or logging.getLogger("better_warps.storage")
        self._blocked_path: Path | None = None

    @property
    def path(self) -> Path | None:
        return self._path

    def bind(self, file_path: str | Path) -> None:
        """Set the document location once the host run directory is known."""
        self._path = Path(file_path)

    def load(self) -> dict[str, WarpPoint]:
        path = self._require_path("load")
        if not path.exists():
            self._logger.info("warp_store_created", extra={"path": str(path)})
            self.save({})
            return {}

        try:
            with path.open("r", encoding="utf-8") as handle:
                root = json.load(handle)
        except OSError as exc:
            raise WarpStorageError(f"Unable to read warp file {path}: {exc}") from exc
        except (ValueError, RecursionError) as exc:
            self._quarantine(path)
            raise WarpStorageError(f"Warp file {path} is not valid JSON: {exc}") from exc

        try:
            warps = decode_document(root, logger=self._logger)
        except (ValueError, RecursionError) as exc:
            self._quarantine(path)
            raise WarpStorageError(f"Warp file {path} is malformed: {exc}") from exc

        self._logger.info("warp_store_loaded", extra={"path": str(path), "warp_count": len(warps)})
        return warps

    def save(self, warps: Mapping[str, WarpPoint]) -> None:
        path = self._require_path("save")
        if self._blocked_path == path:
            raise WarpStorageError(f"Refusing to overwrite unreadable warp file {path}")
        payload = json.dumps(encode_document(warps), indent=2) + "\n"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    handle.write(payload)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise WarpStorageError(f"Unable to write warp file {path}: {exc}") from exc

        self._logger.debug("warp_store_saved", extra={"path": str(path), "warp_count": len(warps)})

    def _quarantine(self, path: Path) -> None:
        """Move a broken document aside so the next save cannot destroy it."""
        target = path.with_name(f"{path.name}.corrupt")
        try:
            os.replace(path, target)
        except OSError:
            self._blocked_path = path
            self._logger.exception("warp_store_quarantine_failed", extra={"path": str(path)})
            return
        self._logger.error("warp_store_quarantined", extra={"path": str(path), "moved_to": str(target)})

    def _require_path(self, operation: str) -> Path:
        if self._path is None:
            raise PreconditionError(f"JsonWarpStore.{operation}() called before a file path was bound")
        return self._path
