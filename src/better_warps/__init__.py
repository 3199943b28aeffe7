"""Saved, named warp points for Minecraft servers."""

from better_warps.errors import (
    InvalidArgumentError,
    PreconditionError,
    TeleportError,
    WarpError,
    WarpNotFoundError,
    WarpStorageError,
)
from better_warps.models import WarpPoint, normalize_name
from better_warps.registry import WarpRegistry
from better_warps.storage import InMemoryWarpStore, JsonWarpStore

__all__ = [
    "InMemoryWarpStore",
    "InvalidArgumentError",
    "JsonWarpStore",
    "PreconditionError",
    "TeleportError",
    "WarpError",
    "WarpNotFoundError",
    "WarpPoint",
    "WarpRegistry",
    "WarpStorageError",
    "normalize_name",
]
