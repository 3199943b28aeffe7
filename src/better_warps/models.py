"""Warp records and the player view they are captured from."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Protocol

from better_warps.errors import InvalidArgumentError

DEFAULT_NAMESPACE = "minecraft"

_NAMESPACE_RE = re.compile(r"[a-z0-9_.-]+")
_PATH_RE = re.compile(r"[a-z0-9_./-]+")


class Player(Protocol):
    """Minimal view of an online player exposed by the host."""

    name: str
    dimension_id: str
    x: float
    y: float
    z: float
    yaw: float
    pitch: float


def normalize_name(name: str) -> str:
    """Trim and lower-case a user supplied warp name."""
    normalized = name.strip().lower()
    if not normalized:
        raise InvalidArgumentError("Warp name must not be empty")
    if any(ch.isspace() for ch in normalized):
        raise InvalidArgumentError(f"Warp name must be a single word: {name!r}")
    return normalized


def parse_dimension_id(value: str) -> str:
    """Return the canonical ``namespace:path`` form of a dimension id."""
    if not isinstance(value, str):
        raise InvalidArgumentError(f"Dimension id must be a string, got {value!r}")
    text = value.strip()
    namespace, sep, path = text.partition(":")
    if not sep:
        namespace, path = DEFAULT_NAMESPACE, text
    if not _NAMESPACE_RE.fullmatch(namespace) or not _PATH_RE.fullmatch(path):
        raise InvalidArgumentError(f"Invalid dimension id: {value!r}")
    return f"{namespace}:{path}"


@dataclass(frozen=True, slots=True)
class WarpPoint:
    """A saved location: dimension, coordinates and facing."""

    dimension_id: str
    x: float
    y: float
    z: float
    yaw: float = 0.0
    pitch: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "dimension_id", parse_dimension_id(self.dimension_id))
        for field_name in ("x", "y", "z", "yaw", "pitch"):
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidArgumentError(f"{field_name} must be a number, got {value!r}")
            try:
                number = float(value)
            except OverflowError as exc:
                raise InvalidArgumentError(f"{field_name} is out of range for a float") from exc
            if not math.isfinite(number):
                raise InvalidArgumentError(f"{field_name} must be finite, got {value!r}")
            object.__setattr__(self, field_name, number)

    @classmethod
    def from_player(cls, player: Player) -> WarpPoint:
        """Capture the center of the block the player stands in, with their facing."""
        return cls(
            dimension_id=player.dimension_id,
            x=math.floor(player.x) + 0.5,
            y=math.floor(player.y) + 0.5,
            z=math.floor(player.z) + 0.5,
            yaw=player.yaw,
            pitch=player.pitch,
        )

    @classmethod
    def from_json(cls, obj: Any) -> WarpPoint:
        if not isinstance(obj, dict):
            raise InvalidArgumentError(f"Warp record must be an object, got {type(obj).__name__}")
        dimension = obj.get("dimension", obj.get("dim"))
        if not isinstance(dimension, str):
            raise InvalidArgumentError("Warp record is missing a 'dimension' string")
        try:
            return cls(
                dimension_id=dimension,
                x=obj["x"],
                y=obj["y"],
                z=obj["z"],
                yaw=obj["yaw"],
                pitch=obj["pitch"],
            )
        except KeyError as exc:
            raise InvalidArgumentError(f"Warp record is missing field {exc.args[0]!r}") from exc

    def to_json(self) -> dict[str, Any]:
        return {
            "dimension": self.dimension_id,
            "x": self.x,
            "y": self.y,
            "z": self.z,
            "yaw": self.yaw,
            "pitch": self.pitch,
        }

    def describe(self) -> str:
        return (
            f"Dimension: {self.dimension_id}, Position: ({self.x:.1f}, {self.y:.1f}, {self.z:.1f}), "
            f"Yaw: {self.yaw:.1f}, Pitch: {self.pitch:.1f}"
        )
