"""Teleport players to warps by issuing vanilla commands."""

from __future__ import annotations

import logging
from typing import Protocol

from better_warps.adapters.game_command import GameCommand, GameCommandAdapter
from better_warps.errors import TeleportError
from better_warps.models import Player, WarpPoint


class Teleporter(Protocol):
    """Moves a player to a warp; provided by the host server."""

    def teleport(self, player: Player, point: WarpPoint) -> None:
        """Teleport ``player`` or raise :class:`TeleportError`."""


def format_teleport_command(player_name: str, point: WarpPoint) -> str:
    return (
        f"execute in {point.dimension_id} run tp {player_name} "
        f"{point.x} {point.y} {point.z} {point.yaw} {point.pitch}"
    )


class CommandTeleporter:
    """Teleporter that sends ``execute in <dim> run tp ...`` through a game command adapter."""

    def __init__(self, adapter: GameCommandAdapter, *, logger: logging.Logger | None = None) -> None:
        self._adapter = adapter
        self._logger = logger or logging.getLogger("better_warps.teleport")

    def teleport(self, player: Player, point: WarpPoint) -> None:
        command = format_teleport_command(player.name, point)
        try:
            self._adapter.send(GameCommand(command=command))
        except Exception as exc:  # noqa: BLE001 - any adapter failure aborts just this teleport.
            self._logger.exception("teleport_failed", extra={"player": player.name, "command": command})
            raise TeleportError(f"Teleport failed: {exc}") from exc
        self._logger.info("teleport_sent", extra={"player": player.name, "dimension": point.dimension_id})
