"""Adapter that runs commands inside a live game through ``minescript``.

The module is imported lazily so the plugin stays importable (and testable)
where the mod is not installed.
"""

from __future__ import annotations

import importlib
from dataclasses import dataclass, field
from typing import Callable

from better_warps.adapters.game_command import GameCommandAdapter, GameCommand


class MinescriptUnavailableError(RuntimeError):
    """Raised when minescript is not installed or has no supported command API."""


@dataclass(slots=True)
class MinescriptGameCommandAdapter(GameCommandAdapter):
    """Adapter that dispatches commands through a locally-imported `minescript` module."""

    command_prefix: str = "/"
    _executor: Callable[[str], str | None] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._executor = self._resolve_executor()

    def send(self, payload: GameCommand) -> str | None:
        command = payload.command
        if self.command_prefix and not command.startswith(self.command_prefix):
            command = f"{self.command_prefix}{command}"

        result = self._executor(command)
        return "" if result is None else str(result)

    @staticmethod
    def _resolve_executor() -> Callable[[str], str | None]:
        try:
            module = importlib.import_module("minescript")
        except Exception as exc:  # noqa: BLE001
            raise MinescriptUnavailableError(
                "Unable to import minescript. Install it and ensure Minecraft + the mod are running."
            ) from exc

        for attr in ("execute", "run", "command", "chat_command"):
            fn = getattr(module, attr, None)
            if callable(fn):
                return fn

        raise MinescriptUnavailableError(
            "Imported minescript but found no supported API (expected execute/run/command/chat_command)."
        )
