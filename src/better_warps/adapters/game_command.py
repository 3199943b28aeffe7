"""Boundary for sending vanilla commands to the running game."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True)
class GameCommand:
    """Command line sent to the game, without the leading slash."""

    command: str


class GameCommandAdapter(Protocol):
    """Interface to run commands on the server or client console."""

    def send(self, payload: GameCommand) -> str | None:
        """Dispatch a command payload to the running game instance."""


class EchoGameCommandAdapter:
    """Fallback adapter for offline use and tests."""

    def __init__(self) -> None:
        self.sent: list[str] = []

    def send(self, payload: GameCommand) -> str:
        self.sent.append(payload.command)
        return f"executed: {payload.command}"
