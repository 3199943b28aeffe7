"""Game command adapters and command-based teleport."""

from .game_command import EchoGameCommandAdapter, GameCommand, GameCommandAdapter
from .live_minecraft import MinescriptGameCommandAdapter, MinescriptUnavailableError
from .teleport import CommandTeleporter, Teleporter, format_teleport_command

__all__ = [
    "CommandTeleporter",
    "EchoGameCommandAdapter",
    "GameCommand",
    "GameCommandAdapter",
    "MinescriptGameCommandAdapter",
    "MinescriptUnavailableError",
    "Teleporter",
    "format_teleport_command",
]
