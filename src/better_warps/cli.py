"""Console-side command sources for running warp commands from a terminal."""

from __future__ import annotations

from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape

from better_warps.commands import CommandDispatcher


@dataclass(slots=True)
class ConsolePlayer:
    """Stand-in player whose position is set from the command line."""

    name: str
    dimension_id: str = "minecraft:overworld"
    x: float = 0.0
    y: float = 64.0
    z: float = 0.0
    yaw: float = 0.0
    pitch: float = 0.0


@dataclass(slots=True)
class ConsoleCommandSource:
    """Command source that prints replies with rich and keeps a transcript."""

    name: str = "console"
    player: ConsolePlayer | None = None
    console: Console | None = None
    transcript: list[tuple[str, str]] = field(default_factory=list)

    def send_feedback(self, text: str) -> None:
        self.transcript.append(("feedback", text))
        if self.console is not None:
            self.console.print(text, markup=False, highlight=False)

    def send_error(self, text: str) -> None:
        self.transcript.append(("error", text))
        if self.console is not None:
            self.console.print(f"[red]{escape(text)}[/red]")


class CliCommandHandler:
    """Simple sync facade that runs command lines as one console source."""

    def __init__(self, dispatcher: CommandDispatcher, source: ConsoleCommandSource) -> None:
        self._dispatcher = dispatcher
        self._source = source

    def submit_command(self, command: str) -> int:
        return self._dispatcher.execute(self._source, command)
