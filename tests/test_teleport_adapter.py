from __future__ import annotations

import sys
import types

import pytest

from better_warps.adapters import (
    CommandTeleporter,
    EchoGameCommandAdapter,
    GameCommand,
    MinescriptGameCommandAdapter,
    MinescriptUnavailableError,
)
from better_warps.cli import ConsolePlayer
from better_warps.errors import TeleportError
from better_warps.models import WarpPoint


class _FakeMinescriptModule(types.SimpleNamespace):
    def __init__(self):
        super().__init__()
        self.calls: list[str] = []

    def execute(self, command: str) -> str:
        self.calls.append(command)
        return f"ok:{command}"


class FailingAdapter:
    def send(self, payload: GameCommand) -> str | None:
        raise RuntimeError("server offline")


def test_minescript_adapter_dispatches_command(monkeypatch) -> None:
    fake = _FakeMinescriptModule()
    monkeypatch.setitem(sys.modules, "minescript", fake)

    adapter = MinescriptGameCommandAdapter(command_prefix="/")
    response = adapter.send(GameCommand(command="time set day"))

    assert response == "ok:/time set day"
    assert fake.calls == ["/time set day"]


def test_minescript_adapter_without_api(monkeypatch) -> None:
    monkeypatch.setitem(sys.modules, "minescript", types.SimpleNamespace())

    with pytest.raises(MinescriptUnavailableError):
        MinescriptGameCommandAdapter()


def test_command_teleporter_sends_execute_in_tp() -> None:
    adapter = EchoGameCommandAdapter()
    teleporter = CommandTeleporter(adapter)
    point = WarpPoint(dimension_id="minecraft:the_nether", x=10.5, y=70.5, z=-3.5, yaw=90.0, pitch=-10.0)

    teleporter.teleport(ConsolePlayer(name="steve"), point)

    assert adapter.sent == ["execute in minecraft:the_nether run tp steve 10.5 70.5 -3.5 90.0 -10.0"]


def test_command_teleporter_wraps_adapter_failures() -> None:
    teleporter = CommandTeleporter(FailingAdapter())
    point = WarpPoint(dimension_id="minecraft:overworld", x=0, y=64, z=0)

    with pytest.raises(TeleportError, match="server offline"):
        teleporter.teleport(ConsolePlayer(name="steve"), point)
