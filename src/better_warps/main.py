"""CLI entrypoint for managing warps outside a running server."""

from __future__ import annotations

import json

import typer
from rich import print
from rich.console import Console

from better_warps.adapters import (
    CommandTeleporter,
    EchoGameCommandAdapter,
    MinescriptGameCommandAdapter,
    MinescriptUnavailableError,
)
from better_warps.cli import CliCommandHandler, ConsoleCommandSource, ConsolePlayer
from better_warps.config import settings
from better_warps.errors import InvalidArgumentError, WarpNotFoundError
from better_warps.models import WarpPoint, normalize_name
from better_warps.permissions import PermissionNodeAuthorizer, StaticPermissionResolver
from better_warps.plugin import WarpPlugin
from better_warps.storage import encode_document
from better_warps.telemetry import configure_logging

app = typer.Typer(help="Better Warps: manage saved warp points")


@app.callback()
def _main() -> None:
    configure_logging(settings.log_level)


def _build_game_adapter():
    backend = settings.minecraft_adapter.lower()
    if backend == "minescript":
        try:
            return MinescriptGameCommandAdapter(command_prefix=settings.minescript_command_prefix)
        except MinescriptUnavailableError:
            return EchoGameCommandAdapter()
    return EchoGameCommandAdapter()


def _build_plugin() -> WarpPlugin:
    resolver = StaticPermissionResolver(op_levels={"console": settings.console_op_level})
    authorizer = PermissionNodeAuthorizer(
        resolver,
        prefix=settings.permission_prefix,
        default_level=settings.default_op_level,
    )
    plugin = WarpPlugin(
        settings=settings,
        authorizer=authorizer,
        teleporter=CommandTeleporter(_build_game_adapter()),
    )
    plugin.on_server_starting()
    return plugin


@app.command()
def start() -> None:
    """Show runtime configuration."""
    print(
        {
            "app_name": settings.app_name,
            "warps_path": str(settings.warps_path),
            "persist_on_mutation": settings.persist_on_mutation,
            "minecraft_adapter": settings.minecraft_adapter,
            "permission_prefix": settings.permission_prefix,
        }
    )


@app.command("list")
def list_warps() -> None:
    """List every warp, sorted by name."""
    plugin = _build_plugin()
    warps = plugin.registry.list_warps()
    print({name: warps[name].to_json() for name in sorted(warps)})


@app.command()
def info(name: str) -> None:
    """Show one warp."""
    plugin = _build_plugin()
    try:
        point = plugin.registry.get_warp(name)
    except (WarpNotFoundError, InvalidArgumentError) as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)
    print({"name": normalize_name(name), **point.to_json()})


@app.command("set")
def set_warp(
    name: str,
    dimension: str = typer.Option("minecraft:overworld", help="Namespaced dimension id"),
    x: float = typer.Option(..., help="X coordinate"),
    y: float = typer.Option(..., help="Y coordinate"),
    z: float = typer.Option(..., help="Z coordinate"),
    yaw: float = typer.Option(0.0, help="Yaw rotation"),
    pitch: float = typer.Option(0.0, help="Pitch rotation"),
) -> None:
    """Create or overwrite a warp at explicit coordinates."""
    plugin = _build_plugin()
    try:
        point = WarpPoint(dimension_id=dimension, x=x, y=y, z=z, yaw=yaw, pitch=pitch)
        plugin.registry.set_warp(name, point)
    except InvalidArgumentError as exc:
        raise typer.BadParameter(str(exc))
    plugin.on_server_stopping()
    print({"saved": normalize_name(name), **point.to_json()})


@app.command()
def delete(name: str) -> None:
    """Delete a warp."""
    plugin = _build_plugin()
    removed = plugin.registry.del_warp(name)
    plugin.on_server_stopping()
    print({"deleted": removed})
    if not removed:
        raise typer.Exit(code=1)


@app.command()
def rename(old_name: str, new_name: str) -> None:
    """Rename a warp. Permission nodes that mention the old name are not changed."""
    plugin = _build_plugin()
    try:
        plugin.registry.rename_warp(old_name, new_name)
    except (WarpNotFoundError, InvalidArgumentError) as exc:
        print({"error": str(exc)})
        raise typer.Exit(code=1)
    plugin.on_server_stopping()
    print({"renamed": {"from": normalize_name(old_name), "to": normalize_name(new_name)}})


@app.command()
def export() -> None:
    """Print the warp document as it would be written to disk."""
    plugin = _build_plugin()
    typer.echo(json.dumps(encode_document(plugin.registry.list_warps()), indent=2))


@app.command()
def shell(
    player: str = typer.Option(None, help="Act as this player instead of the console"),
    dimension: str = typer.Option("minecraft:overworld", help="Player dimension"),
    x: float = typer.Option(0.0, help="Player X"),
    y: float = typer.Option(64.0, help="Player Y"),
    z: float = typer.Option(0.0, help="Player Z"),
) -> None:
    """Run warp commands interactively, e.g. `/setwarp home` or `/warps`."""
    plugin = _build_plugin()
    console = Console()
    as_player = ConsolePlayer(name=player, dimension_id=dimension, x=x, y=y, z=z) if player else None
    source = ConsoleCommandSource(name="console", player=as_player, console=console)
    handler = CliCommandHandler(plugin.dispatcher, source)

    print({"shell": "started", "hint": "Type /warp help for commands, 'exit' to quit."})
    try:
        while True:
            try:
                line = console.input("> ").strip()
            except EOFError:
                break
            if line.lower() in {"exit", "quit"}:
                break
            if line:
                handler.submit_command(line)
    finally:
        plugin.on_server_stopping()
    print({"shell": "stopped"})


if __name__ == "__main__":
    app()
