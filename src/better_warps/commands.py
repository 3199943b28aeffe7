"""Warp command handlers.

Handlers follow the host dispatcher convention: they return ``1`` when the
command succeeded and ``0`` when it failed, and report everything to the
invoking source as feedback text. Domain errors never escape a handler.
"""

from __future__ import annotations

import logging
import shlex
from dataclasses import dataclass
from typing import Callable, Protocol

from better_warps.adapters.teleport import Teleporter
from better_warps.errors import InvalidArgumentError, TeleportError, WarpNotFoundError
from better_warps.models import Player, WarpPoint
from better_warps.permissions import Authorizer, WarpAction
from better_warps.registry import WarpRegistry

PREFIX = "[Simply Better Warps]"

HELP_TEXT = f"""{PREFIX} Commands:
/warp <name>                - teleport to a warp
/setwarp <name>             - create or overwrite a warp at your position
/delwarp <name>             - delete a warp
/warps                      - list warps you can see
/warpinfo <name>            - show where a warp points
/renamewarp <old> <new>     - rename a warp
/warp help                  - show this help"""


class CommandSource(Protocol):
    """Whoever invoked a command: a player, the console or a command block."""

    name: str

    @property
    def player(self) -> Player | None: ...

    def send_feedback(self, text: str) -> None: ...

    def send_error(self, text: str) -> None: ...


@dataclass(slots=True)
class ListedWarp:
    name: str
    can_teleport: bool


class WarpCommands:
    """Command executors wired to a registry, an authorizer and a teleporter."""

    # Command-level permission required before a handler may run at all.
    REQUIRED_ACTIONS = {
        "simplybetterwarps": WarpAction.BASIC,
        "warp": WarpAction.BASIC,
        "warps": WarpAction.BASIC,
        "warpinfo": WarpAction.INFO,
        "setwarp": WarpAction.SET,
        "delwarp": WarpAction.DELETE,
        "renamewarp": WarpAction.RENAME,
    }

    def __init__(
        self,
        registry: WarpRegistry,
        authorizer: Authorizer,
        teleporter: Teleporter,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        self._registry = registry
        self._authorizer = authorizer
        self._teleporter = teleporter
        self._logger = logger or logging.getLogger("better_warps.commands")

    def can_use(self, source: CommandSource, command: str) -> bool:
        action = self.REQUIRED_ACTIONS.get(command)
        return action is not None and self._authorizer.is_allowed(source, action)

    def can_use_warp_to(self, source: CommandSource) -> bool:
        return self._authorizer.is_allowed(source, WarpAction.TELEPORT)

    def can_see(self, source: CommandSource, name: str) -> bool:
        return self._authorizer.is_allowed(source, WarpAction.SEE, name)

    def can_teleport(self, source: CommandSource, name: str) -> bool:
        return self._authorizer.is_allowed(source, WarpAction.TELEPORT, name)

    def usage(self, source: CommandSource) -> int:
        source.send_feedback(f"{PREFIX} Usage: /warp help")
        return 1

    def help(self, source: CommandSource) -> int:
        source.send_feedback(HELP_TEXT)
        return 1

    def warp(self, source: CommandSource, name: str) -> int:
        player = source.player
        if player is None:
            source.send_error(f"{PREFIX} Only players can use warps.")
            return 0
        if not self.can_teleport(source, name):
            source.send_error(f"{PREFIX} You don't have permission to teleport to '{name}'.")
            return 0

        try:
            point = self._registry.get_warp(name)
            self._teleporter.teleport(player, point)
        except (WarpNotFoundError, InvalidArgumentError, TeleportError) as exc:
            source.send_error(f"{PREFIX} {exc}")
            self._logger.warning(
                "warp_teleport_rejected",
                extra={"player": player.name, "warp": name, "reason": str(exc)},
            )
            return 0

        source.send_feedback(f"{PREFIX} Teleported to '{name}' in {point.dimension_id}.")
        return 1

    def set_warp(self, source: CommandSource, name: str) -> int:
        player = source.player
        if player is None:
            source.send_error(f"{PREFIX} Only players can set warps.")
            return 0

        try:
            point = WarpPoint.from_player(player)
            self._registry.set_warp(name, point)
        except InvalidArgumentError as exc:
            source.send_error(f"{PREFIX} {exc}")
            return 0

        source.send_feedback(
            f"{PREFIX} Warp '{name}' saved at {point.dimension_id} ({point.x:.1f}, {point.y:.1f}, {point.z:.1f})."
        )
        return 1

    def del_warp(self, source: CommandSource, name: str) -> int:
        if not self._registry.del_warp(name):
            source.send_error(f"{PREFIX} Warp not found: {name}")
            return 0
        source.send_feedback(f"{PREFIX} Warp deleted: {name}")
        return 1

    def visible_warps(self, source: CommandSource) -> list[ListedWarp]:
        names = sorted(name for name in self._registry.list_warps() if self.can_see(source, name))
        return [ListedWarp(name=name, can_teleport=self.can_teleport(source, name)) for name in names]

    def list_warps(self, source: CommandSource) -> int:
        listed = self.visible_warps(source)
        if not listed:
            source.send_feedback(f"{PREFIX} No visible warps.")
            return 1

        # Warps the source cannot teleport to are shown in parentheses.
        rendered = ", ".join(item.name if item.can_teleport else f"({item.name})" for item in listed)
        source.send_feedback(f"{PREFIX} Warps ({len(listed)}): {rendered}")
        return 1

    def warp_info(self, source: CommandSource, name: str) -> int:
        if not self.can_see(source, name):
            source.send_error(f"{PREFIX} You don't have permission to see '{name}'.")
            return 0

        try:
            point = self._registry.get_warp(name)
        except (WarpNotFoundError, InvalidArgumentError) as exc:
            source.send_error(f"{PREFIX} {exc}")
            return 0

        source.send_feedback(f"{PREFIX} Warp '{name}': {point.describe()}")
        return 1

    def rename_warp(self, source: CommandSource, old_name: str, new_name: str) -> int:
        try:
            self._registry.rename_warp(old_name, new_name)
        except (WarpNotFoundError, InvalidArgumentError) as exc:
            source.send_error(f"{PREFIX} {exc}")
            return 0

        source.send_feedback(f"{PREFIX} Warp renamed from '{old_name}' to '{new_name}'.")
        source.send_feedback(
            f"{PREFIX} Note: Permissions are not automatically updated. "
            f"Change them manually from '{old_name}' to '{new_name}'."
        )
        return 1

    def suggest(self, source: CommandSource, prefix: str = "") -> list[str]:
        """Warp names the source can see, for tab completion."""
        needle = prefix.strip().lower()
        return [item.name for item in self.visible_warps(source) if item.name.startswith(needle)]


class CommandDispatcher:
    """Routes raw command lines such as ``/warp spawn`` to :class:`WarpCommands`."""

    def __init__(self, commands: WarpCommands) -> None:
        self._commands = commands
        self._routes: dict[str, tuple[int, Callable[..., int], str]] = {
            "simplybetterwarps": (0, commands.usage, "/simplybetterwarps"),
            "warps": (0, commands.list_warps, "/warps"),
            "setwarp": (1, commands.set_warp, "/setwarp <name>"),
            "delwarp": (1, commands.del_warp, "/delwarp <name>"),
            "warpinfo": (1, commands.warp_info, "/warpinfo <name>"),
            "renamewarp": (2, commands.rename_warp, "/renamewarp <old> <new>"),
        }

    @property
    def command_names(self) -> list[str]:
        return sorted([*self._routes, "warp"])

    def execute(self, source: CommandSource, line: str) -> int:
        try:
            tokens = shlex.split(line)
        except ValueError as exc:
            source.send_error(f"{PREFIX} {exc}")
            return 0
        if not tokens:
            return 0

        command, args = tokens[0].lstrip("/").lower(), tokens[1:]
        if command not in self._routes and command != "warp":
            source.send_error(f"Unknown command: {command}")
            return 0
        if not self._commands.can_use(source, command):
            source.send_error(f"{PREFIX} You don't have permission to use /{command}.")
            return 0

        if command == "warp":
            return self._execute_warp(source, args)

        arity, handler, usage = self._routes[command]
        if len(args) != arity:
            source.send_error(f"{PREFIX} Usage: {usage}")
            return 0
        return handler(source, *args)

    def _execute_warp(self, source: CommandSource, args: list[str]) -> int:
        if not args or (len(args) == 1 and args[0].lower() == "help"):
            return self._commands.help(source)
        if len(args) != 1:
            source.send_error(f"{PREFIX} Usage: /warp <name>")
            return 0
        if not self._commands.can_use_warp_to(source):
            source.send_error(f"{PREFIX} You don't have permission to teleport.")
            return 0
        return self._commands.warp(source, args[0])

