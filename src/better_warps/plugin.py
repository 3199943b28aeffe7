"""Server lifecycle wiring for the warp plugin."""

from __future__ import annotations

import logging
import shlex
from pathlib import Path
from typing import Callable, Protocol

from better_warps.adapters.teleport import Teleporter
from better_warps.commands import CommandDispatcher, WarpCommands
from better_warps.config import Settings
from better_warps.permissions import Authorizer
from better_warps.registry import WarpRegistry
from better_warps.storage import JsonWarpStore

CommandRegistrar = Callable[[str, Callable[..., int]], None]


class ServerHandle(Protocol):
    """What the plugin needs from the host server at startup."""

    @property
    def run_directory(self) -> Path: ...


class WarpPlugin:
    """Owns the registry and store for one server process.

    The host calls :meth:`on_server_starting` before any command is accepted
    and :meth:`on_server_stopping` on shutdown. Commands registered earlier
    are safe to invoke before start: the registry is empty and saves are
    logged and skipped until the store knows its file.
    """

    def __init__(
        self,
        *,
        settings: Settings,
        authorizer: Authorizer,
        teleporter: Teleporter,
        logger: logging.Logger | None = None,
    ) -> None:
        self._settings = settings
        self._logger = logger or logging.getLogger("better_warps.plugin")
        self.store = JsonWarpStore()
        self.registry = WarpRegistry(self.store, persist_on_mutation=settings.persist_on_mutation)
        self.commands = WarpCommands(self.registry, authorizer, teleporter)
        self.dispatcher = CommandDispatcher(self.commands)
        self._logger.info("warp_plugin_initialized", extra={"app_name": settings.app_name})

    def on_server_starting(self, server: ServerHandle | None = None) -> None:
        run_dir = server.run_directory if server is not None else self._settings.run_dir
        warps_file = self._settings.warps_file
        path = warps_file if warps_file.is_absolute() else Path(run_dir) / warps_file
        self.store.bind(path)
        self.registry.load()
        self._logger.info("warp_plugin_started", extra={"path": str(path), "warp_count": len(self.registry)})

    def on_server_stopping(self, server: ServerHandle | None = None) -> None:
        self.registry.save()
        self._logger.info("warp_plugin_stopped", extra={"warp_count": len(self.registry)})

    def register_commands(self, register: CommandRegistrar) -> None:
        """Hand each command line root to the host dispatcher."""
        for name in self.dispatcher.command_names:
            register(name, self._bind(name))
        self._logger.info("warp_commands_registered", extra={"commands": self.dispatcher.command_names})

    def _bind(self, name: str) -> Callable[..., int]:
        def _run(source, *args: str) -> int:
            return self.dispatcher.execute(source, shlex.join([name, *args]))

        return _run
