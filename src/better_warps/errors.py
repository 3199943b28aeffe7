"""Error taxonomy for warp storage and command handling."""


class WarpError(Exception):
    """Base class for all warp plugin errors."""


class WarpNotFoundError(WarpError, KeyError):
    """Raised when a warp name is not present in the registry."""

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Warp not found: {self.name}"


class InvalidArgumentError(WarpError, ValueError):
    """Raised for malformed warp names, dimension ids or stored records."""


class WarpStorageError(WarpError):
    """Raised when the warp document cannot be read or written."""


class PreconditionError(WarpError):
    """Raised when an operation runs before the store is initialized."""


class TeleportError(WarpError):
    """Raised by teleporters when the host refuses or fails a teleport."""
