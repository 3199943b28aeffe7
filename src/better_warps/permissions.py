"""Authorization for warp commands.

Command handlers only ask an :class:`Authorizer` whether a subject may perform
an action, optionally on a named warp. The default authorizer translates those
questions into dotted permission nodes resolved by the host, e.g.
``simplybetter.warps.tpto.spawn``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol


class WarpAction(str, Enum):
    """Things a command source may try to do."""

    BASIC = "basic"
    TELEPORT = "warpto"
    SEE = "see"
    INFO = "warpinfo"
    SET = "setwarp"
    DELETE = "delwarp"
    RENAME = "renamewarp"


# Per-warp node segment for actions that are checked against a specific warp name.
_PER_WARP_NODES = {
    WarpAction.SEE: "see",
    WarpAction.TELEPORT: "tpto",
}


class Authorizer(Protocol):
    def is_allowed(self, subject: Any, action: WarpAction, resource_name: str | None = None) -> bool:
        """Return whether ``subject`` may perform ``action`` (on ``resource_name`` if given)."""


class PermissionResolver(Protocol):
    """Host permission engine."""

    def check(self, subject: Any, node: str, default_level: int) -> bool:
        """Return the effective grant, falling back to ``default_level`` op level when undefined."""

    def value(self, subject: Any, node: str) -> bool | None:
        """Return the explicit grant (``True``), deny (``False``) or ``None`` when undefined."""


class PermissionNodeAuthorizer:
    """Maps warp actions onto ``<prefix>.<node>`` permission strings."""

    def __init__(
        self,
        resolver: PermissionResolver,
        *,
        prefix: str = "simplybetter.warps",
        default_level: int = 1,
        deny_overrides_wildcard: bool = True,
    ) -> None:
        self._resolver = resolver
        self._prefix = prefix.lower().rstrip(".")
        self._default_level = default_level
        self._deny_overrides_wildcard = deny_overrides_wildcard

    def is_allowed(self, subject: Any, action: WarpAction, resource_name: str | None = None) -> bool:
        if resource_name is not None and action in _PER_WARP_NODES:
            return self._check_per_warp(subject, _PER_WARP_NODES[action], resource_name)
        return self._resolver.check(subject, self.node_for(action), self._default_level)

    def node_for(self, action: WarpAction, resource_name: str | None = None) -> str:
        if resource_name is not None and action in _PER_WARP_NODES:
            return f"{self._prefix}.{_PER_WARP_NODES[action]}.{resource_name.lower()}"
        return f"{self._prefix}.{action.value}"

    def _check_per_warp(self, subject: Any, segment: str, resource_name: str) -> bool:
        base = f"{self._prefix}.{segment}"
        specific = f"{base}.{resource_name.lower()}"
        if self._deny_overrides_wildcard and self._resolver.value(subject, specific) is False:
            return False
        if self._resolver.value(subject, f"{base}.*") is True:
            return True
        return self._resolver.check(subject, specific, self._default_level)


@dataclass(slots=True)
class StaticPermissionResolver:
    """In-process resolver backed by explicit node grants and op levels.

    Subjects are identified by ``getattr(subject, "name", subject)``. A node
    that is not granted or denied explicitly falls back to comparing the
    subject's op level with the node's default level. Wildcard grants such
    as ``simplybetter.warps.*`` in ``grants`` match any node below them.
    """

    grants: dict[str, dict[str, bool]] = field(default_factory=dict)
    op_levels: dict[str, int] = field(default_factory=dict)
    default_op_level: int = 0

    def grant(self, subject: str, node: str, allowed: bool = True) -> None:
        self.grants.setdefault(subject, {})[node.lower()] = allowed

    def value(self, subject: Any, node: str) -> bool | None:
        nodes = self.grants.get(self._key(subject), {})
        node = node.lower()
        if node in nodes:
            return nodes[node]
        parts = node.split(".")
        for depth in range(len(parts) - 1, 0, -1):
            wildcard = ".".join(parts[:depth]) + ".*"
            if wildcard != node and wildcard in nodes:
                return nodes[wildcard]
        return None

    def check(self, subject: Any, node: str, default_level: int) -> bool:
        explicit = self.value(subject, node)
        if explicit is not None:
            return explicit
        return self.op_levels.get(self._key(subject), self.default_op_level) >= default_level

    @staticmethod
    def _key(subject: Any) -> str:
        return str(getattr(subject, "name", subject))
