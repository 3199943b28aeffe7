from __future__ import annotations

from better_warps.permissions import (
    PermissionNodeAuthorizer,
    StaticPermissionResolver,
    WarpAction,
)


class Subject:
    def __init__(self, name: str) -> None:
        self.name = name


def _authorizer(resolver: StaticPermissionResolver) -> PermissionNodeAuthorizer:
    return PermissionNodeAuthorizer(resolver, prefix="simplybetter.warps", default_level=1)


def test_command_nodes_fall_back_to_op_level() -> None:
    resolver = StaticPermissionResolver(op_levels={"op": 1, "guest": 0})
    authorizer = _authorizer(resolver)

    assert authorizer.is_allowed(Subject("op"), WarpAction.SET) is True
    assert authorizer.is_allowed(Subject("guest"), WarpAction.SET) is False


def test_explicit_command_grant_beats_op_level() -> None:
    resolver = StaticPermissionResolver()
    resolver.grant("guest", "simplybetter.warps.basic")
    authorizer = _authorizer(resolver)

    assert authorizer.is_allowed(Subject("guest"), WarpAction.BASIC) is True
    assert authorizer.is_allowed(Subject("guest"), WarpAction.DELETE) is False


def test_per_warp_wildcard_grants_every_warp() -> None:
    resolver = StaticPermissionResolver()
    resolver.grant("guest", "simplybetter.warps.tpto.*")
    authorizer = _authorizer(resolver)

    assert authorizer.is_allowed(Subject("guest"), WarpAction.TELEPORT, "Spawn") is True
    assert authorizer.is_allowed(Subject("guest"), WarpAction.SEE, "spawn") is False


def test_explicit_deny_overrides_wildcard() -> None:
    resolver = StaticPermissionResolver(op_levels={"guest": 4})
    resolver.grant("guest", "simplybetter.warps.see.*")
    resolver.grant("guest", "simplybetter.warps.see.secret", allowed=False)
    authorizer = _authorizer(resolver)

    assert authorizer.is_allowed(Subject("guest"), WarpAction.SEE, "spawn") is True
    assert authorizer.is_allowed(Subject("guest"), WarpAction.SEE, "SECRET") is False


def test_deny_override_can_be_disabled() -> None:
    resolver = StaticPermissionResolver()
    resolver.grant("guest", "simplybetter.warps.see.*")
    resolver.grant("guest", "simplybetter.warps.see.secret", allowed=False)
    authorizer = PermissionNodeAuthorizer(resolver, deny_overrides_wildcard=False)

    assert authorizer.is_allowed(Subject("guest"), WarpAction.SEE, "secret") is True


def test_node_names() -> None:
    authorizer = PermissionNodeAuthorizer(StaticPermissionResolver(), prefix="custom.warps.")

    assert authorizer.node_for(WarpAction.TELEPORT) == "custom.warps.warpto"
    assert authorizer.node_for(WarpAction.TELEPORT, "Spawn") == "custom.warps.tpto.spawn"
    assert authorizer.node_for(WarpAction.RENAME) == "custom.warps.renamewarp"


def test_parent_wildcard_in_resolver() -> None:
    resolver = StaticPermissionResolver()
    resolver.grant("admin", "simplybetter.warps.*")

    assert resolver.value("admin", "simplybetter.warps.delwarp") is True
    assert resolver.value("admin", "other.node") is None

