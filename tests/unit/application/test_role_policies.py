"""Unit tests for turning a role into its active policy settings."""

from __future__ import annotations

import pytest

from mp_appsec.application.definition import DefinitionSnapshot
from mp_appsec.application.resolution import (
    RolePolicies,
    collect_role_policy_settings,
    filter_role_policies,
    resolve_role_policies,
)
from mp_appsec.kernel.errors import UnknownPolicySettingError
from mp_appsec.kernel.security import Environment, Role, RolePolicy, RoleSettingSelection


class TestCollectRolePolicySettings:
    def test_labels_map_to_policy_settings(self, snapshot: DefinitionSnapshot) -> None:
        policy = snapshot.find_policy("Account Policy")
        settings = collect_role_policy_settings(["update", "read"], policy)
        assert [s.setting for s in settings] == ["update", "read"]

    def test_unknown_label(self, snapshot: DefinitionSnapshot) -> None:
        with pytest.raises(UnknownPolicySettingError) as exc_info:
            collect_role_policy_settings(["delete"], snapshot.find_policy("Account Policy"))
        assert exc_info.value.policy == "Account Policy"
        assert exc_info.value.setting == "delete"

    def test_role_params_replace_setting_params(self, snapshot: DefinitionSnapshot) -> None:
        policy = snapshot.find_policy("Account Policy")
        (own,) = collect_role_policy_settings(
            [RoleSettingSelection("own", {"departments": ["sales"]})], policy
        )
        assert dict(own.params) == {"departments": ["sales"]}
        assert dict(policy.find_setting("own").params) == {}


class TestResolveRolePolicies:
    def test_role_selection_wins(self, snapshot: DefinitionSnapshot) -> None:
        role = Role(
            "Editor",
            (RolePolicy("Account Policy", ("update",)), RolePolicy("Reports Policy", ("full",))),
        )
        resolved = resolve_role_policies(snapshot, role)
        assert resolved.description == "Editor"
        assert [(p.name, [s.setting for s in p.settings]) for p in resolved] == [
            ("Account Policy", ["update"]),
            ("Reports Policy", ["full"]),
        ]

    def test_policy_default_used_when_role_is_silent(self, snapshot: DefinitionSnapshot) -> None:
        resolved = resolve_role_policies(snapshot, Role("Viewer", (RolePolicy("Account Policy", ("read",)),)))
        assert [p.name for p in resolved] == ["Account Policy", "Reports Policy"]
        assert [s.setting for s in resolved.policies[1].settings] == ["none"]

    def test_policy_without_default_contributes_nothing(self, snapshot: DefinitionSnapshot) -> None:
        resolved = resolve_role_policies(snapshot, Role("Nobody"))
        assert [p.name for p in resolved] == ["Reports Policy"]

    def test_follows_snapshot_policy_order(self, snapshot: DefinitionSnapshot) -> None:
        role = Role(
            "Editor",
            (RolePolicy("Reports Policy", ("full",)), RolePolicy("Account Policy", ("read",))),
        )
        assert [p.name for p in resolve_role_policies(snapshot, role)] == [
            "Account Policy",
            "Reports Policy",
        ]

    def test_to_list(self, snapshot: DefinitionSnapshot) -> None:
        resolved = resolve_role_policies(snapshot, Role("Viewer", (RolePolicy("Account Policy", ("read",)),)))
        data = resolved.to_list()
        assert data[0]["name"] == "Account Policy"
        assert data[0]["settings"][0]["setting"] == "read"

    def test_empty_role_policies(self) -> None:
        empty = RolePolicies("Admin")
        assert len(empty) == 0
        assert list(empty) == []


class TestFilterRolePolicies:
    def test_client_keeps_client_grants_only(self, snapshot: DefinitionSnapshot) -> None:
        role = Role("Editor", (RolePolicy("Account Policy", ("update", "own")),))
        filtered = filter_role_policies(snapshot, resolve_role_policies(snapshot, role), Environment.CLIENT)
        assert [p.name for p in filtered] == ["Account Policy"]
        (update,) = filtered[0].settings
        assert [g.resource for g in update.protected_resources] == ["Account menu", "Account Screen Form"]

    def test_server_keeps_server_grants_only(self, snapshot: DefinitionSnapshot) -> None:
        role = Role("Editor", (RolePolicy("Account Policy", ("read",)),))
        filtered = filter_role_policies(snapshot, resolve_role_policies(snapshot, role), "server")
        assert filtered == []
