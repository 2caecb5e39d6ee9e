"""Unit tests for compiling a user's policies against a snapshot."""

from __future__ import annotations

import pytest
from security_builders import make_config

from mp_appsec.application.definition import DefinitionSnapshot, load_definition
from mp_appsec.application.resolution import (
    ResolvedRolePolicy,
    build_resource_setting,
    compile_user_policy,
    resolve_role_policies,
)
from mp_appsec.kernel.errors import (
    ConfigurationError,
    UnknownConditionFactoryError,
    UnknownConditionFunctionError,
    UnknownResourceError,
)
from mp_appsec.kernel.security import (
    Environment,
    Policy,
    PolicyResourceGrant,
    PolicySetting,
    Role,
    RolePolicy,
    Setting,
)


def editor_role() -> Role:
    return Role(
        "Editor",
        (RolePolicy("Account Policy", ("update", "own")), RolePolicy("Reports Policy", ("full",))),
    )


class TestCompileUserPolicy:
    def test_every_dictionary_resource_is_compiled(self, snapshot: DefinitionSnapshot) -> None:
        compiled = compile_user_policy(snapshot, resolve_role_policies(snapshot, Role("Nobody")))
        assert len(compiled) == 4
        assert all(not r.settings for r in compiled.resources.values())

    def test_contributions_keep_enumeration_order(self, snapshot: DefinitionSnapshot) -> None:
        compiled = compile_user_policy(snapshot, resolve_role_policies(snapshot, editor_role()))
        update_account = compiled.get_protected_resource_by_locator("api.account.updateOne")
        assert [c.policy_setting.setting for c in update_account.settings] == ["update", "own"]
        assert [c.setting.value for c in update_account.settings] == ["allowed", "allowed"]
        assert update_account.default_setting == Setting("denied", 0)

    def test_grant_params_extend_type_params(self, snapshot: DefinitionSnapshot) -> None:
        compiled = compile_user_policy(snapshot, resolve_role_policies(snapshot, editor_role()))
        (contributed,) = compiled.get_protected_resource_by_locator("feature.reports").settings
        assert contributed.setting.value == "on"
        assert contributed.setting.priority == 1
        assert dict(contributed.params) == {"tier": "gold"}

    def test_server_compilation_skips_client_resources(self, snapshot: DefinitionSnapshot) -> None:
        compiled = compile_user_policy(
            snapshot, resolve_role_policies(snapshot, editor_role()), Environment.SERVER
        )
        assert sorted(compiled.resources) == ["Reports", "Update account"]
        with pytest.raises(UnknownResourceError):
            compiled.get_protected_resource_by_locator("accountOption")

    def test_resources_by_target(self, snapshot: DefinitionSnapshot) -> None:
        compiled = compile_user_policy(snapshot, ())
        assert [r.name for r in compiled.get_protected_resources_by_target("api")] == ["Update account"]
        assert [r.name for r in compiled.get_protected_resources_by_target("AppMenuItem")] == ["Account menu"]

    def test_snapshot_is_not_modified(self, snapshot: DefinitionSnapshot) -> None:
        before = snapshot.to_dict()
        compile_user_policy(snapshot, resolve_role_policies(snapshot, editor_role()))
        assert snapshot.to_dict() == before

    def test_unknown_locator(self, snapshot: DefinitionSnapshot) -> None:
        compiled = compile_user_policy(snapshot, ())
        with pytest.raises(UnknownResourceError) as exc_info:
            compiled.get_protected_resource_by_locator("api.nowhere")
        assert exc_info.value.locator == "api.nowhere"

    def test_grant_on_missing_resource(self, snapshot: DefinitionSnapshot) -> None:
        policy = Policy("Rogue", settings=(PolicySetting("all", protected_resources=(PolicyResourceGrant("Ghost", "show"),)),))
        with pytest.raises(UnknownResourceError) as exc_info:
            compile_user_policy(snapshot, [ResolvedRolePolicy(policy, policy.settings)])
        assert exc_info.value.message == "Resource [Ghost] does not exist in dictionary"
        assert exc_info.value.context == ["Issue with policy [Rogue] setting [all]"]


class TestConditionBinding:
    def _snapshot_with_condition(self, condition: str) -> DefinitionSnapshot:
        policy = Policy(
            "Guarded",
            settings=(
                PolicySetting(
                    "own",
                    condition=condition,
                    protected_resources=(PolicyResourceGrant("Account menu", "hide"),),
                ),
            ),
        )
        return load_definition(make_config(policies=[policy]))

    def _compile(self, snapshot: DefinitionSnapshot) -> None:
        role = Role("Guarded", (RolePolicy("Guarded", ("own",)),))
        compile_user_policy(snapshot, resolve_role_policies(snapshot, role))

    def test_unknown_factory_fails_compilation(self) -> None:
        snapshot = self._snapshot_with_condition("missing.isOwner")
        with pytest.raises(UnknownConditionFactoryError) as exc_info:
            self._compile(snapshot)
        assert exc_info.value.context == [
            "Unknown security condition [missing.isOwner] for policy setting [own]"
        ]

    def test_unknown_function_fails_compilation(self) -> None:
        snapshot = self._snapshot_with_condition("account.isManager")
        with pytest.raises(UnknownConditionFunctionError):
            self._compile(snapshot)

    def test_unselected_setting_is_not_bound(self) -> None:
        snapshot = self._snapshot_with_condition("missing.isOwner")
        compiled = compile_user_policy(snapshot, resolve_role_policies(snapshot, Role("Nobody")))
        assert compiled.get_protected_resource_by_locator("accountOption").settings == ()


class TestBuildResourceSetting:
    def test_unknown_value(self, snapshot: DefinitionSnapshot) -> None:
        with pytest.raises(ConfigurationError):
            build_resource_setting(snapshot.find_resource_type("AppMenuItem"), "edit", None)

    def test_params_cannot_override_value_or_priority(self, snapshot: DefinitionSnapshot) -> None:
        setting = build_resource_setting(
            snapshot.find_resource_type("AppMenuItem"), "show", {"value": "hide", "priority": -1}
        )
        assert setting.value == "show"
        assert setting.priority == 1
