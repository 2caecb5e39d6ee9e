"""Unit tests for the kernel security records."""

from __future__ import annotations

import types

import pytest

from mp_appsec.kernel.security import (
    ConditionFactory,
    Environment,
    Policy,
    PolicyResourceGrant,
    PolicySetting,
    ProtectedResource,
    ResourceType,
    Role,
    RolePolicy,
    RoleSettingSelection,
    Setting,
    User,
    parse_environments,
    selection_label,
    split_condition,
)


# ---------------------------------------------------------------------------
# Environments
# ---------------------------------------------------------------------------


class TestParseEnvironments:
    def test_comma_separated_string(self) -> None:
        assert parse_environments("client, server") == frozenset({"client", "server"})

    def test_single_string(self) -> None:
        assert parse_environments("client") == frozenset({"client"})

    def test_enum_members(self) -> None:
        assert parse_environments([Environment.SERVER]) == frozenset({"server"})

    def test_empty(self) -> None:
        assert parse_environments(None) == frozenset()
        assert parse_environments("") == frozenset()

    def test_unknown_names_are_kept_for_validation(self) -> None:
        assert parse_environments("mobile") == frozenset({"mobile"})


# ---------------------------------------------------------------------------
# Setting / ResourceType
# ---------------------------------------------------------------------------


class TestSetting:
    def test_params_are_read_only(self) -> None:
        setting = Setting("show", 1, {"css": "visible"})
        with pytest.raises(TypeError):
            setting.params["css"] = "hidden"  # type: ignore[index]

    def test_frozen(self) -> None:
        setting = Setting("show", 1)
        with pytest.raises((AttributeError, TypeError)):
            setting.value = "hide"  # type: ignore[misc]

    def test_from_mapping_collects_extra_keys_as_params(self) -> None:
        setting = Setting.from_mapping({"value": "hide", "priority": 0, "css": "d-none"})
        assert setting.value == "hide"
        assert setting.priority == 0
        assert dict(setting.params) == {"css": "d-none"}

    def test_from_mapping_leaves_missing_priority_unset(self) -> None:
        setting = Setting.from_mapping({"value": "show", "prority": 5})
        assert setting.priority is None
        assert dict(setting.params) == {"prority": 5}

    def test_merged_with_keeps_value_and_priority(self) -> None:
        setting = Setting("on", 1, {"tier": "basic", "limit": 5})
        merged = setting.merged_with({"tier": "gold"})
        assert merged.value == "on"
        assert merged.priority == 1
        assert dict(merged.params) == {"tier": "gold", "limit": 5}
        assert dict(setting.params) == {"tier": "basic", "limit": 5}

    def test_merged_with_nothing_is_identity(self) -> None:
        setting = Setting("on", 1)
        assert setting.merged_with({}) is setting


class TestResourceType:
    def test_target_defaults_to_name(self) -> None:
        assert ResourceType("AppMenuItem", "client", (Setting("show", 1),)).target == "AppMenuItem"

    def test_environments_parsed_from_string(self) -> None:
        resource_type = ResourceType("Feature", "client,server", (Setting("on", 1),))
        assert resource_type.supports(Environment.CLIENT)
        assert resource_type.supports("server")

    def test_from_mapping_accepts_env_key(self) -> None:
        resource_type = ResourceType.from_mapping(
            {
                "name": "screenForm",
                "env": "client",
                "settings": [{"value": "readOnly", "priority": 1}, {"value": "edit", "priority": 0}],
            }
        )
        assert resource_type.environments == frozenset({"client"})
        assert resource_type.setting_values == ["readOnly", "edit"]
        assert resource_type.find_setting("edit") == Setting("edit", 0)
        assert resource_type.find_setting("create") is None

    def test_to_dict_omits_apply(self) -> None:
        resource_type = ResourceType("Api", "server", (Setting("allowed", 1),), apply=lambda s, c: True)
        data = resource_type.to_dict()
        assert "apply" not in data
        assert data["env"] == ["server"]
        assert data["settings"] == [{"value": "allowed", "priority": 1}]


# ---------------------------------------------------------------------------
# ProtectedResource / Policy
# ---------------------------------------------------------------------------


class TestProtectedResource:
    def test_from_mapping(self) -> None:
        resource = ProtectedResource.from_mapping(
            {"name": "Account menu", "type": "AppMenuItem", "locator": "accountOption", "defaultSetting": "show"}
        )
        assert resource.default_setting == "show"
        assert resource.to_dict()["defaultSetting"] == "show"

    def test_id_does_not_affect_equality(self) -> None:
        a = ProtectedResource("A", "T", "a", "show")
        b = ProtectedResource("A", "T", "a", "show")
        assert a.id != b.id
        assert a == b


class TestPolicy:
    def _mapping(self) -> dict:
        return {
            "name": "Account Policy",
            "description": "Account Security Policy",
            "defaultSetting": "read",
            "settings": [
                {
                    "setting": "read",
                    "notes": "review accounts",
                    "protectedResources": [
                        {"resource": "Account menu", "setting": "show"},
                        {"resource": "Account Screen Form", "setting": "readOnly", "params": {"x": 1}},
                    ],
                },
                {"setting": "own", "condition": "account.isOwner"},
            ],
        }

    def test_from_mapping(self) -> None:
        policy = Policy.from_mapping(self._mapping())
        assert policy.default_setting == "read"
        read = policy.find_setting("read")
        assert read is not None
        assert read.protected_resources[1] == PolicyResourceGrant("Account Screen Form", "readOnly", {"x": 1})
        assert policy.find_setting("own").condition == "account.isOwner"
        assert policy.find_setting("delete") is None

    def test_missing_settings_is_none(self) -> None:
        assert Policy.from_mapping({"name": "Empty"}).settings is None

    def test_to_dict_roundtrips_wire_keys(self) -> None:
        data = Policy.from_mapping(self._mapping()).to_dict()
        assert data["defaultSetting"] == "read"
        assert data["settings"][0]["protectedResources"][0] == {
            "resource": "Account menu",
            "setting": "show",
            "params": {},
        }

    def test_with_params_replaces_params_only(self) -> None:
        ps = PolicySetting("own", condition="account.isOwner", params={"a": 1})
        replaced = ps.with_params({"b": 2})
        assert dict(replaced.params) == {"b": 2}
        assert replaced.condition == "account.isOwner"
        assert dict(ps.params) == {"a": 1}


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------


class TestConditions:
    def test_split_condition(self) -> None:
        assert split_condition("account.isOwner") == ("account", "isOwner")

    @pytest.mark.parametrize("raw", ["account", "account.", ".isOwner", ""])
    def test_split_condition_rejects_malformed(self, raw: str) -> None:
        assert split_condition(raw) is None

    def test_from_mapping(self) -> None:
        def is_owner(params, context):
            return True

        factory = ConditionFactory.from_mapping({"factory": "account", "isOwner": is_owner})
        assert factory.name == "account"
        assert factory.get("isOwner") is is_owner
        assert factory.get("missing") is None

    def test_from_object_collects_public_callables(self) -> None:
        source = types.SimpleNamespace(
            isOwner=lambda p, c: True,
            _private=lambda p, c: False,
            label="not callable",
        )
        factory = ConditionFactory.from_object("account", source)
        assert set(factory.functions) == {"isOwner"}


# ---------------------------------------------------------------------------
# Principal / Role
# ---------------------------------------------------------------------------


class TestUser:
    def test_user_without_role_is_unrestricted(self) -> None:
        assert User("u1").is_unrestricted is True

    def test_tenant_admin_is_unrestricted(self) -> None:
        assert User("u1", permission_role_code="editor", is_tenant_admin=True).is_unrestricted

    def test_user_with_role_is_restricted(self) -> None:
        assert User("u1", permission_role_code="editor").is_unrestricted is False

    def test_str_prefers_display(self) -> None:
        assert str(User("u1", display="Jane")) == "Jane"
        assert str(User("u1")) == "u1"


class TestRole:
    def test_from_mapping_with_plain_and_parameterised_selections(self) -> None:
        role = Role.from_mapping(
            {
                "description": "Editor",
                "policies": [
                    {
                        "name": "Account Policy",
                        "settings": ["read", {"value": "own", "params": {"departments": ["sales"]}}],
                    }
                ],
            }
        )
        role_policy = role.find_policy("Account Policy")
        assert role_policy is not None
        assert role_policy.settings[0] == "read"
        assert role_policy.settings[1] == RoleSettingSelection("own", {"departments": ["sales"]})
        assert role.find_policy("Other") is None

    def test_selection_label(self) -> None:
        assert selection_label("read") == "read"
        assert selection_label(RoleSettingSelection("own")) == "own"

    def test_role_policy_settings_are_tuples(self) -> None:
        assert RolePolicy("P", ["a", "b"]).settings == ("a", "b")
