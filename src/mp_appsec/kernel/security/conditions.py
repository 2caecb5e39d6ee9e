"""Kernel security: ConditionFactory.

A condition factory is a named bag of predicates supplied by the host.  A
policy setting references one of them as ``"<factory>.<function>"``.  Each
predicate is called as ``fn(policy_params, context_params)`` and may return a
boolean or an awaitable resolving to one.
"""
from __future__ import annotations

import dataclasses
import inspect
from collections.abc import Mapping
from typing import Any, Awaitable, Callable

from mp_appsec.kernel.security.resource_type import frozen_mapping

ConditionFunction = Callable[[Mapping[str, Any], Mapping[str, Any]], "bool | Awaitable[bool]"]


@dataclasses.dataclass(frozen=True)
class ConditionFactory:
    name: str
    functions: Mapping[str, ConditionFunction] = dataclasses.field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "functions", frozen_mapping(self.functions))

    @classmethod
    def from_object(cls, name: str, source: Any) -> "ConditionFactory":
        """Collect the public callables of *source* (module, class instance…)."""
        functions = {
            attr: member
            for attr, member in inspect.getmembers(source, callable)
            if not attr.startswith("_")
        }
        return cls(name=name, functions=functions)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ConditionFactory":
        """Build from ``{"factory": name, <fn name>: <callable>, ...}``."""
        name = data.get("factory", data.get("name"))
        functions = {k: v for k, v in data.items() if k not in ("factory", "name") and callable(v)}
        return cls(name=name, functions=functions)

    def get(self, function: str) -> ConditionFunction | None:
        return self.functions.get(function)


def split_condition(condition: str) -> tuple[str, str] | None:
    """Split ``"factory.function"``; ``None`` when the string has no period."""
    factory, sep, function = condition.partition(".")
    if not sep or not factory or not function:
        return None
    return factory, function


__all__ = ["ConditionFactory", "ConditionFunction", "split_condition"]
