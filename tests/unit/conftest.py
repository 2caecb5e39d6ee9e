"""Shared fixtures for the unit tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
import structlog
from security_builders import make_config

from mp_appsec.application.definition import (
    DefinitionSnapshot,
    SecurityConfiguration,
    load_definition,
)


@pytest.fixture
def config() -> SecurityConfiguration:
    return make_config()


@pytest.fixture
def snapshot(config: SecurityConfiguration) -> DefinitionSnapshot:
    return load_definition(config)


@pytest.fixture
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)
