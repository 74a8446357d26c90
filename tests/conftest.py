"""Shared fixtures for Tabletkeeper tests."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from tabletkeeper.config import TabletkeeperConfig
from tabletkeeper.core.profiles import IteratorProfileRegistry
from tabletkeeper.engine.base import TableOperations
from tabletkeeper.models import IteratorSetting


@pytest.fixture
def config():
    """Default Tabletkeeper configuration for tests."""
    return TabletkeeperConfig(
        log_level="WARNING",
        known_tables=["events", "logs", "metrics"],
    )


@pytest.fixture
def ageoff_iterators():
    """Iterator stages of the 'ageoff' profile."""
    return [
        IteratorSetting(
            priority=10,
            name="ageoff",
            iterator_class="org.apache.accumulo.core.iterators.user.AgeOffFilter",
            options={"ttl": "86400000"},
        ),
        IteratorSetting(
            priority=20,
            name="vers",
            iterator_class="org.apache.accumulo.core.iterators.user.VersioningIterator",
            options={"maxVersions": "1"},
        ),
    ]


@pytest.fixture
def profiles(ageoff_iterators):
    """Registry holding the 'ageoff' profile."""
    return IteratorProfileRegistry({"ageoff": ageoff_iterators})


@pytest.fixture
def mock_table_ops():
    """Mock table operations backend."""
    table_ops = MagicMock(spec=TableOperations)
    table_ops.list_tables.return_value = ["events", "logs", "metrics"]
    return table_ops


@pytest.fixture
def config_yaml(tmp_path):
    """YAML configuration file with known tables and one iterator profile."""
    path = tmp_path / "tabletkeeper.yaml"
    path.write_text(
        "log_level: WARNING\n"
        "known_tables: [events, logs, metrics]\n"
        "iterator_profiles:\n"
        "  ageoff:\n"
        "    - priority: 10\n"
        "      name: ageoff\n"
        "      iterator_class: org.apache.accumulo.core.iterators.user.AgeOffFilter\n"
        "      options:\n"
        "        ttl: 86400000\n"
    )
    return path
