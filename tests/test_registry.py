"""Tests for the kind registry."""

import pytest

from kubebench.builders.fio import FioBuilder
from kubebench.builders.qperf import QperfBuilder
from kubebench.builders.registry import (
    KindNameCollisionError,
    KindNotFoundError,
    KindRegistry,
    KindRegistryError,
    default_registry,
)
from kubebench.models.settings import CompilerSettings


def test_default_registry_kinds():
    """Test that every built-in kind is registered."""
    registry = default_registry()

    assert len(registry) == 5
    assert sorted(registry) == ["Fio", "Ioping", "Iperf3", "Qperf", "Sysbench"]
    assert "Fio" in registry
    assert "fio" not in registry


def test_get_builder():
    """Test builder lookup by kind."""
    registry = default_registry()

    builder = registry.get_builder("Qperf")

    assert isinstance(builder, QperfBuilder)
    assert builder.tool == "qperf"


def test_get_builder_unknown():
    """Test that an unknown kind raises with the known kinds listed."""
    registry = default_registry()

    with pytest.raises(KindNotFoundError) as exc_info:
        registry.get_builder("Netperf")

    assert isinstance(exc_info.value, KindRegistryError)
    assert exc_info.value.name == "Netperf"
    assert "Fio, Ioping, Iperf3, Qperf, Sysbench" in str(exc_info.value)


def test_name_collision():
    """Test that two builders for one kind are rejected."""
    first, second = FioBuilder(), FioBuilder()

    with pytest.raises(KindNameCollisionError) as exc_info:
        KindRegistry([first, second])

    assert exc_info.value.name == "Fio"
    assert exc_info.value.builder1 is first
    assert exc_info.value.builder2 is second


def test_registry_is_read_only():
    """Test that the table cannot be changed after construction."""
    registry = KindRegistry([FioBuilder()])

    with pytest.raises(TypeError):
        registry._builders["Qperf"] = QperfBuilder()  # type: ignore[index]


def test_list_kinds():
    """Test kind summaries."""
    kinds = default_registry().list_kinds()

    assert [k["name"] for k in kinds] == [
        "Fio",
        "Ioping",
        "Iperf3",
        "Qperf",
        "Sysbench",
    ]
    shapes = {k["name"]: k["shape"] for k in kinds}
    assert shapes["Fio"] == "job"
    assert shapes["Iperf3"] == "client-server"
    assert all(k["description"] for k in kinds)


def test_settings_shared_by_builders():
    """Test that registry builders use the given settings."""
    settings = CompilerSettings(job_backoff_limit=1)
    registry = default_registry(settings)

    assert all(registry.get_builder(kind).settings is settings for kind in registry)
