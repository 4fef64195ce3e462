"""Tests for volume resolution."""

import pytest

from kubebench.errors import (
    ConflictingVolumeSpec,
    UnknownVolumeSource,
    ValidationError,
)
from kubebench.k8s.convert import to_manifest
from kubebench.k8s.volume import resolve_volume
from kubebench.models.definition_models import VolumeSpec

CLAIM_SPEC = {
    "accessModes": ["ReadWriteOnce"],
    "resources": {"requests": {"storage": "1Gi"}},
}


def test_no_volume():
    """Test that an absent or empty declaration resolves to nothing."""
    assert resolve_volume(None, "fio-1", "ns") is None
    assert resolve_volume(VolumeSpec(), "fio-1", "ns") is None
    assert resolve_volume(VolumeSpec(volume_source={}), "fio-1", "ns") is None


def test_volume_source_used_unchanged():
    """Test that an explicit source becomes the data volume."""
    spec = VolumeSpec.model_validate({"volumeSource": {"emptyDir": {}}})

    resolved = resolve_volume(spec, "fio-1", "ns")

    assert resolved is not None
    assert resolved.claim is None
    assert resolved.volume.name == "data"
    assert resolved.volume.empty_dir is not None
    assert resolved.volume.persistent_volume_claim is None


def test_volume_source_fields_preserved():
    """Test that source fields survive the conversion."""
    spec = VolumeSpec.model_validate(
        {"volumeSource": {"hostPath": {"path": "/mnt/disk", "type": "Directory"}}}
    )

    resolved = resolve_volume(spec, "fio-1", "ns")

    assert to_manifest(resolved.volume) == {
        "name": "data",
        "hostPath": {"path": "/mnt/disk", "type": "Directory"},
    }


def test_claim_request_creates_claim():
    """Test that a claim request yields a claim and a volume referencing it."""
    spec = VolumeSpec.model_validate({"persistentVolumeClaimSpec": CLAIM_SPEC})

    resolved = resolve_volume(spec, "fio-1", "ns")

    assert resolved is not None
    claim = resolved.claim
    assert claim.metadata.name == "fio-1"
    assert claim.metadata.namespace == "ns"
    assert claim.spec.access_modes == ["ReadWriteOnce"]
    assert to_manifest(claim)["spec"]["resources"] == {
        "requests": {"storage": "1Gi"}
    }
    assert resolved.volume.name == "data"
    assert resolved.volume.persistent_volume_claim.claim_name == "fio-1"
    assert resolved.volume.empty_dir is None


def test_conflicting_volume_rejected():
    """Test that declaring both a source and a claim is an error."""
    spec = VolumeSpec.model_validate(
        {
            "volumeSource": {"emptyDir": {}},
            "persistentVolumeClaimSpec": CLAIM_SPEC,
        }
    )

    with pytest.raises(ConflictingVolumeSpec) as exc_info:
        resolve_volume(spec, "fio-1", "ns")

    assert isinstance(exc_info.value, ValidationError)
    assert exc_info.value.definition == "fio-1"
    assert exc_info.value.source_keys == ["emptyDir"]
    assert "fio-1" in str(exc_info.value)


def test_unknown_volume_source():
    """Test that a source without a known volume type is rejected."""
    spec = VolumeSpec.model_validate({"volumeSource": {"bogusDisk": {}}})

    with pytest.raises(UnknownVolumeSource) as exc_info:
        resolve_volume(spec, "fio-1", "ns")

    assert exc_info.value.source_keys == ["bogusDisk"]


def test_resolution_is_repeatable():
    """Test that resolving twice gives equal results."""
    spec = VolumeSpec.model_validate({"persistentVolumeClaimSpec": CLAIM_SPEC})

    first = resolve_volume(spec, "fio-1", "ns")
    second = resolve_volume(spec, "fio-1", "ns")

    assert first == second
    assert first.claim is not second.claim
