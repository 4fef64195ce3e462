"""Resolve a declared volume into exactly one concrete volume source."""

from dataclasses import dataclass

from kubernetes import client

from kubebench.errors import ConflictingVolumeSpec, UnknownVolumeSource
from kubebench.k8s.convert import to_manifest, to_model
from kubebench.models.constants import DATA_VOLUME_NAME
from kubebench.models.definition_models import VolumeSpec
from kubebench.utils.logger import Logger


@dataclass(frozen=True)
class ResolvedVolume:
    """A ``data`` volume plus the claim that must exist for it, if any."""

    volume: client.V1Volume
    claim: client.V1PersistentVolumeClaim | None = None


def resolve_volume(
    spec: VolumeSpec | None, claim_name: str, namespace: str
) -> ResolvedVolume | None:
    """Resolve a volume declaration.

    A claim request is turned into a PersistentVolumeClaim named
    ``claim_name`` and a volume referencing it. An explicit source is used
    unchanged.

    Args:
        spec: The declared volume, or None.
        claim_name: Name for a requested claim (the definition name).
        namespace: Namespace of the definition.

    Returns:
        None when no volume is declared.

    Raises:
        ConflictingVolumeSpec: If both a source and a claim are declared.
        UnknownVolumeSource: If the source has no recognised volume type.
    """
    if spec is None:
        return None

    source = spec.volume_source or None
    claim_spec = spec.persistent_volume_claim_spec or None

    if source and claim_spec:
        Logger.component("k8s.volume").error(
            f"{claim_name}: both volumeSource and persistentVolumeClaimSpec set"
        )
        raise ConflictingVolumeSpec(claim_name, sorted(source))

    if claim_spec:
        claim = client.V1PersistentVolumeClaim(
            api_version="v1",
            kind="PersistentVolumeClaim",
            metadata=client.V1ObjectMeta(name=claim_name, namespace=namespace),
            spec=to_model(claim_spec, "V1PersistentVolumeClaimSpec", claim_name),
        )
        volume = client.V1Volume(
            name=DATA_VOLUME_NAME,
            persistent_volume_claim=client.V1PersistentVolumeClaimVolumeSource(
                claim_name=claim_name
            ),
        )
        return ResolvedVolume(volume=volume, claim=claim)

    if source:
        volume = to_model({**source, "name": DATA_VOLUME_NAME}, "V1Volume", claim_name)
        if set(to_manifest(volume)) == {"name"}:
            raise UnknownVolumeSource(claim_name, sorted(source))
        return ResolvedVolume(volume=volume)

    return None
