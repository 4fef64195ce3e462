"""Kubernetes object helpers used by the workload builders."""

from kubebench.k8s.convert import to_manifest, to_model, to_models
from kubebench.k8s.pod import (
    ContainerSet,
    PodTemplate,
    build_pod_template,
    merge_labels,
    system_labels,
)
from kubebench.k8s.volume import ResolvedVolume, resolve_volume

__all__ = [
    "ContainerSet",
    "PodTemplate",
    "ResolvedVolume",
    "build_pod_template",
    "merge_labels",
    "resolve_volume",
    "system_labels",
    "to_manifest",
    "to_model",
    "to_models",
]
