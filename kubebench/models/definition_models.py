"""Pydantic models for benchmark definition documents.

Definitions are read in their Kubernetes wire form (camelCase keys).
Container, scheduling and volume source fields keep the plain Kubernetes
shape and are converted to client models only when workloads are built.
"""

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from kubebench.models.constants import API_VERSION, MAX_NAME_LENGTH


class WireModel(BaseModel):
    """Base for models parsed from camelCase documents."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


# ============================================================================
# Shared configuration blocks
# ============================================================================


class ImageSpec(WireModel):
    """Container image used by the benchmark's target container."""

    name: str = Field(..., min_length=1, description="Image reference")
    pull_policy: Literal["Always", "IfNotPresent", "Never"] | None = Field(
        None, description="Image pull policy for the target container"
    )
    pull_secret: str | None = Field(
        None, description="Name of an image pull secret in the same namespace"
    )


class VolumeSpec(WireModel):
    """Storage for the benchmark: an existing source or a claim to create."""

    volume_source: dict[str, Any] | None = Field(
        None, description="Kubernetes volume source, e.g. {'emptyDir': {}}"
    )
    persistent_volume_claim_spec: dict[str, Any] | None = Field(
        None, description="Spec of a PersistentVolumeClaim created for the run"
    )


class PodScheduling(WireModel):
    """Scheduling constraints copied verbatim onto the pod spec."""

    affinity: dict[str, Any] | None = None
    tolerations: list[dict[str, Any]] = Field(default_factory=list)
    node_selector: dict[str, str] = Field(default_factory=dict)


class PodConfiguration(WireModel):
    """Pod level settings shared by every benchmark kind."""

    pod_labels: dict[str, str] = Field(default_factory=dict)
    containers: list[dict[str, Any]] = Field(default_factory=list)
    init_containers: list[dict[str, Any]] = Field(default_factory=list)
    pod_scheduling: PodScheduling = Field(default_factory=PodScheduling)


class BenchmarkConfiguration(WireModel):
    """One side of a benchmark: arguments, pod settings, storage and image."""

    cmd_line_args: str = Field("", description="Arguments passed to the tool")
    pod_config: PodConfiguration = Field(default_factory=PodConfiguration)
    volume: VolumeSpec | None = None
    image: ImageSpec | None = None


class BenchmarkStatus(WireModel):
    """Status subresource reported back onto the definition."""

    running: bool = False
    completed: bool = False


class DefinitionMeta(BaseModel):
    """The subset of object metadata the compiler reads."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    name: str = Field(
        ...,
        max_length=MAX_NAME_LENGTH,
        pattern=r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$",
        description="RFC 1123 label, used to derive every workload name",
    )
    namespace: str | None = None


# ============================================================================
# Benchmark kinds
# ============================================================================


class BenchmarkDefinition(WireModel):
    """Base for all benchmark definition documents."""

    model_config = ConfigDict(extra="ignore")

    api_version: Literal["perf.kubebench.io/v1alpha1"] = API_VERSION
    kind: str
    metadata: DefinitionMeta
    status: BenchmarkStatus = Field(default_factory=BenchmarkStatus)

    @property
    def name(self) -> str:
        """Definition name."""
        return self.metadata.name

    def namespace_or(self, default: str) -> str:
        """Definition namespace, falling back to ``default``."""
        return self.metadata.namespace or default


class FioSpec(BenchmarkConfiguration):
    """Fio job configuration."""

    builtin_job_files: list[str] = Field(
        default_factory=list, description="Job files shipped in the image at /jobs"
    )
    custom_job_files: list[str] = Field(
        default_factory=list, description="Contents of user supplied job files"
    )


class Fio(BenchmarkDefinition):
    """Fio disk I/O benchmark."""

    kind: Literal["Fio"] = "Fio"
    spec: FioSpec = Field(default_factory=FioSpec)


class Ioping(BenchmarkDefinition):
    """Ioping disk latency benchmark."""

    kind: Literal["Ioping"] = "Ioping"
    spec: BenchmarkConfiguration = Field(default_factory=BenchmarkConfiguration)


class Sysbench(BenchmarkDefinition):
    """Sysbench system micro-benchmark."""

    kind: Literal["Sysbench"] = "Sysbench"
    spec: BenchmarkConfiguration = Field(default_factory=BenchmarkConfiguration)


class ClientServerSpec(WireModel):
    """Spec for benchmarks made of a server deployment and a client job."""

    host_network: bool = Field(
        False, description="Run server and client in the node network namespace"
    )
    server_configuration: BenchmarkConfiguration = Field(
        default_factory=BenchmarkConfiguration
    )
    client_configuration: BenchmarkConfiguration = Field(
        default_factory=BenchmarkConfiguration
    )


class Iperf3Spec(ClientServerSpec):
    """Iperf3 spec."""

    udp: bool = Field(False, description="Measure UDP instead of TCP")


class Iperf3(BenchmarkDefinition):
    """Iperf3 network throughput benchmark."""

    kind: Literal["Iperf3"] = "Iperf3"
    spec: Iperf3Spec = Field(default_factory=Iperf3Spec)


class Qperf(BenchmarkDefinition):
    """Qperf network bandwidth and latency benchmark."""

    kind: Literal["Qperf"] = "Qperf"
    spec: ClientServerSpec = Field(default_factory=ClientServerSpec)


def document_name(document: Any) -> str:
    """Best effort name of a raw definition document, for error messages."""
    metadata = document.get("metadata") if isinstance(document, Mapping) else None
    name = metadata.get("name") if isinstance(metadata, Mapping) else None
    return str(name or "<unnamed>")
