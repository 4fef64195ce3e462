"""Pydantic models for benchmark definitions and compiler settings."""

from kubebench.models.constants import Kind, Role, Shape
from kubebench.models.definition_models import (
    BenchmarkConfiguration,
    BenchmarkDefinition,
    BenchmarkStatus,
    ClientServerSpec,
    DefinitionMeta,
    Fio,
    FioSpec,
    ImageSpec,
    Ioping,
    Iperf3,
    Iperf3Spec,
    PodConfiguration,
    PodScheduling,
    Qperf,
    Sysbench,
    VolumeSpec,
    document_name,
)
from kubebench.models.settings import CompilerSettings, ProbeSettings

__all__ = [
    "BenchmarkConfiguration",
    "BenchmarkDefinition",
    "BenchmarkStatus",
    "ClientServerSpec",
    "CompilerSettings",
    "DefinitionMeta",
    "Fio",
    "FioSpec",
    "ImageSpec",
    "Ioping",
    "Iperf3",
    "Iperf3Spec",
    "Kind",
    "PodConfiguration",
    "PodScheduling",
    "ProbeSettings",
    "Qperf",
    "Role",
    "Shape",
    "Sysbench",
    "VolumeSpec",
    "document_name",
]
