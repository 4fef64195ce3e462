"""Base class for benchmark workload builders."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

import pydantic
from kubernetes import client

from kubebench.errors import CompileError, InvalidDefinitionError
from kubebench.k8s.convert import to_manifest
from kubebench.k8s.pod import PodTemplate
from kubebench.models.constants import DEFAULT_IMAGES, Kind, Shape
from kubebench.models.definition_models import (
    BenchmarkConfiguration,
    BenchmarkDefinition,
    ImageSpec,
    document_name,
)
from kubebench.models.settings import CompilerSettings
from kubebench.utils.logger import Logger


@dataclass(frozen=True)
class CompiledBenchmark:
    """Workload objects compiled from one definition, in apply order.

    Claims and config maps come before the workloads that mount them.
    """

    kind: Kind
    name: str
    namespace: str
    objects: tuple[Any, ...]

    def _of_type(self, model: type) -> list[Any]:
        return [obj for obj in self.objects if isinstance(obj, model)]

    @property
    def jobs(self) -> list[client.V1Job]:
        """Batch jobs."""
        return self._of_type(client.V1Job)

    @property
    def deployments(self) -> list[client.V1Deployment]:
        """Long running server deployments."""
        return self._of_type(client.V1Deployment)

    @property
    def services(self) -> list[client.V1Service]:
        """Discovery services."""
        return self._of_type(client.V1Service)

    @property
    def config_maps(self) -> list[client.V1ConfigMap]:
        """Config maps carrying user supplied files."""
        return self._of_type(client.V1ConfigMap)

    @property
    def claims(self) -> list[client.V1PersistentVolumeClaim]:
        """Persistent volume claims requested by the definition."""
        return self._of_type(client.V1PersistentVolumeClaim)

    @property
    def completion_job(self) -> client.V1Job:
        """The job whose completion completes the benchmark (the client job)."""
        return self.jobs[-1]

    def to_manifests(self) -> list[dict[str, Any]]:
        """Serialize every object to its camelCase document."""
        return [to_manifest(obj) for obj in self.objects]


def new_job(
    name: str,
    namespace: str,
    template: PodTemplate,
    backoff_limit: int,
    host_network: bool | None = None,
) -> client.V1Job:
    """Wrap a pod template into a run-to-completion Job."""
    return client.V1Job(
        api_version="batch/v1",
        kind="Job",
        metadata=client.V1ObjectMeta(
            name=name, namespace=namespace, labels=dict(template.selector)
        ),
        spec=client.V1JobSpec(
            backoff_limit=backoff_limit,
            template=template.to_pod_template_spec(
                restart_policy="Never", host_network=host_network
            ),
        ),
    )


class BenchmarkBuilder(ABC):
    """Compiles one benchmark kind into Kubernetes workload objects.

    Builders hold no per-definition state: the same instance may compile
    any number of definitions, concurrently, and compiling the same
    definition twice yields equal objects.

    Subclasses set the class attributes and implement build().
    """

    kind: ClassVar[Kind]
    tool: ClassVar[str]
    shape: ClassVar[Shape]
    definition_type: ClassVar[type[BenchmarkDefinition]]

    def __init__(self, settings: CompilerSettings | None = None) -> None:
        self.settings = settings or CompilerSettings()

    def get_name(self) -> str:
        """Kind name this builder handles (e.g. "Fio")."""
        return str(self.kind)

    @abstractmethod
    def get_description(self) -> str:
        """One-line description of what the benchmark measures."""
        pass

    @abstractmethod
    def build(self, definition: BenchmarkDefinition) -> CompiledBenchmark:
        """Compile a parsed definition.

        Raises:
            ValidationError: If the definition is malformed. No object is
                produced.
            BuildError: If an internal invariant breaks.
        """
        pass

    def parse(self, document: Mapping[str, Any]) -> BenchmarkDefinition:
        """Parse a definition document into this kind's model.

        Raises:
            InvalidDefinitionError: If the document does not match the schema.
        """
        try:
            return self.definition_type.model_validate(document)
        except pydantic.ValidationError as e:
            errors = [
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ]
            raise InvalidDefinitionError(document_name(document), errors) from e

    def compile(self, definition: BenchmarkDefinition) -> CompiledBenchmark:
        """Build a definition, logging the outcome."""
        try:
            compiled = self.build(definition)
        except CompileError as e:
            self.logger.error(f"Rejected {self.kind} {definition.name}: {e}")
            raise
        self.logger.info(
            f"Compiled {self.kind} {compiled.namespace}/{compiled.name} "
            f"into {len(compiled.objects)} objects"
        )
        return compiled

    def namespace(self, definition: BenchmarkDefinition) -> str:
        """Namespace all objects of ``definition`` are created in."""
        return definition.namespace_or(self.settings.default_namespace)

    def image_for(self, configuration: BenchmarkConfiguration) -> ImageSpec:
        """Image of the configuration, or this kind's default image."""
        return configuration.image or ImageSpec(name=DEFAULT_IMAGES[self.kind])

    @property
    def logger(self) -> logging.Logger:
        """Logger for this builder."""
        return Logger.component(f"builders.{self.tool}")
