"""Shared building pattern for single-shot benchmarks run as one Job."""

from typing import Any

from kubernetes import client

from kubebench.builders.base import BenchmarkBuilder, CompiledBenchmark, new_job
from kubebench.k8s.pod import build_pod_template
from kubebench.k8s.volume import ResolvedVolume, resolve_volume
from kubebench.models.constants import DATA_MOUNT_PATH, Role, Shape
from kubebench.models.definition_models import (
    BenchmarkConfiguration,
    BenchmarkDefinition,
)
from kubebench.utils.args import tokenize


class JobBenchmarkBuilder(BenchmarkBuilder):
    """Builds a single Job running the tool against an optional ``/data`` volume.

    Lifecycle of build():
        1. resolve the volume (conflicts abort before anything is built)
        2. tokenize cmdLineArgs and append extra_args()
        3. build the pod template and mount the volume and extra_volumes()
        4. inject the arguments into ``main`` unless it already has args

    Subclasses customise steps 2 and 3 through the hook methods.
    """

    shape = Shape.JOB

    def configuration(self, definition: Any) -> BenchmarkConfiguration:
        """The configuration block of the definition."""
        spec: BenchmarkConfiguration = definition.spec
        return spec

    def extra_args(
        self, definition: Any, volume: ResolvedVolume | None
    ) -> list[str]:
        """Arguments appended after the user's cmdLineArgs."""
        return []

    def extra_volumes(self, definition: Any) -> list[tuple[client.V1Volume, str]]:
        """Additional (volume, mount path) pairs for the target container."""
        return []

    def companion_objects(self, definition: Any, namespace: str) -> list[Any]:
        """Objects the job depends on, created before it."""
        return []

    def build(self, definition: BenchmarkDefinition) -> CompiledBenchmark:
        config = self.configuration(definition)
        namespace = self.namespace(definition)

        volume = resolve_volume(config.volume, definition.name, namespace)
        args = tokenize(config.cmd_line_args) + self.extra_args(definition, volume)

        template = build_pod_template(
            definition.name,
            Role.JOB,
            self.tool,
            self.image_for(config),
            config.pod_config,
        )
        if volume is not None:
            template.mount(volume.volume, DATA_MOUNT_PATH)
        for extra_volume, mount_path in self.extra_volumes(definition):
            template.mount(extra_volume, mount_path)

        if not template.inject_args(args):
            self.logger.debug(
                f"{definition.name}: keeping args set on the main container"
            )

        objects: list[Any] = []
        if volume is not None and volume.claim is not None:
            objects.append(volume.claim)
        objects.extend(self.companion_objects(definition, namespace))
        objects.append(
            new_job(
                definition.name,
                namespace,
                template,
                self.settings.job_backoff_limit,
            )
        )
        return CompiledBenchmark(
            kind=self.kind,
            name=definition.name,
            namespace=namespace,
            objects=tuple(objects),
        )
