"""Fio: flexible disk I/O benchmark."""

from typing import Any

from kubernetes import client

from kubebench.builders.job import JobBenchmarkBuilder
from kubebench.k8s.volume import ResolvedVolume
from kubebench.models.constants import (
    BUILTIN_JOBS_PATH,
    CUSTOM_JOBS_MOUNT_PATH,
    CUSTOM_JOBS_VOLUME_NAME,
    Kind,
)
from kubebench.models.definition_models import Fio


class FioBuilder(JobBenchmarkBuilder):
    """Runs fio with builtin and user supplied job files.

    Builtin job files are shipped in the image under ``/jobs``. Custom job
    files are stored in a ConfigMap named after the definition, one key per
    file, and mounted at ``/custom-jobs`` so the n-th file is
    ``/custom-jobs/<n>``.
    """

    kind = Kind.FIO
    tool = "fio"
    definition_type = Fio

    def get_description(self) -> str:
        return "Disk I/O throughput and IOPS using fio job files"

    def extra_args(
        self, definition: Fio, volume: ResolvedVolume | None
    ) -> list[str]:
        spec = definition.spec
        args = [f"{BUILTIN_JOBS_PATH}/{name}" for name in spec.builtin_job_files]
        args += [
            f"{CUSTOM_JOBS_MOUNT_PATH}/{index}"
            for index in range(len(spec.custom_job_files))
        ]
        return args

    def extra_volumes(self, definition: Fio) -> list[tuple[client.V1Volume, str]]:
        if not definition.spec.custom_job_files:
            return []
        volume = client.V1Volume(
            name=CUSTOM_JOBS_VOLUME_NAME,
            config_map=client.V1ConfigMapVolumeSource(name=definition.name),
        )
        return [(volume, CUSTOM_JOBS_MOUNT_PATH)]

    def companion_objects(self, definition: Fio, namespace: str) -> list[Any]:
        if not definition.spec.custom_job_files:
            return []
        config_map = client.V1ConfigMap(
            api_version="v1",
            kind="ConfigMap",
            metadata=client.V1ObjectMeta(name=definition.name, namespace=namespace),
            data={
                str(index): contents
                for index, contents in enumerate(definition.spec.custom_job_files)
            },
        )
        return [config_map]
