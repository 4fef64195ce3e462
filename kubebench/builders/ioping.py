"""Ioping: disk I/O latency."""

from kubebench.builders.job import JobBenchmarkBuilder
from kubebench.k8s.volume import ResolvedVolume
from kubebench.models.constants import DATA_MOUNT_PATH, Kind
from kubebench.models.definition_models import Ioping


class IopingBuilder(JobBenchmarkBuilder):
    """Runs ioping against the ``/data`` volume when one is declared."""

    kind = Kind.IOPING
    tool = "ioping"
    definition_type = Ioping

    def get_description(self) -> str:
        return "Disk I/O latency, like ping for storage"

    def extra_args(
        self, definition: Ioping, volume: ResolvedVolume | None
    ) -> list[str]:
        # ioping takes the directory to probe as its last argument
        return [DATA_MOUNT_PATH] if volume is not None else []
