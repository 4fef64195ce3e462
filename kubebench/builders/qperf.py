"""Qperf: network bandwidth and latency between two pods."""

from kubebench.builders.client_server import (
    ClientServerBenchmarkBuilder,
    discovery_name,
)
from kubebench.models.constants import QPERF_PORT, Kind
from kubebench.models.definition_models import Qperf


class QperfBuilder(ClientServerBenchmarkBuilder):
    """qperf server deployment and client job.

    The server takes no user arguments; the client's cmdLineArgs name the
    tests to run (e.g. ``tcp_bw tcp_lat``).
    """

    kind = Kind.QPERF
    tool = "qperf"
    definition_type = Qperf
    port = QPERF_PORT
    server_command = ["qperf"]

    def get_description(self) -> str:
        return "Network bandwidth and latency over TCP/UDP/RDMA"

    def server_args(self, definition: Qperf) -> list[str]:
        return ["--listen_port", str(self.port)]

    def client_args(self, definition: Qperf) -> list[str]:
        return [discovery_name(definition), "--listen_port", str(self.port)]
