"""Iperf3: network throughput between two pods."""

from kubebench.builders.client_server import (
    ClientServerBenchmarkBuilder,
    discovery_name,
)
from kubebench.models.constants import IPERF3_PORT, Kind
from kubebench.models.definition_models import Iperf3
from kubebench.utils.args import tokenize

UDP_FLAG = "--udp"


class Iperf3Builder(ClientServerBenchmarkBuilder):
    """iperf3 server deployment and client job.

    In UDP mode both sides get ``--udp`` and the UDP port is exposed
    next to the TCP control port.
    """

    kind = Kind.IPERF3
    tool = "iperf3"
    definition_type = Iperf3
    port = IPERF3_PORT
    server_command = ["iperf3"]

    def get_description(self) -> str:
        return "TCP and UDP network throughput"

    def _variant_flags(self, definition: Iperf3) -> list[str]:
        return [UDP_FLAG] if definition.spec.udp else []

    def server_args(self, definition: Iperf3) -> list[str]:
        return (
            ["--server", "--port", str(self.port)]
            + self._variant_flags(definition)
            + tokenize(definition.spec.server_configuration.cmd_line_args)
        )

    def client_args(self, definition: Iperf3) -> list[str]:
        return [
            "--client",
            discovery_name(definition),
            "--port",
            str(self.port),
        ] + self._variant_flags(definition)

    def protocols(self, definition: Iperf3) -> list[str]:
        return ["TCP", "UDP"] if definition.spec.udp else ["TCP"]
