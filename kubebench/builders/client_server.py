"""Shared building pattern for two-sided (server + client) benchmarks.

Each definition becomes a server Deployment, a Service in front of it and a
client Job pointed at the Service.

Naming:
    server deployment   <name>
    discovery service   <name>
    client job          <name>-client

A pod's hostname is its own name. If the client job were named like the
service, the client would resolve the service name to itself (loopback)
and never reach the server, hence the suffix.
"""

from abc import abstractmethod
from typing import Any, ClassVar

from kubernetes import client

from kubebench.builders.base import BenchmarkBuilder, CompiledBenchmark, new_job
from kubebench.k8s.pod import PodTemplate, build_pod_template
from kubebench.k8s.volume import resolve_volume
from kubebench.errors import NameTooLong
from kubebench.models.constants import (
    CLIENT_NAME_SUFFIX,
    MAX_NAME_LENGTH,
    Role,
    Shape,
)
from kubebench.models.definition_models import (
    BenchmarkDefinition,
    ClientServerSpec,
)
from kubebench.utils.args import tokenize


def listening_port_check(port: int) -> list[str]:
    """Command that exits 0 once something listens on TCP ``port``.

    Reads the kernel's socket tables instead of connecting: some servers
    (qperf) exit when a probe connects to them. Needs nothing but awk in the
    image. Local ports appear as 4 digit uppercase hex, state 0A is LISTEN.
    """
    program = (
        "BEGIN{err=1}"
        f'toupper($2)~/:{port:04X}$/ && $4=="0A"{{err=0}}'
        "END{exit err}"
    )
    return ["awk", program, "/proc/net/tcp", "/proc/net/tcp6"]


def server_name(definition: BenchmarkDefinition) -> str:
    """Name of the server deployment."""
    return definition.name


def discovery_name(definition: BenchmarkDefinition) -> str:
    """Name of the service clients use to reach the server."""
    return definition.name


def client_name(definition: BenchmarkDefinition) -> str:
    """Name of the client job, never equal to the service or server name."""
    return discovery_name(definition) + CLIENT_NAME_SUFFIX


class ClientServerBenchmarkBuilder(BenchmarkBuilder):
    """Builds server Deployment, discovery Service and client Job.

    Subclasses define the tool's port, server command and argument
    vectors, and how the server's readiness is checked.
    """

    shape = Shape.CLIENT_SERVER

    port: ClassVar[int]
    server_command: ClassVar[list[str]]

    @abstractmethod
    def server_args(self, definition: Any) -> list[str]:
        """Complete argument vector of the server container."""
        pass

    @abstractmethod
    def client_args(self, definition: Any) -> list[str]:
        """Fixed client arguments, placed before the user's cmdLineArgs."""
        pass

    def readiness_action(self) -> dict[str, Any]:
        """Probe handler as V1Probe keyword arguments."""
        return {"_exec": client.V1ExecAction(command=listening_port_check(self.port))}

    def protocols(self, definition: Any) -> list[str]:
        """Protocols the server listens on at the well-known port."""
        return ["TCP"]

    def readiness_probe(self) -> client.V1Probe:
        """Readiness probe for the server container."""
        timing = self.settings.probe
        return client.V1Probe(
            initial_delay_seconds=timing.initial_delay_seconds,
            timeout_seconds=timing.timeout_seconds,
            period_seconds=timing.period_seconds,
            **self.readiness_action(),
        )

    def _port_name(self, protocol: str) -> str:
        suffix = "" if protocol == "TCP" else f"-{protocol.lower()}"
        return f"{self.tool}{suffix}"

    def build(self, definition: BenchmarkDefinition) -> CompiledBenchmark:
        spec: ClientServerSpec = definition.spec  # type: ignore[attr-defined]
        namespace = self.namespace(definition)

        job_name = client_name(definition)
        if len(job_name) > MAX_NAME_LENGTH:
            raise NameTooLong(definition.name, job_name, MAX_NAME_LENGTH)

        # Volumes are not mounted for network benchmarks, but a conflicting
        # declaration is still rejected.
        for config in (spec.server_configuration, spec.client_configuration):
            resolve_volume(config.volume, definition.name, namespace)
        client_args = self.client_args(definition) + tokenize(
            spec.client_configuration.cmd_line_args
        )

        server_template = build_pod_template(
            definition.name,
            Role.SERVER,
            self.tool,
            self.image_for(spec.server_configuration),
            spec.server_configuration.pod_config,
        )
        client_template = build_pod_template(
            definition.name,
            Role.CLIENT,
            self.tool,
            self.image_for(spec.client_configuration),
            spec.client_configuration.pod_config,
        )

        deployment = self.build_server_deployment(
            definition, namespace, server_template
        )
        service = self.build_service(definition, namespace, server_template)
        client_job = self.build_client_job(
            definition, namespace, client_template, client_args
        )
        return CompiledBenchmark(
            kind=self.kind,
            name=definition.name,
            namespace=namespace,
            objects=(deployment, service, client_job),
        )

    def build_server_deployment(
        self, definition: Any, namespace: str, template: PodTemplate
    ) -> client.V1Deployment:
        """Server deployment with a single replica."""
        target = template.target
        target.command = list(self.server_command)
        target.args = self.server_args(definition)
        target.ports = [
            client.V1ContainerPort(
                name=self._port_name(protocol),
                container_port=self.port,
                protocol=protocol,
            )
            for protocol in self.protocols(definition)
        ]
        target.readiness_probe = self.readiness_probe()

        return client.V1Deployment(
            api_version="apps/v1",
            kind="Deployment",
            metadata=client.V1ObjectMeta(
                name=server_name(definition),
                namespace=namespace,
                labels=dict(template.selector),
            ),
            spec=client.V1DeploymentSpec(
                replicas=1,
                selector=client.V1LabelSelector(match_labels=dict(template.selector)),
                template=template.to_pod_template_spec(
                    host_network=definition.spec.host_network
                ),
            ),
        )

    def build_service(
        self, definition: Any, namespace: str, server_template: PodTemplate
    ) -> client.V1Service:
        """Service resolving to the server pods."""
        return client.V1Service(
            api_version="v1",
            kind="Service",
            metadata=client.V1ObjectMeta(
                name=discovery_name(definition),
                namespace=namespace,
                labels=dict(server_template.selector),
            ),
            spec=client.V1ServiceSpec(
                selector=dict(server_template.selector),
                ports=[
                    client.V1ServicePort(
                        name=self._port_name(protocol),
                        port=self.port,
                        target_port=self.port,
                        protocol=protocol,
                    )
                    for protocol in self.protocols(definition)
                ],
            ),
        )

    def build_client_job(
        self,
        definition: Any,
        namespace: str,
        template: PodTemplate,
        args: list[str],
    ) -> client.V1Job:
        """Client job, keeping any args the user set on its main container.

        The client's main container declares the well-known port too.
        """
        template.target.ports = [
            client.V1ContainerPort(
                name=f"{self.tool}-client", container_port=self.port, protocol="TCP"
            )
        ]
        if not template.inject_args(args):
            self.logger.debug(
                f"{definition.name}: keeping args set on the client main container"
            )
        return new_job(
            client_name(definition),
            namespace,
            template,
            self.settings.job_backoff_limit,
            host_network=definition.spec.host_network,
        )
