"""Assemble the pod template shared by every benchmark kind.

The user supplies containers as a plain list. The builders only ever touch
one of them, the target container named ``main``; ContainerSet makes that
split explicit so no code has to scan the list by name again.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from kubernetes import client

from kubebench.errors import DuplicateTargetContainer, MissingTargetContainer
from kubebench.k8s.convert import to_model, to_models
from kubebench.models.constants import (
    APP_LABEL,
    CR_NAME_LABEL,
    TARGET_CONTAINER_NAME,
    Role,
)
from kubebench.models.definition_models import ImageSpec, PodConfiguration
from kubebench.utils.logger import Logger


def merge_labels(
    system: Mapping[str, str], user: Mapping[str, str]
) -> Mapping[str, str]:
    """Merge two label sets, the later one winning on key collisions.

    Returns:
        A read-only mapping; neither input is modified.
    """
    return MappingProxyType({**system, **user})


def system_labels(tool: str, role: Role, definition: str) -> dict[str, str]:
    """Reserved labels for a pod. Client pods get their own app label."""
    app = f"{tool}-client" if role == Role.CLIENT else tool
    return {APP_LABEL: app, CR_NAME_LABEL: definition}


@dataclass(frozen=True)
class ContainerSet:
    """The target container plus everything else, in declaration order."""

    target: client.V1Container
    extra: tuple[client.V1Container, ...] = ()
    position: int = 0

    @classmethod
    def split(
        cls,
        containers: list[client.V1Container],
        definition: str,
        image: ImageSpec | None,
    ) -> "ContainerSet":
        """Pick the ``main`` container out of ``containers``.

        When no container is called ``main`` one is created from ``image``
        and placed first.

        Raises:
            DuplicateTargetContainer: If several containers are named ``main``.
            MissingTargetContainer: If there is no ``main`` and no image.
        """
        positions = [
            i for i, c in enumerate(containers) if c.name == TARGET_CONTAINER_NAME
        ]
        if len(positions) > 1:
            raise DuplicateTargetContainer(
                definition, TARGET_CONTAINER_NAME, len(positions)
            )

        if positions:
            index = positions[0]
            extra = tuple(c for i, c in enumerate(containers) if i != index)
            return cls(target=containers[index], extra=extra, position=index)

        if image is None:
            raise MissingTargetContainer(definition, TARGET_CONTAINER_NAME)

        target = client.V1Container(name=TARGET_CONTAINER_NAME, image=image.name)
        return cls(target=target, extra=tuple(containers), position=0)

    def as_list(self) -> list[client.V1Container]:
        """All containers with the target back at its original position."""
        containers = list(self.extra)
        containers.insert(self.position, self.target)
        return containers


@dataclass
class PodTemplate:
    """Pod template skeleton that builders specialize."""

    labels: Mapping[str, str]
    selector: Mapping[str, str]
    containers: ContainerSet
    init_containers: list[client.V1Container] = field(default_factory=list)
    affinity: client.V1Affinity | None = None
    tolerations: list[client.V1Toleration] = field(default_factory=list)
    node_selector: dict[str, str] = field(default_factory=dict)
    image_pull_secrets: list[client.V1LocalObjectReference] = field(
        default_factory=list
    )
    volumes: list[client.V1Volume] = field(default_factory=list)

    @property
    def target(self) -> client.V1Container:
        """The container arguments, ports and mounts are injected into."""
        return self.containers.target

    def inject_args(self, args: list[str]) -> bool:
        """Set the target's args unless the user already provided some.

        Returns:
            True if the arguments were applied.
        """
        if self.target.args:
            return False
        self.target.args = list(args)
        return True

    def mount(self, volume: client.V1Volume, mount_path: str) -> None:
        """Declare a pod volume and mount it into the target container."""
        self.volumes.append(volume)
        mounts = list(self.target.volume_mounts or [])
        mounts.append(client.V1VolumeMount(name=volume.name, mount_path=mount_path))
        self.target.volume_mounts = mounts

    def to_pod_template_spec(
        self, restart_policy: str | None = None, host_network: bool | None = None
    ) -> client.V1PodTemplateSpec:
        """Render the Kubernetes pod template."""
        return client.V1PodTemplateSpec(
            metadata=client.V1ObjectMeta(labels=dict(self.labels)),
            spec=client.V1PodSpec(
                containers=self.containers.as_list(),
                init_containers=self.init_containers or None,
                affinity=self.affinity,
                tolerations=self.tolerations or None,
                node_selector=self.node_selector or None,
                image_pull_secrets=self.image_pull_secrets or None,
                volumes=self.volumes or None,
                restart_policy=restart_policy,
                host_network=host_network,
            ),
        )


def build_pod_template(
    name: str,
    role: Role,
    tool: str,
    image: ImageSpec | None,
    pod_config: PodConfiguration,
) -> PodTemplate:
    """Build the pod template skeleton for one side of a benchmark.

    Args:
        name: Definition name.
        role: Role of the workload the template belongs to.
        tool: Benchmark tool name, used for the ``app`` label.
        image: Image for the target container, if it does not set its own.
        pod_config: User supplied pod configuration.

    Raises:
        DuplicateTargetContainer: If several containers are named ``main``.
        MissingTargetContainer: If there is no ``main`` and no image.
        InvalidDefinitionError: If a container or scheduling field is malformed.
    """
    reserved = system_labels(tool, role, name)
    overridden = sorted(k for k in pod_config.pod_labels if k in reserved)
    if overridden:
        Logger.component("k8s.pod").warning(
            f"{name}: podLabels override reserved labels {overridden}"
        )
    labels = merge_labels(reserved, pod_config.pod_labels)

    containers = ContainerSet.split(
        to_models(pod_config.containers, "V1Container", name), name, image
    )
    if image is not None:
        containers.target.image = containers.target.image or image.name
        if image.pull_policy and not containers.target.image_pull_policy:
            containers.target.image_pull_policy = image.pull_policy

    scheduling = pod_config.pod_scheduling
    affinity = None
    if scheduling.affinity is not None:
        affinity = to_model(scheduling.affinity, "V1Affinity", name)

    pull_secrets = []
    if image is not None and image.pull_secret:
        pull_secrets.append(client.V1LocalObjectReference(name=image.pull_secret))

    return PodTemplate(
        labels=labels,
        selector=MappingProxyType({k: labels[k] for k in reserved}),
        containers=containers,
        init_containers=to_models(pod_config.init_containers, "V1Container", name),
        affinity=affinity,
        tolerations=to_models(scheduling.tolerations, "V1Toleration", name),
        node_selector=dict(scheduling.node_selector),
        image_pull_secrets=pull_secrets,
    )
