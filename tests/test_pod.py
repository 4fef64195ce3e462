"""Tests for label merging, the container split and pod templates."""

import pytest
from kubernetes import client

from kubebench.errors import (
    BuildError,
    DuplicateTargetContainer,
    InvalidDefinitionError,
    MissingTargetContainer,
)
from kubebench.k8s.convert import to_manifest
from kubebench.k8s.pod import (
    ContainerSet,
    build_pod_template,
    merge_labels,
    system_labels,
)
from kubebench.models.constants import Role
from kubebench.models.definition_models import ImageSpec, PodConfiguration

AFFINITY = {
    "nodeAffinity": {
        "requiredDuringSchedulingIgnoredDuringExecution": {
            "nodeSelectorTerms": [
                {
                    "matchExpressions": [
                        {"key": "disktype", "operator": "In", "values": ["ssd"]}
                    ]
                }
            ]
        }
    }
}

TOLERATIONS = [
    {
        "key": "dedicated",
        "operator": "Equal",
        "value": "benchmarks",
        "effect": "NoExecute",
        "tolerationSeconds": 30,
    }
]


def test_merge_labels_user_wins():
    """Test that user labels are added and win on collisions."""
    system = {"app": "iperf3", "cr-name": "x"}

    merged = merge_labels(system, {"team": "infra"})

    assert dict(merged) == {"app": "iperf3", "cr-name": "x", "team": "infra"}
    assert merge_labels(system, {"app": "custom"})["app"] == "custom"
    assert system == {"app": "iperf3", "cr-name": "x"}


def test_merge_labels_read_only():
    """Test that the merged labels cannot be modified."""
    merged = merge_labels({"app": "fio"}, {})

    with pytest.raises(TypeError):
        merged["app"] = "other"  # type: ignore[index]


def test_system_labels_by_role():
    """Test that client pods get a distinct app label."""
    assert system_labels("qperf", Role.SERVER, "net-1") == {
        "app": "qperf",
        "cr-name": "net-1",
    }
    assert system_labels("qperf", Role.CLIENT, "net-1")["app"] == "qperf-client"
    assert system_labels("fio", Role.JOB, "fio-1")["app"] == "fio"


def test_container_set_finds_target():
    """Test that the main container is split out and order is kept."""
    sidecar = client.V1Container(name="sidecar", image="busybox")
    main = client.V1Container(name="main", image="fio")
    logger = client.V1Container(name="logger", image="busybox")

    containers = ContainerSet.split([sidecar, main, logger], "fio-1", None)

    assert containers.target is main
    assert containers.extra == (sidecar, logger)
    assert [c.name for c in containers.as_list()] == ["sidecar", "main", "logger"]


def test_container_set_synthesizes_target():
    """Test that a missing main container is created from the image."""
    sidecar = client.V1Container(name="sidecar", image="busybox")

    containers = ContainerSet.split([sidecar], "fio-1", ImageSpec(name="fio:3"))

    assert containers.target.name == "main"
    assert containers.target.image == "fio:3"
    assert [c.name for c in containers.as_list()] == ["main", "sidecar"]


def test_container_set_duplicate_target():
    """Test that two main containers are rejected."""
    mains = [
        client.V1Container(name="main", image="a"),
        client.V1Container(name="main", image="b"),
    ]

    with pytest.raises(DuplicateTargetContainer) as exc_info:
        ContainerSet.split(mains, "fio-1", None)

    assert exc_info.value.count == 2


def test_container_set_missing_target():
    """Test that no main and no image is a build error."""
    with pytest.raises(MissingTargetContainer) as exc_info:
        ContainerSet.split([], "fio-1", None)

    assert isinstance(exc_info.value, BuildError)


def test_pod_template_defaults():
    """Test the template built from an empty pod configuration."""
    template = build_pod_template(
        "fio-1", Role.JOB, "fio", ImageSpec(name="fio:3"), PodConfiguration()
    )

    spec = template.to_pod_template_spec(restart_policy="Never")

    assert spec.metadata.labels == {"app": "fio", "cr-name": "fio-1"}
    assert [c.name for c in spec.spec.containers] == ["main"]
    assert spec.spec.containers[0].image == "fio:3"
    assert spec.spec.restart_policy == "Never"
    assert spec.spec.volumes is None
    assert spec.spec.tolerations is None
    assert spec.spec.affinity is None
    assert spec.spec.node_selector is None
    assert spec.spec.init_containers is None
    assert spec.spec.image_pull_secrets is None


def test_pod_template_scheduling_passthrough():
    """Test that scheduling constraints are copied unchanged."""
    pod_config = PodConfiguration.model_validate(
        {
            "podScheduling": {
                "affinity": AFFINITY,
                "tolerations": TOLERATIONS,
                "nodeSelector": {"kubernetes.io/os": "linux"},
            }
        }
    )

    template = build_pod_template(
        "fio-1", Role.JOB, "fio", ImageSpec(name="fio:3"), pod_config
    )
    spec = to_manifest(template.to_pod_template_spec())["spec"]

    assert spec["affinity"] == AFFINITY
    assert spec["tolerations"] == TOLERATIONS
    assert spec["nodeSelector"] == {"kubernetes.io/os": "linux"}


def test_pod_template_user_labels():
    """Test that user labels reach the pod but not the selector."""
    pod_config = PodConfiguration(pod_labels={"team": "storage"})

    template = build_pod_template(
        "fio-1", Role.JOB, "fio", ImageSpec(name="fio:3"), pod_config
    )

    assert dict(template.labels) == {
        "app": "fio",
        "cr-name": "fio-1",
        "team": "storage",
    }
    assert dict(template.selector) == {"app": "fio", "cr-name": "fio-1"}


def test_pod_template_reserved_label_override():
    """Test that overriding a reserved label carries into the selector."""
    pod_config = PodConfiguration(pod_labels={"app": "mine"})

    template = build_pod_template(
        "fio-1", Role.JOB, "fio", ImageSpec(name="fio:3"), pod_config
    )

    assert template.labels["app"] == "mine"
    assert template.selector["app"] == "mine"


def test_pod_template_image_settings():
    """Test pull policy and pull secret from the image block."""
    image = ImageSpec(
        name="registry/fio:3", pull_policy="Always", pull_secret="regcred"
    )

    template = build_pod_template(
        "fio-1", Role.JOB, "fio", image, PodConfiguration()
    )

    assert template.target.image == "registry/fio:3"
    assert template.target.image_pull_policy == "Always"
    assert template.image_pull_secrets == [
        client.V1LocalObjectReference(name="regcred")
    ]


def test_pod_template_keeps_container_image():
    """Test that an image set on main is not replaced."""
    pod_config = PodConfiguration(
        containers=[{"name": "main", "image": "mine:1", "imagePullPolicy": "Never"}]
    )
    image = ImageSpec(name="fio:3", pull_policy="Always")

    template = build_pod_template("fio-1", Role.JOB, "fio", image, pod_config)

    assert template.target.image == "mine:1"
    assert template.target.image_pull_policy == "Never"


def test_pod_template_user_containers():
    """Test that extra and init containers are carried over."""
    pod_config = PodConfiguration(
        containers=[
            {"name": "sidecar", "image": "busybox", "args": ["sleep", "3600"]},
            {"name": "main", "resources": {"limits": {"cpu": "1"}}},
        ],
        init_containers=[{"name": "prepare", "image": "busybox"}],
    )

    template = build_pod_template(
        "fio-1", Role.JOB, "fio", ImageSpec(name="fio:3"), pod_config
    )
    spec = template.to_pod_template_spec().spec

    assert [c.name for c in spec.containers] == ["sidecar", "main"]
    assert spec.containers[0].args == ["sleep", "3600"]
    assert spec.containers[1].image == "fio:3"
    assert spec.containers[1].resources.limits == {"cpu": "1"}
    assert [c.name for c in spec.init_containers] == ["prepare"]


def test_pod_template_container_without_name():
    """Test that a container missing its name is an invalid definition."""
    pod_config = PodConfiguration(containers=[{"image": "busybox"}])

    with pytest.raises(InvalidDefinitionError):
        build_pod_template(
            "fio-1", Role.JOB, "fio", ImageSpec(name="fio:3"), pod_config
        )


def test_inject_args_only_when_empty():
    """Test that user supplied args on main are kept."""
    pod_config = PodConfiguration(containers=[{"name": "main", "args": ["--keep"]}])
    template = build_pod_template(
        "fio-1", Role.JOB, "fio", ImageSpec(name="fio:3"), pod_config
    )

    assert template.inject_args(["--rw=read"]) is False
    assert template.target.args == ["--keep"]


def test_mount_adds_volume_and_mount():
    """Test that mounting declares the volume and mounts it into main."""
    template = build_pod_template(
        "fio-1", Role.JOB, "fio", ImageSpec(name="fio:3"), PodConfiguration()
    )
    volume = client.V1Volume(name="data", empty_dir=client.V1EmptyDirVolumeSource())

    template.mount(volume, "/data")

    assert template.volumes == [volume]
    assert template.target.volume_mounts == [
        client.V1VolumeMount(name="data", mount_path="/data")
    ]


def test_pod_template_container_field_wrong_shape():
    """Test that a container field of the wrong type is an invalid definition."""
    pod_config = PodConfiguration(containers=[{"name": "main", "args": 5}])

    with pytest.raises(InvalidDefinitionError) as exc_info:
        build_pod_template(
            "fio-1", Role.JOB, "fio", ImageSpec(name="fio:3"), pod_config
        )

    assert exc_info.value.definition == "fio-1"
