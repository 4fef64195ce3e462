"""Constants shared by the definition models and the workload builders."""

from enum import StrEnum

API_GROUP = "perf.kubebench.io"
API_VERSION = f"{API_GROUP}/v1alpha1"

# Name of the container that receives arguments, ports, mounts and probes
TARGET_CONTAINER_NAME = "main"

# Reserved pod label keys, applied before user supplied podLabels
APP_LABEL = "app"
CR_NAME_LABEL = "cr-name"

DATA_VOLUME_NAME = "data"
DATA_MOUNT_PATH = "/data"

CUSTOM_JOBS_VOLUME_NAME = "custom-jobs"
CUSTOM_JOBS_MOUNT_PATH = "/custom-jobs"
BUILTIN_JOBS_PATH = "/jobs"

CLIENT_NAME_SUFFIX = "-client"

# Object names also end up in label values (e.g. job-name), capped at 63
MAX_NAME_LENGTH = 63

IPERF3_PORT = 5201
QPERF_PORT = 19765


class Kind(StrEnum):
    """Benchmark kinds understood by the compiler."""

    FIO = "Fio"
    IOPING = "Ioping"
    SYSBENCH = "Sysbench"
    IPERF3 = "Iperf3"
    QPERF = "Qperf"


class Role(StrEnum):
    """Role a workload object plays for its benchmark."""

    JOB = "job"
    SERVER = "server"
    CLIENT = "client"


class Shape(StrEnum):
    """How a benchmark kind materializes."""

    JOB = "job"
    CLIENT_SERVER = "client-server"


DEFAULT_IMAGES: dict[Kind, str] = {
    Kind.FIO: "xridge/fio:3.13",
    Kind.IOPING: "xridge/ioping:0.9-1",
    Kind.SYSBENCH: "xridge/sysbench:1.0.17",
    Kind.IPERF3: "xridge/iperf3:3.7.0",
    Kind.QPERF: "xridge/qperf:0.4.11-r0",
}
