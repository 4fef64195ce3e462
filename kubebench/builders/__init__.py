"""Workload builders, one per benchmark kind.

Single-shot kinds (Fio, Ioping, Sysbench) compile into one Job; two-sided
kinds (Iperf3, Qperf) into a server Deployment, a Service and a client Job.
"""

from kubebench.builders.base import BenchmarkBuilder, CompiledBenchmark
from kubebench.builders.client_server import (
    ClientServerBenchmarkBuilder,
    client_name,
    discovery_name,
    listening_port_check,
    server_name,
)
from kubebench.builders.fio import FioBuilder
from kubebench.builders.ioping import IopingBuilder
from kubebench.builders.iperf3 import Iperf3Builder
from kubebench.builders.job import JobBenchmarkBuilder
from kubebench.builders.qperf import QperfBuilder
from kubebench.builders.registry import (
    KindNameCollisionError,
    KindNotFoundError,
    KindRegistry,
    KindRegistryError,
    default_registry,
)
from kubebench.builders.sysbench import SysbenchBuilder

__all__ = [
    "BenchmarkBuilder",
    "ClientServerBenchmarkBuilder",
    "CompiledBenchmark",
    "FioBuilder",
    "IopingBuilder",
    "Iperf3Builder",
    "JobBenchmarkBuilder",
    "KindNameCollisionError",
    "KindNotFoundError",
    "KindRegistry",
    "KindRegistryError",
    "QperfBuilder",
    "SysbenchBuilder",
    "client_name",
    "default_registry",
    "discovery_name",
    "listening_port_check",
    "server_name",
]
