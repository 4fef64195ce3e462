"""Kubebench - compile declarative benchmark definitions into Kubernetes workloads."""

from kubebench.builders import CompiledBenchmark, default_registry
from kubebench.compiler import compile_definition, load_definitions
from kubebench.status import derive_status, status_patch

__version__ = "0.1.0"

__all__ = [
    "CompiledBenchmark",
    "__version__",
    "compile_definition",
    "default_registry",
    "derive_status",
    "load_definitions",
    "status_patch",
]
