"""Sysbench: CPU, memory, threads and mutex micro-benchmarks."""

from kubebench.builders.job import JobBenchmarkBuilder
from kubebench.models.constants import Kind
from kubebench.models.definition_models import Sysbench


class SysbenchBuilder(JobBenchmarkBuilder):
    """Runs sysbench with the test and its options taken from cmdLineArgs."""

    kind = Kind.SYSBENCH
    tool = "sysbench"
    definition_type = Sysbench

    def get_description(self) -> str:
        return "System micro-benchmarks (cpu, memory, threads, mutex, fileio)"
