"""Table mapping benchmark kinds to their builders.

The table is built explicitly at startup and cannot be changed afterwards;
whoever dispatches by kind receives it as an argument.

Usage:
    from kubebench.builders.registry import default_registry

    registry = default_registry()
    builder = registry.get_builder("Fio")
    compiled = builder.compile(builder.parse(document))
"""

from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import Any

from kubebench.builders.base import BenchmarkBuilder
from kubebench.models.settings import CompilerSettings


class KindRegistryError(Exception):
    """Base exception for registry errors."""

    pass


class KindNameCollisionError(KindRegistryError):
    """Raised when two builders claim the same kind."""

    def __init__(
        self, name: str, builder1: BenchmarkBuilder, builder2: BenchmarkBuilder
    ) -> None:
        self.name = name
        self.builder1 = builder1
        self.builder2 = builder2
        super().__init__(
            f"Kind collision: '{name}' is handled by both "
            f"{type(builder1).__name__} and {type(builder2).__name__}"
        )


class KindNotFoundError(KindRegistryError):
    """Raised when no builder handles the requested kind."""

    def __init__(self, name: str, known: Iterable[str]) -> None:
        self.name = name
        super().__init__(
            f"Unknown benchmark kind: '{name}' (known: {', '.join(sorted(known))})"
        )


class KindRegistry:
    """Immutable kind -> builder table.

    Raises KindNameCollisionError if two builders handle the same kind.
    """

    def __init__(self, builders: Iterable[BenchmarkBuilder]) -> None:
        table: dict[str, BenchmarkBuilder] = {}
        for builder in builders:
            name = builder.get_name()
            if name in table:
                raise KindNameCollisionError(name, table[name], builder)
            table[name] = builder
        self._builders: Mapping[str, BenchmarkBuilder] = MappingProxyType(table)

    def get_builder(self, kind: str) -> BenchmarkBuilder:
        """Get the builder for a kind.

        Raises:
            KindNotFoundError: If the kind is not registered.
        """
        if kind not in self._builders:
            raise KindNotFoundError(kind, self._builders)
        return self._builders[kind]

    def list_kinds(self) -> list[dict[str, Any]]:
        """Summaries of all registered kinds, sorted by name."""
        return [
            {
                "name": name,
                "tool": builder.tool,
                "shape": str(builder.shape),
                "description": builder.get_description(),
            }
            for name, builder in sorted(self._builders.items())
        ]

    def __len__(self) -> int:
        """Return number of registered kinds."""
        return len(self._builders)

    def __contains__(self, kind: object) -> bool:
        """Check if a kind is registered."""
        return kind in self._builders

    def __iter__(self) -> Iterator[str]:
        return iter(self._builders)


def default_registry(settings: CompilerSettings | None = None) -> KindRegistry:
    """Registry with every built-in benchmark kind."""
    from kubebench.builders.fio import FioBuilder
    from kubebench.builders.ioping import IopingBuilder
    from kubebench.builders.iperf3 import Iperf3Builder
    from kubebench.builders.qperf import QperfBuilder
    from kubebench.builders.sysbench import SysbenchBuilder

    return KindRegistry(
        cls(settings)
        for cls in (
            FioBuilder,
            IopingBuilder,
            Iperf3Builder,
            QperfBuilder,
            SysbenchBuilder,
        )
    )
