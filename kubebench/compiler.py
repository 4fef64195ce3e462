"""Entry point: definition documents in, workload objects out."""

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from kubebench.builders.base import CompiledBenchmark
from kubebench.builders.registry import KindRegistry, default_registry
from kubebench.errors import InvalidDefinitionError
from kubebench.models.definition_models import document_name
from kubebench.models.settings import CompilerSettings


def compile_definition(
    document: Mapping[str, Any],
    registry: KindRegistry | None = None,
    settings: CompilerSettings | None = None,
) -> CompiledBenchmark:
    """Compile one definition document.

    Args:
        document: Definition in wire form (apiVersion, kind, metadata, spec).
        registry: Kind table to dispatch with; the built-in kinds by default.
        settings: Settings for the built-in kinds when no registry is given.
            A given registry carries its own settings.

    Raises:
        KindNotFoundError: If the document's kind is not registered.
        ValidationError: If the definition is malformed.
        BuildError: If an internal invariant breaks.
    """
    if registry is None:
        registry = default_registry(settings)
    kind = document.get("kind")
    if not isinstance(kind, str):
        raise InvalidDefinitionError(document_name(document), ["kind: missing"])

    builder = registry.get_builder(kind)
    return builder.compile(builder.parse(document))


def load_definitions(path: str | Path) -> list[dict[str, Any]]:
    """Read definition documents from a YAML (multi-document) or JSON file.

    Empty YAML documents are skipped. A JSON file may hold one document or
    a list of them.

    Raises:
        InvalidDefinitionError: If a document is not a mapping.
        yaml.YAMLError, json.JSONDecodeError: If the file cannot be parsed.
    """
    path = Path(path)
    content = path.read_text()
    if path.suffix in (".yaml", ".yml"):
        documents = [doc for doc in yaml.safe_load_all(content) if doc is not None]
    else:
        data = json.loads(content)
        documents = data if isinstance(data, list) else [data]

    for index, document in enumerate(documents):
        if not isinstance(document, dict):
            raise InvalidDefinitionError(
                f"{path.name}[{index}]", ["document must be a mapping"]
            )
    return documents
