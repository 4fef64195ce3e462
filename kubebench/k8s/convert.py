"""Conversion between Kubernetes wire documents and client models."""

import inspect
import json
from functools import lru_cache
from typing import Any

from kubernetes import client

from kubebench.errors import InvalidDefinitionError


class _Payload:
    """Minimal stand-in for a REST response, as ApiClient.deserialize expects."""

    def __init__(self, data: Any) -> None:
        self.data = json.dumps(data)


@lru_cache(maxsize=1)
def api_client() -> client.ApiClient:
    """Shared ApiClient used only for (de)serialization, never for requests."""
    return client.ApiClient()


@lru_cache(maxsize=1)
def _takes_response_text() -> bool:
    # kubernetes>=37 deserializes (response_text, response_type, content_type)
    # instead of (response, response_type)
    parameters = inspect.signature(client.ApiClient.deserialize).parameters
    return "content_type" in parameters


def _deserialize(data: Any, model_name: str) -> Any:
    if _takes_response_text():
        return api_client().deserialize(
            json.dumps(data), model_name, "application/json"
        )
    return api_client().deserialize(_Payload(data), model_name)


def to_model(data: Any, model_name: str, definition: str) -> Any:
    """Deserialize a camelCase document into a client model.

    Args:
        data: Wire form, e.g. ``{"name": "main", "image": "fio"}``.
        model_name: Client model name, e.g. ``"V1Container"``.
        definition: Definition name, used in error messages.

    Raises:
        InvalidDefinitionError: If a required field is missing or a field
            has the wrong shape.
    """
    try:
        return _deserialize(data, model_name)
    except (ValueError, TypeError, AttributeError) as e:
        raise InvalidDefinitionError(definition, [f"{model_name}: {e}"]) from e


def to_models(items: list[Any], model_name: str, definition: str) -> list[Any]:
    """Deserialize each document of ``items`` into a ``model_name`` model."""
    return [to_model(item, model_name, definition) for item in items]


def to_manifest(obj: Any) -> Any:
    """Serialize a client model to its camelCase document, dropping unset fields."""
    return api_client().sanitize_for_serialization(obj)
