"""Exceptions raised while compiling benchmark definitions.

Two families matter to callers:

- ValidationError: the definition itself is malformed. Nothing is built and
  the error names the exact conflict.
- BuildError: an internal invariant broke while assembling objects. This is
  a programming fault and is never retried.
"""


class CompileError(Exception):
    """Base exception for compilation errors."""

    pass


class ValidationError(CompileError):
    """Raised when a definition is structurally invalid."""

    def __init__(self, definition: str, message: str) -> None:
        self.definition = definition
        super().__init__(f"{definition}: {message}")


class ConflictingVolumeSpec(ValidationError):
    """Raised when both a volume source and a claim request are set."""

    def __init__(self, definition: str, source_keys: list[str]) -> None:
        self.source_keys = source_keys
        super().__init__(
            definition,
            "volume declares both volumeSource "
            f"({', '.join(source_keys) or 'empty'}) and persistentVolumeClaimSpec; "
            "set exactly one of them",
        )


class UnknownVolumeSource(ValidationError):
    """Raised when a volume source names no known Kubernetes volume type."""

    def __init__(self, definition: str, source_keys: list[str]) -> None:
        self.source_keys = source_keys
        super().__init__(
            definition,
            "volumeSource has no recognised volume type "
            f"(got: {source_keys or 'nothing'})",
        )


class DuplicateTargetContainer(ValidationError):
    """Raised when more than one container uses the target container name."""

    def __init__(self, definition: str, container_name: str, count: int) -> None:
        self.container_name = container_name
        self.count = count
        super().__init__(
            definition,
            f"{count} containers are named '{container_name}', expected at most one",
        )


class NameTooLong(ValidationError):
    """Raised when a name derived from the definition exceeds the name limit."""

    def __init__(self, definition: str, name: str, limit: int) -> None:
        self.name = name
        self.limit = limit
        super().__init__(
            definition,
            f"derived object name '{name}' is {len(name)} characters, "
            f"the limit is {limit}; shorten the definition name",
        )


class InvalidDefinitionError(ValidationError):
    """Raised when a definition document does not match its schema."""

    def __init__(self, definition: str, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(definition, "; ".join(errors))


class BuildError(CompileError):
    """Raised when an internal invariant is violated while building."""

    pass


class MissingTargetContainer(BuildError):
    """Raised when no target container exists and none can be synthesized."""

    def __init__(self, definition: str, container_name: str) -> None:
        self.definition = definition
        self.container_name = container_name
        super().__init__(
            f"{definition}: no '{container_name}' container declared and no image "
            "available to create one"
        )
