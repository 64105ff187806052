"""Two-phase type registry: register every schema, then build a read-only view."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from .schema_models import INTEGER_TYPE_NAMES, Schema


class RegistryError(Exception):
    """Raised when schemas cannot be registered."""


class TypeRegistry(Mapping[str, Schema]):
    """Sealed mapping from type identifiers to their schemas."""

    def __init__(self, schemas: Mapping[str, Schema]) -> None:
        self._schemas = dict(schemas)

    def __getitem__(self, type_id: str) -> Schema:
        return self._schemas[type_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)

    def __repr__(self) -> str:
        return f"TypeRegistry({sorted(self._schemas)!r})"


class TypeRegistryBuilder:
    """Collects schemas during the registration phase."""

    def __init__(self) -> None:
        self._schemas: dict[str, Schema] = {}
        self._sealed = False

    def register(self, schema: Schema) -> None:
        if self._sealed:
            raise RegistryError(
                f"Cannot register '{schema.name}': registry has already been built."
            )
        if schema.name in INTEGER_TYPE_NAMES:
            raise RegistryError(f"Type name '{schema.name}' shadows a primitive type.")
        if schema.name in self._schemas:
            raise RegistryError(f"Type '{schema.name}' is registered more than once.")
        self._schemas[schema.name] = schema

    def register_all(self, schemas: Iterable[Schema]) -> None:
        for schema in schemas:
            self.register(schema)

    def build(self) -> TypeRegistry:
        """Seal the builder and return the read-only registry."""
        self._sealed = True
        return TypeRegistry(self._schemas)


def build_registry(schemas: Iterable[Schema]) -> TypeRegistry:
    """Register all schemas and return the sealed registry."""
    builder = TypeRegistryBuilder()
    builder.register_all(schemas)
    return builder.build()
