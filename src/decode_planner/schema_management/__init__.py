"""Schema management exports."""

from .schema_document_loader import (
    SchemaDocumentError,
    load_schema_file,
    load_schema_text,
    parse_type_expression,
)
from .schema_models import (
    INTEGER_TYPE_NAMES,
    DeclaredType,
    Field,
    Named,
    OptionalOf,
    Primitive,
    RawDirective,
    RecordSchema,
    Schema,
    SequenceOf,
    UnionSchema,
    Variant,
)
from .type_registry import RegistryError, TypeRegistry, TypeRegistryBuilder, build_registry

__all__ = [
    "INTEGER_TYPE_NAMES",
    "DeclaredType",
    "Field",
    "Named",
    "OptionalOf",
    "Primitive",
    "RawDirective",
    "RecordSchema",
    "Schema",
    "SequenceOf",
    "UnionSchema",
    "Variant",
    "RegistryError",
    "TypeRegistry",
    "TypeRegistryBuilder",
    "build_registry",
    "SchemaDocumentError",
    "load_schema_file",
    "load_schema_text",
    "parse_type_expression",
]
