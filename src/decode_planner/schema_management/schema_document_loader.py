"""Schema document loading service."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

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

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_WRAPPER = re.compile(r"^(optional|list)\[(.*)\]$")


class SchemaDocumentError(Exception):
    """Raised for malformed schema documents."""


def load_schema_file(path: Path | str) -> tuple[Schema, ...]:
    """Read a YAML/JSON schema document from disk."""
    source = Path(path)
    if not source.exists():
        raise SchemaDocumentError(f"Schema file not found: {source}")
    return load_schema_text(source.read_text(encoding="utf-8"), source=str(source))


def load_schema_text(text: str, *, source: str = "<inline>") -> tuple[Schema, ...]:
    """Parse schema document text into schema values in declaration order."""
    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise SchemaDocumentError(f"{source}: invalid schema document: {exc}") from exc

    if not isinstance(parsed, Mapping):
        raise SchemaDocumentError(f"{source}: schema document root must be a mapping.")
    entries = parsed.get("types")
    if not isinstance(entries, Sequence) or isinstance(entries, str):
        raise SchemaDocumentError(f"{source}: 'types' must be a list.")

    return tuple(
        _parse_type_entry(entry, f"{source}: types[{index}]")
        for index, entry in enumerate(entries)
    )


def parse_type_expression(expression: str) -> DeclaredType:
    """Parse a declared-type expression such as ``u16`` or ``list[optional[Header]]``."""
    if not isinstance(expression, str):
        raise SchemaDocumentError("Type expression must be a string.")
    stripped = expression.strip()
    if stripped in INTEGER_TYPE_NAMES:
        width, signed = INTEGER_TYPE_NAMES[stripped]
        return Primitive(width=width, signed=signed)
    wrapper = _WRAPPER.match(stripped)
    if wrapper:
        inner = parse_type_expression(wrapper.group(2))
        if wrapper.group(1) == "optional":
            return OptionalOf(inner)
        return SequenceOf(inner)
    if _IDENTIFIER.match(stripped):
        return Named(stripped)
    raise SchemaDocumentError(f"Unsupported type expression: {expression!r}")


def _parse_type_entry(entry: Any, location: str) -> Schema:
    if not isinstance(entry, Mapping):
        raise SchemaDocumentError(f"{location} must be a mapping.")
    if ("record" in entry) == ("union" in entry):
        raise SchemaDocumentError(f"{location} must set exactly one of 'record' or 'union'.")
    if "record" in entry:
        name = _require_identifier(entry.get("record"), f"{location}.record")
        positional = _optional_bool(entry.get("positional"), f"{location}.positional")
        fields = _parse_fields(entry.get("fields"), positional, f"{location}.fields")
        return RecordSchema(name=name, fields=fields, positional=positional)

    name = _require_identifier(entry.get("union"), f"{location}.union")
    raw_variants = entry.get("variants")
    if not isinstance(raw_variants, Sequence) or isinstance(raw_variants, str):
        raise SchemaDocumentError(f"{location}.variants must be a list.")
    variants = tuple(
        _parse_variant(item, f"{location}.variants[{index}]")
        for index, item in enumerate(raw_variants)
    )
    attributes = _parse_directives(entry.get("directives"), f"{location}.directives")
    return UnionSchema(name=name, variants=variants, attributes=attributes)


def _parse_variant(entry: Any, location: str) -> Variant:
    if not isinstance(entry, Mapping):
        raise SchemaDocumentError(f"{location} must be a mapping.")
    name = _require_identifier(entry.get("name"), f"{location}.name")
    positional = _optional_bool(entry.get("positional"), f"{location}.positional")
    fields = _parse_fields(entry.get("fields", []), positional, f"{location}.fields")
    discriminant = entry.get("discriminant")
    if discriminant is not None and (
        isinstance(discriminant, bool) or not isinstance(discriminant, int)
    ):
        raise SchemaDocumentError(f"{location}.discriminant must be an integer.")
    return Variant(
        name=name,
        fields=fields,
        positional=positional,
        attributes=_parse_directives(entry.get("directives"), f"{location}.directives"),
        discriminant=discriminant,
    )


def _parse_fields(value: Any, positional: bool, location: str) -> tuple[Field, ...]:
    if value is None:
        return ()
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise SchemaDocumentError(f"{location} must be a list.")
    fields: list[Field] = []
    seen: set[str | int] = set()
    for index, item in enumerate(value):
        item_location = f"{location}[{index}]"
        if not isinstance(item, Mapping):
            raise SchemaDocumentError(f"{item_location} must be a mapping.")
        if positional:
            if "name" in item:
                raise SchemaDocumentError(f"{item_location}: positional fields take no name.")
            name: str | int = index
        else:
            name = _require_identifier(item.get("name"), f"{item_location}.name")
        if name in seen:
            raise SchemaDocumentError(f"{item_location}: duplicate field name '{name}'.")
        seen.add(name)
        try:
            declared_type = parse_type_expression(item.get("type"))
        except SchemaDocumentError as exc:
            raise SchemaDocumentError(f"{item_location}.type: {exc}") from exc
        fields.append(
            Field(
                name=name,
                declared_type=declared_type,
                attributes=_parse_directives(item.get("directives"), f"{item_location}.directives"),
            )
        )
    return tuple(fields)


def _parse_directives(value: Any, location: str) -> tuple[RawDirective, ...]:
    if value is None:
        return ()
    if isinstance(value, Mapping):
        return tuple(RawDirective(name=str(key), value=item) for key, item in value.items())
    if isinstance(value, Sequence) and not isinstance(value, str):
        directives: list[RawDirective] = []
        for index, item in enumerate(value):
            if not isinstance(item, Mapping) or len(item) != 1:
                raise SchemaDocumentError(
                    f"{location}[{index}] must be a single-entry mapping."
                )
            ((key, payload),) = item.items()
            directives.append(RawDirective(name=str(key), value=payload))
        return tuple(directives)
    raise SchemaDocumentError(f"{location} must be a mapping or a list of mappings.")


def _require_identifier(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not _IDENTIFIER.match(value.strip()):
        raise SchemaDocumentError(f"{field_name} must be an identifier.")
    return value.strip()


def _optional_bool(value: Any, field_name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise SchemaDocumentError(f"{field_name} must be a boolean.")
    return value
