"""Binding contexts handed to the template renderer.

A project context carries project-level values plus the list of every
scaffolded collection; a collection context is the project context with one
extra ``collection`` entry.  Contexts are plain dicts built once per run and
shared read-only by every render.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from schemascaffold.schema.models import Collection, FieldModel, FieldType, Project
from schemascaffold.scaffolder.capabilities import derive_capabilities
from schemascaffold.naming import (
    CollectionNames,
    json_field_name,
    pascal_case,
    snake_case,
)


# ---------------------------------------------------------------------------
# Target-language type maps
# ---------------------------------------------------------------------------

# Required fields use the primitive; optional ones the boxed type.
_JAVA_TYPE_MAP: dict[FieldType, tuple[str, str]] = {
    FieldType.INTEGER: ("int", "Integer"),
    FieldType.STRING: ("String", "String"),
    FieldType.UUID: ("UUID", "UUID"),
    FieldType.TIMESTAMP: ("Date", "Date"),
    FieldType.BOOLEAN: ("boolean", "Boolean"),
    FieldType.FLOAT: ("double", "Double"),
    FieldType.REFERENCE: ("Object", "Object"),
}

_PYTHON_TYPE_MAP: dict[FieldType, str] = {
    FieldType.INTEGER: "int",
    FieldType.STRING: "str",
    FieldType.UUID: "uuid.UUID",
    FieldType.TIMESTAMP: "datetime",
    FieldType.BOOLEAN: "bool",
    FieldType.FLOAT: "float",
    FieldType.REFERENCE: "dict",
}

_TS_TYPE_MAP: dict[FieldType, str] = {
    FieldType.INTEGER: "number",
    FieldType.STRING: "string",
    FieldType.UUID: "string",
    FieldType.TIMESTAMP: "Date",
    FieldType.BOOLEAN: "boolean",
    FieldType.FLOAT: "number",
    FieldType.REFERENCE: "Record<string, unknown>",
}


def _java_type(field: FieldModel, reference_name: str | None) -> str:
    if reference_name:
        return reference_name
    required_type, boxed_type = _JAVA_TYPE_MAP[field.field_type]
    return required_type if field.required else boxed_type


def _python_type(field: FieldModel, reference_name: str | None) -> str:
    base = reference_name or _PYTHON_TYPE_MAP[field.field_type]
    return base if field.required else f"Optional[{base}]"


def _ts_type(field: FieldModel, reference_name: str | None) -> str:
    return reference_name or _TS_TYPE_MAP[field.field_type]


# ---------------------------------------------------------------------------
# Context builders
# ---------------------------------------------------------------------------


def build_field_context(
    field: FieldModel, collection_names: Mapping[str, str] | None = None
) -> dict[str, Any]:
    """Enrich one field with the names and per-language types templates need.

    *collection_names* maps lower-cased collection names to their declared
    spelling, so a reference written as ``orderitem`` still yields ``OrderItem``.
    """
    is_reference = bool(field.reference) and field.field_type == FieldType.REFERENCE
    reference_name = None
    if is_reference:
        target = (collection_names or {}).get(field.reference.lower(), field.reference)
        reference_name = pascal_case(target)
    return {
        "name": field.name,
        "json_name": json_field_name(field.name),
        "snake_name": snake_case(field.name),
        "type": field.field_type.value,
        "primary_key": field.primary_key,
        "required": field.required,
        "auto_generate": field.auto_generate,
        "reference": reference_name,
        "reference_json": snake_case(reference_name) if reference_name else None,
        "description": field.description,
        "java_type": _java_type(field, reference_name),
        "python_type": _python_type(field, reference_name),
        "python_base_type": reference_name or _PYTHON_TYPE_MAP[field.field_type],
        "ts_type": _ts_type(field, reference_name),
    }


def build_collection_context(
    collection: Collection,
    overrides: Mapping[str, str] | None = None,
    collection_names: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """Derive every name variant, field entry and capability flag of a collection.

    The collection must already have passed ``validate_project``.
    """
    names = CollectionNames.derive(collection.name, overrides)
    fields = [build_field_context(f, collection_names) for f in collection.fields]
    primary_key = next(f for f in fields if f["primary_key"])
    capabilities = derive_capabilities(collection.fields)

    return {
        "canonical_name": collection.name,
        "name": names.name,
        "name_decap": names.name_decap,
        "name_plural": names.name_plural,
        "name_plural_decap": names.name_plural_decap,
        "json": names.json,
        "json_plural": names.json_plural,
        "route": names.route,
        "description": collection.description,
        "fields": fields,
        "primary_key": primary_key,
        "primary_key_names": [f["name"] for f in fields if f["primary_key"]],
        **capabilities.as_dict(),
    }


def build_project_context(
    project: Project,
    collections: list[dict[str, Any]],
) -> dict[str, Any]:
    """Build the project-level context shared by every template unit."""
    package = project.package_name
    return {
        "project_name": project.name,
        "description": project.description,
        "package": package,
        "package_path": package.replace(".", "/"),
        "db_name": project.db_name,
        "db_name_pascal": pascal_case(project.db_name),
        "collections": collections,
    }


def build_contexts(
    project: Project, overrides: Mapping[str, str] | None = None
) -> tuple[dict[str, Any], list[dict[str, Any]]]:
    """Return the project context and one collection context per scaffolded collection.

    Collection contexts are returned in the project's declared order.
    """
    names = {c.name.lower(): c.name for c in project.scaffolded_collections}
    collection_ctxs = [
        build_collection_context(c, overrides, names) for c in project.scaffolded_collections
    ]
    return build_project_context(project, collection_ctxs), collection_ctxs
