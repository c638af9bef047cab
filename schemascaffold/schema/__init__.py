"""Schema model, loader and validation for the scaffolder."""

from schemascaffold.schema.loader import load_project, project_from_dict
from schemascaffold.schema.models import (
    Collection,
    CollectionType,
    FieldModel,
    FieldType,
    Project,
    resolve_field_type,
)
from schemascaffold.schema.validator import validate_project

__all__ = [
    "Collection",
    "CollectionType",
    "FieldModel",
    "FieldType",
    "Project",
    "load_project",
    "project_from_dict",
    "resolve_field_type",
    "validate_project",
]
