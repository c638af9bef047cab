"""Load a ``Project`` from a JSON or YAML schema file."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from schemascaffold.errors import SchemaError, SchemaErrorKind
from schemascaffold.schema.models import Project


def load_project(path: str | Path) -> Project:
    """Read *path* and build a ``Project``.

    Files ending in ``.yaml`` or ``.yml`` are parsed with PyYAML, anything
    else as JSON.  The result is structurally validated by pydantic only;
    call ``validate_project`` for the semantic checks.

    Raises:
        FileNotFoundError: If *path* does not exist.
        SchemaError: If the document cannot be parsed or has the wrong shape.
    """
    file_path = Path(path)
    raw = file_path.read_text(encoding="utf-8")
    try:
        if file_path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(raw)
        else:
            data = json.loads(raw)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise SchemaError(
            SchemaErrorKind.INVALID_DOCUMENT, f"cannot parse {file_path}: {exc}"
        ) from exc

    return project_from_dict(data, source=str(file_path))


def project_from_dict(data: Any, source: str = "<schema>") -> Project:
    """Build a ``Project`` from an already-parsed schema document."""
    if not isinstance(data, dict):
        raise SchemaError(
            SchemaErrorKind.INVALID_DOCUMENT,
            f"{source}: top-level schema must be a mapping, got {type(data).__name__}",
        )
    try:
        return Project.model_validate(data)
    except ValidationError as exc:
        raise SchemaError(SchemaErrorKind.INVALID_DOCUMENT, f"{source}: {exc}") from exc
