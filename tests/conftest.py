"""Shared pytest fixtures for the schemascaffold test suite.

Provides reusable fixtures for:
- Sample projects (the single-collection Shop project and a multi-collection one)
- Raw schema documents and schema files on disk
- Small in-memory template sets with project- and collection-scoped units
"""

from __future__ import annotations

import json
import textwrap
from pathlib import Path
from typing import Any

import pytest
import yaml

from schemascaffold.scaffolder.resolver import TemplateSet, TemplateUnit
from schemascaffold.schema.models import Project


# ---------------------------------------------------------------------------
# Schema documents
# ---------------------------------------------------------------------------

@pytest.fixture
def shop_schema() -> dict[str, Any]:
    """One collection with an identifier primary key and a timestamp."""
    return {
        "name": "Shop",
        "db_name": "shopdb",
        "collections": [
            {
                "name": "Order",
                "fields": [
                    {"name": "id", "type": "uuid", "primary_key": True},
                    {"name": "placedAt", "type": "timestamp"},
                ],
            },
        ],
    }


@pytest.fixture
def store_schema() -> dict[str, Any]:
    """Three collections covering every field type and a message collection."""
    return {
        "name": "Store",
        "db_name": "store_db",
        "package": "com.acme.store",
        "description": "A small store backend.",
        "collections": [
            {
                "name": "Product",
                "fields": [
                    {"name": "id", "type": "integer", "primary_key": True},
                    {"name": "name", "type": "string"},
                    {"name": "price", "type": "float"},
                    {"name": "in_stock", "type": "boolean", "required": False},
                ],
            },
            {
                "name": "order_item",
                "fields": [
                    {"name": "item_id", "type": "uuid", "primary_key": True, "auto_generate": True},
                    {"name": "product", "type": "reference", "reference": "Product"},
                    {"name": "quantity", "type": "int"},
                    {"name": "created_at", "type": "datetime", "required": False},
                ],
            },
            {
                "name": "Address",
                "fields": [
                    {"name": "id", "type": "integer", "primary_key": True},
                    {"name": "street", "type": "string"},
                ],
            },
            {
                "name": "audit_events",
                "collection_type": "messages",
                "fields": [
                    {"name": "message", "type": "string"},
                ],
            },
        ],
    }


@pytest.fixture
def shop_project(shop_schema: dict[str, Any]) -> Project:
    return Project.model_validate(shop_schema)


@pytest.fixture
def store_project(store_schema: dict[str, Any]) -> Project:
    return Project.model_validate(store_schema)


@pytest.fixture
def schema_file(tmp_path: Path, store_schema: dict[str, Any]) -> Path:
    """The store schema written as YAML."""
    path = tmp_path / "store.yaml"
    path.write_text(yaml.safe_dump(store_schema, sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture
def shop_schema_file(tmp_path: Path, shop_schema: dict[str, Any]) -> Path:
    """The shop schema written as JSON."""
    path = tmp_path / "shop.json"
    path.write_text(json.dumps(shop_schema), encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Template sets
# ---------------------------------------------------------------------------

CONTROLLER_BODY = textwrap.dedent("""\
    package {{ package }}.controller;

    {% if collection.has_temporal_field %}
    import java.util.Date;
    {% endif %}
    {% if collection.has_identifier_field %}
    import java.util.UUID;
    {% endif %}

    public class {{ collection.name }}Controller {
      private final String route = "/{{ collection.route }}";
    }
    """)

INITIALIZER_BODY = textwrap.dedent("""\
    package {{ package }};

    public class Initializer {
      Class<?>[] collections = { {% for c in collections %}{{ c.name }}.class{% if not loop.last %}, {% endif %}{% endfor %} };
    }
    """)


@pytest.fixture
def controller_unit() -> TemplateUnit:
    return TemplateUnit(
        path="src/{package_path}/controller/{Collection_name}Controller.java",
        body=CONTROLLER_BODY,
    )


@pytest.fixture
def initializer_unit() -> TemplateUnit:
    return TemplateUnit(path="src/{package_path}/Initializer.java", body=INITIALIZER_BODY)


@pytest.fixture
def java_like_set(controller_unit: TemplateUnit, initializer_unit: TemplateUnit) -> TemplateSet:
    """One collection-scoped controller and one project-scoped initializer."""
    return TemplateSet(name="test/java", units=(controller_unit, initializer_unit))


@pytest.fixture
def template_tree(tmp_path: Path) -> Path:
    """A template directory on disk, mixing templates and static files."""
    root = tmp_path / "templates" / "demo" / "basic"
    (root / "models").mkdir(parents=True)
    (root / "README.md.j2").write_text("# {{ project_name }}\n", encoding="utf-8")
    (root / "models" / "{collection_name}.txt.j2").write_text(
        "{{ collection.name }}\n", encoding="utf-8"
    )
    (root / ".gitignore").write_text("build/\n", encoding="utf-8")
    return root
