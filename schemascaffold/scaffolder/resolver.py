"""Template set loading and path expansion.

A template set is a directory tree.  Files ending in ``.j2`` are Jinja2
templates; anything else is a static file copied verbatim.  Paths may contain
``{token}`` placeholders:

Project tokens (substituted in every path):
    ``{package}``        the dotted package, e.g. ``com.acme.shop``
    ``{package_path}``   the package as a directory path, ``com/acme/shop``
    ``{db_name}``        the database name as declared
    ``{DbName}``         the database name in PascalCase
    ``{project_name}``   the project name as declared

Collection tokens (make a unit collection-scoped):
    ``{Collection_name}``   ``OrderItem``
    ``{Collection_names}``  ``OrderItems``
    ``{collection_name}``   ``order_item``
    ``{collection_names}``  ``order_items``
    ``{collection_route}``  ``order-items``

A collection-scoped unit expands into one binding per scaffolded collection,
in the project's declared order.  Body placeholders are left to the renderer.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from schemascaffold.errors import TemplateError, TemplateErrorKind
from schemascaffold.schema.models import Project
from schemascaffold.scaffolder.context import build_contexts


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

TEMPLATE_SUFFIX = ".j2"

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Base layers rendered underneath a flavor, e.g. ``python/base`` under
# ``python/fastapi``.
FLAVOR_LAYERS: dict[str, list[str]] = {
    "fastapi": ["base"],
}

_TOKEN_RE = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")

PROJECT_TOKENS: dict[str, str] = {
    "package": "package",
    "package_path": "package_path",
    "db_name": "db_name",
    "DbName": "db_name_pascal",
    "project_name": "project_name",
}

COLLECTION_TOKENS: dict[str, str] = {
    "Collection_name": "name",
    "Collection_names": "name_plural",
    "collection_name": "json",
    "collection_names": "json_plural",
    "collection_route": "route",
}


# ---------------------------------------------------------------------------
# Data types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TemplateUnit:
    """One template file: a virtual path and its body."""

    path: str
    body: str
    static: bool = False

    @property
    def tokens(self) -> list[str]:
        """Placeholder names appearing in the path, in order."""
        return _TOKEN_RE.findall(self.path)

    @property
    def is_collection_scoped(self) -> bool:
        return any(t in COLLECTION_TOKENS for t in self.tokens)


@dataclass(frozen=True)
class TemplateSet:
    """An ordered, read-only collection of template units."""

    name: str
    units: tuple[TemplateUnit, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.units)

    def paths(self) -> list[str]:
        return [u.path for u in self.units]

    def layered_over(self, base: "TemplateSet") -> "TemplateSet":
        """Return *base* with this set's units added on top.

        A unit in this set replaces the base unit with the same path.
        """
        own = {u.path for u in self.units}
        merged = [u for u in base.units if u.path not in own] + list(self.units)
        return TemplateSet(name=self.name, units=tuple(merged))


@dataclass(frozen=True)
class Binding:
    """A template unit paired with its resolved output path and context."""

    unit: TemplateUnit
    output_path: str
    context: Mapping[str, Any]
    collection: str | None = None

    @property
    def source(self) -> str:
        """Human-readable origin, used in collision reports."""
        if self.collection:
            return f"{self.unit.path} [{self.collection}]"
        return self.unit.path


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


def load_template_set(root: str | Path, name: str | None = None) -> TemplateSet:
    """Load every file under *root* as a template unit, in sorted path order."""
    root_path = Path(root)
    if not root_path.is_dir():
        raise TemplateError(
            TemplateErrorKind.UNKNOWN_TEMPLATE_SET,
            f"template directory not found: {root_path}",
            template_path=str(root_path),
        )

    units: list[TemplateUnit] = []
    for template_file in sorted(p for p in root_path.rglob("*") if p.is_file()):
        rel = template_file.relative_to(root_path).as_posix()
        body = template_file.read_text(encoding="utf-8")
        if rel.endswith(TEMPLATE_SUFFIX):
            units.append(TemplateUnit(path=rel[: -len(TEMPLATE_SUFFIX)], body=body))
        else:
            units.append(TemplateUnit(path=rel, body=body, static=True))

    return TemplateSet(name=name or root_path.name, units=tuple(units))


def load_bundled_template_set(
    language: str,
    flavor: str,
    template_dir: str | Path | None = None,
) -> TemplateSet:
    """Load ``<template_dir>/<language>/<flavor>`` on top of its base layers.

    Args:
        language: Target language directory, e.g. ``"java"``.
        flavor: Framework directory, e.g. ``"spring"`` or ``"fastapi"``.
        template_dir: Root of the template sets; defaults to the templates
            shipped with this package.
    """
    root = Path(template_dir) if template_dir is not None else _DEFAULT_TEMPLATE_DIR
    language_dir = root / language.lower()
    flavor_dir = language_dir / flavor.lower()
    if not flavor_dir.is_dir():
        available = list_template_sets(root)
        raise TemplateError(
            TemplateErrorKind.UNKNOWN_TEMPLATE_SET,
            f"no template set '{language}/{flavor}' (available: {', '.join(available) or 'none'})",
            template_path=str(flavor_dir),
        )

    result = TemplateSet(name=f"{language}/{flavor}")
    for layer in FLAVOR_LAYERS.get(flavor.lower(), []):
        result = load_template_set(language_dir / layer).layered_over(result)
    return load_template_set(flavor_dir, name=f"{language}/{flavor}").layered_over(result)


def list_template_sets(template_dir: str | Path | None = None) -> list[str]:
    """Return the ``language/flavor`` names available under *template_dir*."""
    root = Path(template_dir) if template_dir is not None else _DEFAULT_TEMPLATE_DIR
    if not root.is_dir():
        return []
    return sorted(
        f"{lang.name}/{flavor.name}"
        for lang in root.iterdir()
        if lang.is_dir()
        for flavor in lang.iterdir()
        if flavor.is_dir()
    )


# ---------------------------------------------------------------------------
# Expansion
# ---------------------------------------------------------------------------


def expand(
    template_set: TemplateSet,
    project: Project,
    overrides: Mapping[str, str] | None = None,
) -> list[Binding]:
    """Expand *template_set* against a validated *project*.

    Returns one binding per project-scoped unit and one binding per scaffolded
    collection for each collection-scoped unit.  Either every path resolves or
    ``TemplateError`` is raised and nothing is returned.
    """
    project_ctx, collection_ctxs = build_contexts(project, overrides)
    return expand_units(template_set.units, project_ctx, collection_ctxs)


def expand_units(
    units: tuple[TemplateUnit, ...] | list[TemplateUnit],
    project_context: dict[str, Any],
    collection_contexts: list[dict[str, Any]],
) -> list[Binding]:
    """Expand *units* using pre-built contexts (see ``build_contexts``)."""
    bindings: list[Binding] = []
    for unit in units:
        _check_tokens(unit)
        base_path = _substitute(unit.path, PROJECT_TOKENS, project_context)

        if not unit.is_collection_scoped:
            bindings.append(Binding(unit, base_path, project_context))
            continue

        for collection in collection_contexts:
            bindings.append(
                Binding(
                    unit,
                    _substitute(base_path, COLLECTION_TOKENS, collection),
                    {**project_context, "collection": collection},
                    collection=collection["name"],
                )
            )
    return bindings


def _check_tokens(unit: TemplateUnit) -> None:
    for token in unit.tokens:
        if token not in PROJECT_TOKENS and token not in COLLECTION_TOKENS:
            raise TemplateError(
                TemplateErrorKind.UNRESOLVED_PLACEHOLDER,
                f"path '{unit.path}' uses unknown placeholder '{{{token}}}'",
                template_path=unit.path,
                token=token,
            )


def _substitute(path: str, tokens: dict[str, str], values: Mapping[str, Any]) -> str:
    """Replace the *tokens* found in *path*; other tokens are left untouched."""

    def _replace(match: re.Match[str]) -> str:
        key = tokens.get(match.group(1))
        return str(values[key]) if key else match.group(0)

    return _TOKEN_RE.sub(_replace, path)
