"""Schema-driven scaffolder -- generates project skeletons from a schema.

This module takes a ``Project`` (collections with typed fields) and a
template set, and renders a project with create/read/delete endpoints for
every collection.

Quick usage::

    from schemascaffold.schema import load_project
    from schemascaffold.scaffolder import ScaffoldGenerator
    from schemascaffold.config import GeneratorConfig

    project = load_project("shop.yaml")
    generator = ScaffoldGenerator(project, GeneratorConfig(language="java", flavor="spring"))
    project_path = await generator.generate_to("/tmp/output")
"""

from schemascaffold.scaffolder.assembly import FileTree, assemble, write_tree
from schemascaffold.scaffolder.capabilities import Capabilities, derive_capabilities
from schemascaffold.scaffolder.generator import ScaffoldGenerator
from schemascaffold.scaffolder.resolver import (
    Binding,
    TemplateSet,
    TemplateUnit,
    expand,
    load_bundled_template_set,
    load_template_set,
)
from schemascaffold.scaffolder.templates import RenderedOutput, TemplateRenderer

__all__ = [
    "Binding",
    "Capabilities",
    "FileTree",
    "RenderedOutput",
    "ScaffoldGenerator",
    "TemplateRenderer",
    "TemplateSet",
    "TemplateUnit",
    "assemble",
    "derive_capabilities",
    "expand",
    "load_bundled_template_set",
    "load_template_set",
    "write_tree",
]
