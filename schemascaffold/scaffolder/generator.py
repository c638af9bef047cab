"""Main scaffolding orchestrator.

Takes a ``Project`` and a template set and produces the generated project as a
file tree, optionally writing it to disk:

    validate -> expand -> render -> assemble -> write

Any error aborts the run before anything is written.
"""

from __future__ import annotations

import time
from pathlib import Path

from schemascaffold.config import GeneratorConfig
from schemascaffold.schema.models import Project
from schemascaffold.schema.validator import validate_project
from schemascaffold.utils import format_duration, print_info, print_success

from .assembly import FileTree, assemble, init_git_repository, write_tree
from .resolver import TemplateSet, expand, load_bundled_template_set
from .templates import TemplateRenderer


class ScaffoldGenerator:
    """Generates a project skeleton for one schema.

    The template set is either passed in or loaded from the configured
    ``language``/``flavor``.  One generator may run several times; every run
    recomputes everything from the project and template set.
    """

    def __init__(
        self,
        project: Project,
        config: GeneratorConfig | None = None,
        template_set: TemplateSet | None = None,
    ) -> None:
        self.project = project
        self.config = config or GeneratorConfig()
        self.template_set = template_set or load_bundled_template_set(
            self.config.language, self.config.flavor, self.config.template_dir
        )

    # -- Public API --------------------------------------------------------

    async def generate(self) -> FileTree:
        """Validate the project and render the complete file tree.

        Raises:
            SchemaError, TemplateError, RenderError, AssemblyError: on the
                first failure; no partial tree is returned.
        """
        started = time.monotonic()
        overrides = self.config.plural_overrides

        validate_project(self.project)
        bindings = expand(self.template_set, self.project, overrides)
        self._report(
            f"Expanded {len(self.template_set)} templates into {len(bindings)} files"
        )

        renderer = TemplateRenderer(plural_overrides=overrides)
        outputs = await renderer.render_all(bindings, parallel=self.config.parallel)
        tree = assemble(outputs)

        self._report(
            f"Rendered {len(tree)} files in {format_duration(time.monotonic() - started)}"
        )
        return tree

    async def generate_to(self, output_dir: str | Path | None = None) -> Path:
        """Generate the project and write it to ``<output_dir>/<db_name>``.

        Args:
            output_dir: Parent directory; defaults to ``config.output_dir``.

        Returns:
            Path to the generated project root.
        """
        tree = await self.generate()
        parent = Path(output_dir) if output_dir is not None else self.config.output_dir
        project_root = await write_tree(
            tree, parent / self.project.db_name, overwrite=self.config.overwrite
        )
        if self.config.init_git:
            await init_git_repository(project_root)
        if self.config.verbose:
            print_success(f"Project written to {project_root}")
        return project_root

    # -- Internal ----------------------------------------------------------

    def _report(self, message: str) -> None:
        if self.config.verbose:
            print_info(message)
