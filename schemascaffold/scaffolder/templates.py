"""Jinja2 template rendering for scaffold bindings.

Provides the ``TemplateRenderer`` class which compiles template units and
renders them against binding contexts.  Undefined references raise
(``StrictUndefined``).  Supports conditionals on the capability flags and repetition
over ``collections`` with Jinja2's own ``{% if %}`` and ``{% for %}`` blocks.
"""

from __future__ import annotations

import asyncio
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from jinja2 import (
    Environment,
    StrictUndefined,
    Template,
    TemplateError,
    TemplateSyntaxError,
    UndefinedError,
)

from schemascaffold.errors import RenderError, RenderErrorKind
from schemascaffold.naming import (
    camel_case,
    decapitalize,
    kebab_case,
    pascal_case,
    pluralize,
    snake_case,
)
from schemascaffold.scaffolder.resolver import Binding, TemplateUnit

_UNDEFINED_NAME_RE = re.compile(r"'([^']+)' is undefined")
_UNDEFINED_ATTR_RE = re.compile(r"has no attribute '([^']+)'")


@dataclass(frozen=True)
class RenderedOutput:
    """The final text for one output path."""

    path: str
    text: str
    source: str


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders template units with binding contexts.

    Each unit is compiled once and the compiled template is reused for every
    binding of that unit.  Rendering is side-effect free, so bindings may be
    rendered concurrently.
    """

    def __init__(self, plural_overrides: Mapping[str, str] | None = None) -> None:
        self.plural_overrides = dict(plural_overrides or {})
        self.env = Environment(
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["pascal_case"] = pascal_case
        self.env.filters["camel_case"] = camel_case
        self.env.filters["snake_case"] = snake_case
        self.env.filters["kebab_case"] = kebab_case
        self.env.filters["decapitalize"] = decapitalize
        self.env.filters["pluralize"] = self._pluralize_filter
        self._compiled: dict[TemplateUnit, Template] = {}

    # -- Single unit rendering ---------------------------------------------

    def compile(self, unit: TemplateUnit) -> Template | None:
        """Compile *unit* (cached).  Static units have no template."""
        if unit.static:
            return None
        template = self._compiled.get(unit)
        if template is None:
            try:
                template = self.env.from_string(unit.body)
            except TemplateSyntaxError as exc:
                raise RenderError(
                    RenderErrorKind.MALFORMED_CONDITIONAL,
                    f"{unit.path}:{exc.lineno}: {exc.message}",
                    template_path=unit.path,
                    line=exc.lineno,
                ) from exc
            self._compiled[unit] = template
        return template

    def render(self, unit: TemplateUnit, context: Mapping[str, Any]) -> str:
        """Render *unit* with *context* and return the text.

        Raises:
            RenderError: ``UNDEFINED_VARIABLE`` when the body references a
                name missing from *context*, ``MALFORMED_CONDITIONAL`` when the
                body does not parse, ``RUNTIME_FAILURE`` for any other error
                raised while rendering.
        """
        template = self.compile(unit)
        if template is None:
            return unit.body
        try:
            return template.render(dict(context))
        except UndefinedError as exc:
            variable = _undefined_name(str(exc))
            raise RenderError(
                RenderErrorKind.UNDEFINED_VARIABLE,
                f"{unit.path}: undefined variable '{variable}' ({exc})",
                template_path=unit.path,
                variable=variable,
            ) from exc
        except (TemplateError, TypeError, ValueError) as exc:
            # e.g. an {% include %} with no loader, or a filter called with bad arguments
            raise RenderError(
                RenderErrorKind.RUNTIME_FAILURE,
                f"{unit.path}: {type(exc).__name__}: {exc}",
                template_path=unit.path,
            ) from exc

    def render_string(self, template_string: str, context: Mapping[str, Any]) -> str:
        """Render an inline template string with the provided context.

        Useful for rendering small fragments that are not part of a template
        set.
        """
        return self.render(TemplateUnit(path="<string>", body=template_string), context)

    def render_binding(self, binding: Binding) -> RenderedOutput:
        """Render one binding into its final output."""
        text = self.render(binding.unit, binding.context)
        return RenderedOutput(path=binding.output_path, text=text, source=binding.source)

    # -- Batch rendering (async) -------------------------------------------

    async def render_all(
        self,
        bindings: Sequence[Binding],
        *,
        parallel: bool = True,
    ) -> list[RenderedOutput]:
        """Render every binding, in order.

        Every unit is compiled up front, so a syntax error is reported before
        any rendering starts.  With *parallel* the renders run on worker
        threads; the first failure propagates and the other results are
        discarded.
        """
        for binding in bindings:
            self.compile(binding.unit)

        if not parallel:
            return [self.render_binding(b) for b in bindings]

        results = await asyncio.gather(
            *(asyncio.to_thread(self.render_binding, b) for b in bindings)
        )
        return list(results)

    # -- Filters -----------------------------------------------------------

    def _pluralize_filter(self, value: str) -> str:
        return pluralize(value, self.plural_overrides)


def _undefined_name(message: str) -> str:
    """Pull the missing variable or attribute name out of a Jinja2 message."""
    match = _UNDEFINED_NAME_RE.search(message) or _UNDEFINED_ATTR_RE.search(message)
    return match.group(1) if match else message
