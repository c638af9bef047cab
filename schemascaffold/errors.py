"""Error taxonomy for a scaffold generation run.

Every failure aborts the whole run.  Errors are deterministic given the same
schema and template set, so none of them is ever retried: the caller fixes the
input (schema errors, collisions) or the template set (template and render
errors) and runs again.
"""

from __future__ import annotations

from enum import Enum


class SchemaErrorKind(str, Enum):
    """Reasons a schema is rejected before any generation work starts."""
    EMPTY_PROJECT = "empty_project"
    DUPLICATE_NAME = "duplicate_name"
    MISSING_PRIMARY_KEY = "missing_primary_key"
    MULTIPLE_PRIMARY_KEYS = "multiple_primary_keys"
    UNKNOWN_TYPE = "unknown_type"
    UNKNOWN_REFERENCE = "unknown_reference"
    INVALID_IDENTIFIER = "invalid_identifier"
    INVALID_DOCUMENT = "invalid_document"


class TemplateErrorKind(str, Enum):
    """Defects in a template set."""
    UNRESOLVED_PLACEHOLDER = "unresolved_placeholder"
    UNKNOWN_TEMPLATE_SET = "unknown_template_set"


class RenderErrorKind(str, Enum):
    """Failures while rendering a single template unit."""
    UNDEFINED_VARIABLE = "undefined_variable"
    MALFORMED_CONDITIONAL = "malformed_conditional"
    RUNTIME_FAILURE = "runtime_failure"


class AssemblyErrorKind(str, Enum):
    """Failures while collecting or persisting the output tree."""
    PATH_COLLISION = "path_collision"
    DESTINATION_EXISTS = "destination_exists"
    UNSAFE_PATH = "unsafe_path"


class ScaffoldError(Exception):
    """Base class for every error raised by a generation run."""

    category = "scaffold"

    def __init__(self, kind: Enum, detail: str) -> None:
        self.kind = kind
        self.detail = detail
        super().__init__(f"{self.category} error ({kind.value}): {detail}")


class SchemaError(ScaffoldError):
    """Raised when the input schema is invalid."""

    category = "schema"

    def __init__(
        self,
        kind: SchemaErrorKind,
        detail: str,
        *,
        collection: str | None = None,
        field: str | None = None,
    ) -> None:
        self.collection = collection
        self.field = field
        super().__init__(kind, detail)


class TemplateError(ScaffoldError):
    """Raised when the template set cannot be resolved against a project."""

    category = "template"

    def __init__(
        self,
        kind: TemplateErrorKind,
        detail: str,
        *,
        template_path: str | None = None,
        token: str | None = None,
    ) -> None:
        self.template_path = template_path
        self.token = token
        super().__init__(kind, detail)


class RenderError(ScaffoldError):
    """Raised when a template unit cannot be compiled or rendered."""

    category = "render"

    def __init__(
        self,
        kind: RenderErrorKind,
        detail: str,
        *,
        template_path: str,
        variable: str | None = None,
        line: int | None = None,
    ) -> None:
        self.template_path = template_path
        self.variable = variable
        self.line = line
        super().__init__(kind, detail)


class AssemblyError(ScaffoldError):
    """Raised when the output tree cannot be assembled or written."""

    category = "assembly"

    def __init__(
        self,
        kind: AssemblyErrorKind,
        detail: str,
        *,
        path: str,
        sources: tuple[str, ...] = (),
    ) -> None:
        self.path = path
        self.sources = sources
        super().__init__(kind, detail)
