"""Scaffolder configuration.

Typed settings for a generation run.  ``GeneratorConfig`` is a Pydantic v2
model so it can be validated at construction time and serialised to/from JSON
or built from environment variables.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


class GeneratorConfig(BaseModel):
    """Settings for one scaffold generation run.

    Instances are typically created by the CLI entry point and handed to
    ``ScaffoldGenerator``.
    """

    language: str = Field(default="java", description="Target language of the template set")
    flavor: str = Field(default="spring", description="Framework flavor of the template set")
    template_dir: Optional[Path] = Field(
        default=None, description="Root of the template sets; defaults to the bundled ones"
    )
    output_dir: Path = Field(default=Path("./output"))
    overwrite: bool = Field(default=False, description="Replace an existing project directory")
    parallel: bool = Field(default=True, description="Render bindings on worker threads")
    init_git: bool = Field(default=False, description="Commit the result to a new git repository")
    verbose: bool = Field(default=False, description="Report each generation step")
    plural_overrides: dict[str, str] = Field(
        default_factory=dict,
        description="Irregular plurals, e.g. {'person': 'people'}",
    )

    @property
    def template_set_name(self) -> str:
        return f"{self.language}/{self.flavor}"

    def project_dir(self, db_name: str) -> Path:
        """Directory the project for *db_name* is written to."""
        return self.output_dir / db_name

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file and return its path."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "GeneratorConfig":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Build a ``GeneratorConfig`` from environment variables.

        Recognised variables (all optional):
            SCAFFOLD_LANGUAGE, SCAFFOLD_FLAVOR, SCAFFOLD_TEMPLATE_DIR,
            SCAFFOLD_OUTPUT_DIR, SCAFFOLD_OVERWRITE, SCAFFOLD_PARALLEL,
            SCAFFOLD_INIT_GIT, SCAFFOLD_VERBOSE, SCAFFOLD_PLURALS
            (comma-separated ``singular=plural`` pairs).
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SCAFFOLD_LANGUAGE"):
            kwargs["language"] = os.environ["SCAFFOLD_LANGUAGE"]
        if os.environ.get("SCAFFOLD_FLAVOR"):
            kwargs["flavor"] = os.environ["SCAFFOLD_FLAVOR"]
        if os.environ.get("SCAFFOLD_TEMPLATE_DIR"):
            kwargs["template_dir"] = Path(os.environ["SCAFFOLD_TEMPLATE_DIR"])
        if os.environ.get("SCAFFOLD_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["SCAFFOLD_OUTPUT_DIR"])
        for name in ("overwrite", "parallel", "init_git", "verbose"):
            value = os.environ.get(f"SCAFFOLD_{name.upper()}")
            if value:
                kwargs[name] = _env_flag(value)
        if os.environ.get("SCAFFOLD_PLURALS"):
            kwargs["plural_overrides"] = parse_plural_overrides(
                os.environ["SCAFFOLD_PLURALS"].split(",")
            )
        return cls(**kwargs)


def parse_plural_overrides(pairs: list[str]) -> dict[str, str]:
    """Parse ``["person=people", "child=children"]`` into a mapping.

    Raises:
        ValueError: If an entry is not of the form ``singular=plural``.
    """
    overrides: dict[str, str] = {}
    for pair in pairs:
        pair = pair.strip()
        if not pair:
            continue
        singular, sep, plural = pair.partition("=")
        if not sep or not singular.strip() or not plural.strip():
            raise ValueError(f"Invalid plural override '{pair}' (expected singular=plural)")
        overrides[singular.strip().lower()] = plural.strip()
    return overrides


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")
