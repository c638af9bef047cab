"""Command-line entry point.

Usage::

    python -m schemascaffold.cli shop.yaml --output ./out
    python -m schemascaffold.cli shop.yaml -o ./out --language python --flavor fastapi
    python -m schemascaffold.cli shop.json --package com.acme.shop --plural person=people
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

from rich.markup import escape

from schemascaffold.config import GeneratorConfig, parse_plural_overrides
from schemascaffold.errors import ScaffoldError
from schemascaffold.scaffolder.assembly import GitInitError
from schemascaffold.scaffolder.generator import ScaffoldGenerator
from schemascaffold.scaffolder.resolver import list_template_sets
from schemascaffold.schema.loader import load_project
from schemascaffold.utils import console, print_error, print_header, print_summary_table


def build_parser() -> argparse.ArgumentParser:
    defaults = GeneratorConfig.from_env()
    parser = argparse.ArgumentParser(
        prog="schemascaffold",
        description="Generate a REST application skeleton from a database schema",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  schemascaffold shop.yaml\n"
            "  schemascaffold shop.yaml -o ./out --language python --flavor fastapi\n"
            "  schemascaffold shop.json --package com.acme.shop --plural person=people\n"
        ),
    )
    parser.add_argument("schema", nargs="?", help="Path to the JSON or YAML schema file")
    parser.add_argument(
        "--output", "-o",
        default=str(defaults.output_dir),
        help=f"Output directory (default: {defaults.output_dir})",
    )
    parser.add_argument("--language", default=defaults.language, help="Template language")
    parser.add_argument("--flavor", default=defaults.flavor, help="Template flavor")
    parser.add_argument(
        "--template-dir",
        default=str(defaults.template_dir) if defaults.template_dir else None,
        help="Directory holding <language>/<flavor> template sets",
    )
    parser.add_argument("--package", default=None, help="Override the schema's package")
    parser.add_argument(
        "--plural",
        action="append",
        default=[],
        metavar="SINGULAR=PLURAL",
        help="Irregular plural override (repeatable)",
    )
    parser.add_argument("--overwrite", action="store_true", default=defaults.overwrite,
                        help="Replace an existing project directory")
    parser.add_argument("--git", action="store_true", default=defaults.init_git,
                        help="Initialise a git repository in the generated project")
    parser.add_argument("--sequential", action="store_true", default=not defaults.parallel,
                        help="Render templates one at a time")
    parser.add_argument("--verbose", "-v", action="store_true", default=defaults.verbose)
    parser.add_argument("--list-templates", action="store_true",
                        help="List the available template sets and exit")
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for ``python -m schemascaffold.cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_templates:
        for name in list_template_sets(args.template_dir):
            console.print(name)
        return

    if not args.schema:
        parser.error("the schema argument is required")

    schema_path = Path(args.schema)
    if not schema_path.exists():
        print_error(f"Error: Schema file not found: {schema_path}")
        sys.exit(1)

    try:
        plural_overrides = parse_plural_overrides(args.plural)
    except ValueError as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)

    config = GeneratorConfig(
        language=args.language,
        flavor=args.flavor,
        template_dir=Path(args.template_dir) if args.template_dir else None,
        output_dir=Path(args.output),
        overwrite=args.overwrite,
        parallel=not args.sequential,
        init_git=args.git,
        verbose=args.verbose,
        plural_overrides={**GeneratorConfig.from_env().plural_overrides, **plural_overrides},
    )

    try:
        project = load_project(schema_path)
        if args.package:
            project = project.model_copy(update={"package": args.package})
        if config.verbose:
            print_header(f"Scaffolding {project.name} ({config.template_set_name})")
        generator = ScaffoldGenerator(project, config)
        project_root = asyncio.run(generator.generate_to())
    except (ScaffoldError, GitInitError) as exc:
        print_error(f"Error: {escape(str(exc))}")
        sys.exit(1)

    files = sorted(p.relative_to(project_root).as_posix()
                   for p in project_root.rglob("*") if p.is_file() and ".git" not in p.parts)
    print_summary_table(
        {
            "Project": project.name,
            "Template set": config.template_set_name,
            "Collections": ", ".join(c.name for c in project.scaffolded_collections),
            "Files": str(len(files)),
            "Location": str(project_root),
        },
        title="Scaffold complete",
    )


if __name__ == "__main__":
    main()
