"""Output assembly and all-or-nothing persistence.

``assemble`` turns rendered outputs into a file tree and rejects path
collisions before anything touches the disk.  ``write_tree`` materialises a
tree by writing it to a staging directory next to the destination and then
renaming it into place, so a failed run never leaves partial output behind.
"""

from __future__ import annotations

import asyncio
import os
import shutil
import tempfile
from collections.abc import Iterable
from pathlib import Path, PurePosixPath, PureWindowsPath

from schemascaffold.errors import AssemblyError, AssemblyErrorKind
from schemascaffold.scaffolder.templates import RenderedOutput
from schemascaffold.utils import run_command

# Relative POSIX path -> UTF-8 text, in emission order.
FileTree = dict[str, str]

GIT_AUTHOR_NAME = "schemascaffold"
GIT_AUTHOR_EMAIL = "schemascaffold@localhost"


class GitInitError(Exception):
    """Raised when the generated project cannot be committed to a new repository."""

    def __init__(self, message: str, command: str = "", stderr: str = ""):
        self.command = command
        self.stderr = stderr
        super().__init__(message)


# ---------------------------------------------------------------------------
# Assembly
# ---------------------------------------------------------------------------


def assemble(outputs: Iterable[RenderedOutput]) -> FileTree:
    """Collect *outputs* into a file tree.

    Raises:
        AssemblyError: ``UNSAFE_PATH`` when an output path is absolute or
            climbs out of the project with ``..``; ``PATH_COLLISION`` when
            two outputs resolve to the same path, reporting both sources.
    """
    tree: FileTree = {}
    sources: dict[str, str] = {}
    for output in outputs:
        _check_relative(output)
        if output.path in tree:
            first = sources[output.path]
            raise AssemblyError(
                AssemblyErrorKind.PATH_COLLISION,
                f"'{output.path}' is produced by both {first} and {output.source}",
                path=output.path,
                sources=(first, output.source),
            )
        tree[output.path] = output.text
        sources[output.path] = output.source
    return tree


def _check_relative(output: RenderedOutput) -> None:
    posix = PurePosixPath(output.path)
    windows = PureWindowsPath(output.path)
    if (
        not output.path
        or posix.is_absolute()
        or windows.is_absolute()
        or windows.drive
        or ".." in windows.parts
    ):
        raise AssemblyError(
            AssemblyErrorKind.UNSAFE_PATH,
            f"'{output.path}' from {output.source} is not a path inside the project",
            path=output.path,
            sources=(output.source,),
        )


# ---------------------------------------------------------------------------
# Writing
# ---------------------------------------------------------------------------


async def write_tree(
    tree: FileTree,
    destination: str | Path,
    *,
    overwrite: bool = False,
) -> Path:
    """Write *tree* under *destination* atomically.

    Args:
        tree: Relative path -> text mapping, as returned by ``assemble``.
        destination: Directory that will hold the generated project.
        overwrite: Replace an existing *destination* instead of failing.

    Returns:
        The destination path.

    Raises:
        AssemblyError: ``DESTINATION_EXISTS`` when *destination* exists and
            *overwrite* is false.
    """
    dest = Path(destination)
    if dest.exists() and not overwrite:
        raise AssemblyError(
            AssemblyErrorKind.DESTINATION_EXISTS,
            f"destination {dest} already exists",
            path=str(dest),
        )
    return await asyncio.to_thread(_commit_tree, tree, dest)


def _commit_tree(tree: FileTree, dest: Path) -> Path:
    """Stage every file, then swap the staging directory into place."""
    dest.parent.mkdir(parents=True, exist_ok=True)
    staging = Path(tempfile.mkdtemp(prefix=f".{dest.name}.staging-", dir=dest.parent))
    backup = staging.with_name(staging.name + ".previous")
    moved_existing = False
    try:
        for rel_path, text in tree.items():
            _write_file(staging / rel_path, text)
        if dest.exists():
            os.replace(dest, backup)
            moved_existing = True
        os.replace(staging, dest)
    except BaseException:
        shutil.rmtree(staging, ignore_errors=True)
        if moved_existing and not dest.exists():
            os.replace(backup, dest)
        raise

    if moved_existing:
        shutil.rmtree(backup, ignore_errors=True)
    return dest


def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Git
# ---------------------------------------------------------------------------


async def init_git_repository(root: str | Path, message: str = "Initial") -> None:
    """Initialise a git repository in *root* and commit the generated files.

    ``.env*`` files are left out of the commit.
    """
    root_path = Path(root)
    identity = [
        "-c", f"user.name={GIT_AUTHOR_NAME}",
        "-c", f"user.email={GIT_AUTHOR_EMAIL}",
        "-c", "commit.gpgsign=false",
    ]
    commands = [
        ["git", "init"],
        ["git", "add", "--all", "--", ".", ":(exclude).env*"],
        ["git", *identity, "commit", "--allow-empty", "-m", message],
    ]
    for cmd in commands:
        returncode, _, stderr = await run_command(cmd, cwd=root_path, timeout=60)
        if returncode != 0:
            cmd_str = " ".join(cmd)
            raise GitInitError(
                f"Git command failed (exit {returncode}): {cmd_str}\n{stderr}",
                command=cmd_str,
                stderr=stderr,
            )
