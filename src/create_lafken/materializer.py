"""
create_lafken.materializer - Template Tree Materialization
==========================================================

This module reproduces a template tree under a destination directory.
It is the only part of create-lafken that touches the generated files;
prompts, installs and console banners live in the generator and CLI.

How a Tree is Materialized
--------------------------
The walk is a synchronous depth-first recursion. At each level:

    1. Ensure the destination directory exists (idempotent)
    2. List the source directory's entries
    3. For each entry:
       - directory  -> recurse with the same context
       - template   -> read as text, render, write with the marker stripped
       - plain file -> binary copy

Templates are files whose name ends with the template suffix (``.eta`` by
default). Exactly one suffix is recognized per run; everything else is
copied byte-for-byte, so images and other binaries survive untouched.

Existing files at a computed destination path are replaced. Anything else
already in the destination is left alone; deciding whether a non-empty
destination is acceptable is the caller's job.

Failure Policy
--------------
The first failure ends the run with a ``MaterializeError`` subclass
carrying the offending path. Entries after the failing one are never
processed; entries written before it stay on disk. There is no rollback.

Usage Example
-------------
>>> from create_lafken.materializer import materialize
>>> from create_lafken.models import TemplateContext
>>> ctx = TemplateContext.create("demo", ["api"])
>>> result = materialize(Path("template"), Path("demo"), ctx)
>>> result.files_created
[PosixPath('README.md'), PosixPath('src/index.ts')]
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from rich.markup import escape

from create_lafken.engine import JinjaEngine
from create_lafken.errors import DestinationWriteError, RenderError, SourceAccessError


if TYPE_CHECKING:
    from rich.console import Console

    from create_lafken.engine import TemplateEngine
    from create_lafken.models import TemplateContext


# Marker identifying template files; stripped from the output filename.
TEMPLATE_SUFFIX = ".eta"


@dataclass
class MaterializeResult:
    """
    What a successful run wrote.

    All paths are relative to ``dest_root`` and listed in the order they
    were processed.

    Attributes
    ----------
    dest_root : Path
        Root of the materialized tree.

    files_created : list[Path]
        Every file written, rendered or copied.

    directories_created : list[Path]
        Directories that did not exist before the run. The root is listed
        as ``Path(".")`` when it was created.

    templates_rendered : list[Path]
        Subset of ``files_created`` produced by the template engine.
    """

    dest_root: Path
    files_created: list[Path] = field(default_factory=list)
    directories_created: list[Path] = field(default_factory=list)
    templates_rendered: list[Path] = field(default_factory=list)


# =============================================================================
# Helpers
# =============================================================================


def strip_suffix(name: str, suffix: str = TEMPLATE_SUFFIX) -> str | None:
    """
    Destination filename for a template, or ``None`` for plain files.

    Examples
    --------
    >>> strip_suffix("README.md.eta")
    'README.md'
    >>> strip_suffix("logo.png") is None
    True
    """
    if name.endswith(suffix):
        return name[: -len(suffix)]
    return None


def ensure_directory(path: Path) -> bool:
    """
    Create ``path`` and any missing ancestors.

    Calling this on an existing directory is a no-op and leaves its
    contents untouched.

    Returns
    -------
    bool
        True if this call created the directory.

    Raises
    ------
    DestinationWriteError
        If the directory cannot be created, or a non-directory is in the way.
    """
    if path.is_dir():
        return False
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DestinationWriteError(path, f"Cannot create directory ({e.strerror or e})") from e
    return True


# =============================================================================
# Materializer
# =============================================================================


class Materializer:
    """
    One materialization run from ``source_root`` into ``dest_root``.

    The context, engine and suffix are fixed for the lifetime of the run;
    ``run()`` walks the tree and returns the result. Use the module-level
    ``materialize()`` unless you need to hold on to the instance.
    """

    def __init__(
        self,
        source_root: Path,
        dest_root: Path,
        context: TemplateContext,
        *,
        engine: TemplateEngine | None = None,
        suffix: str = TEMPLATE_SUFFIX,
        console: Console | None = None,
    ) -> None:
        if not suffix:
            msg = "Template suffix must not be empty"
            raise ValueError(msg)

        self.source_root = Path(source_root)
        self.dest_root = Path(dest_root)
        self.context = context
        self.engine = engine or JinjaEngine()
        self.suffix = suffix
        self.console = console
        self.result = MaterializeResult(dest_root=self.dest_root)

    def run(self) -> MaterializeResult:
        """
        Materialize the whole tree.

        Raises
        ------
        SourceAccessError
            If the source root is not a readable directory, or an entry
            below it cannot be read.
        DestinationWriteError
            If anything under the destination cannot be written.
        RenderError
            If a template fails to render.
        """
        if not self.source_root.is_dir():
            raise SourceAccessError(".", f"Template directory not found: {self.source_root}")

        self._process_directory(Path("."))
        return self.result

    # -------------------------------------------------------------------------
    # Walk
    # -------------------------------------------------------------------------

    def _process_directory(self, rel_dir: Path) -> None:
        try:
            created = ensure_directory(self.dest_root / rel_dir)
        except DestinationWriteError as e:
            raise DestinationWriteError(rel_dir, e.message) from e
        if created:
            self.result.directories_created.append(rel_dir)

        try:
            entries = sorted(
                (self.source_root / rel_dir).iterdir(),
                key=lambda p: p.name,
            )
        except OSError as e:
            raise SourceAccessError(rel_dir, f"Cannot list directory ({e.strerror or e})") from e

        for entry in entries:
            rel_path = rel_dir / entry.name

            try:
                is_dir = entry.is_dir()
            except OSError as e:
                raise SourceAccessError(rel_path, f"Cannot stat entry ({e.strerror or e})") from e

            if is_dir:
                self._process_directory(rel_path)
                continue

            dest_name = strip_suffix(entry.name, self.suffix)
            if dest_name is not None:
                self._render_file(entry, rel_path, rel_dir / dest_name)
            else:
                self._copy_file(entry, rel_path)

    def _render_file(self, source: Path, rel_source: Path, rel_dest: Path) -> None:
        try:
            text = source.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceAccessError(rel_source, f"Cannot read template ({e})") from e

        try:
            rendered = self.engine.render(text, self.context.as_template_vars())
        except RenderError as e:
            raise RenderError(rel_source, e.message) from e
        except Exception as e:
            raise RenderError(rel_source, f"{type(e).__name__}: {e}") from e

        try:
            (self.dest_root / rel_dest).write_text(rendered, encoding="utf-8")
        except OSError as e:
            raise DestinationWriteError(rel_dest, f"Cannot write file ({e.strerror or e})") from e

        self.result.files_created.append(rel_dest)
        self.result.templates_rendered.append(rel_dest)
        if self.console:
            self.console.print(f"  Rendered {escape(str(rel_dest))}")

    def _copy_file(self, source: Path, rel_path: Path) -> None:
        # Open both ends here so a failure can be attributed to the right side.
        try:
            src_file = source.open("rb")
        except OSError as e:
            raise SourceAccessError(rel_path, f"Cannot read file ({e.strerror or e})") from e

        with src_file:
            try:
                dest_file = (self.dest_root / rel_path).open("wb")
            except OSError as e:
                raise DestinationWriteError(rel_path, f"Cannot write file ({e.strerror or e})") from e

            with dest_file:
                try:
                    shutil.copyfileobj(src_file, dest_file)
                except OSError as e:
                    raise DestinationWriteError(rel_path, f"Cannot copy file ({e.strerror or e})") from e

        self.result.files_created.append(rel_path)
        if self.console:
            self.console.print(f"  Created {escape(str(rel_path))}")


def materialize(
    source_root: Path,
    dest_root: Path,
    context: TemplateContext,
    *,
    engine: TemplateEngine | None = None,
    suffix: str = TEMPLATE_SUFFIX,
    console: Console | None = None,
) -> MaterializeResult:
    """
    Reproduce ``source_root`` under ``dest_root``, rendering templates.

    Parameters
    ----------
    source_root : Path
        Existing, readable template tree. Never modified.

    dest_root : Path
        Output directory. Created if missing; may already contain files.

    context : TemplateContext
        Fully resolved variables, applied unchanged to every template.

    engine : TemplateEngine | None
        Engine used for templates. Defaults to ``JinjaEngine``.

    suffix : str, default=".eta"
        The single template marker for this run.

    console : Console | None
        Optional Rich console that receives one line per written file.

    Returns
    -------
    MaterializeResult
        Paths written, relative to ``dest_root``.

    Raises
    ------
    MaterializeError
        ``SourceAccessError``, ``DestinationWriteError`` or ``RenderError``
        for the first entry that failed. Earlier output is left in place.

    Examples
    --------
    >>> ctx = TemplateContext(appName="demo", services=(), uuid="abc-123")
    >>> materialize(Path("tpl"), Path("out"), ctx, suffix=".j2")
    MaterializeResult(dest_root=PosixPath('out'), ...)
    """
    return Materializer(
        source_root,
        dest_root,
        context,
        engine=engine,
        suffix=suffix,
        console=console,
    ).run()
