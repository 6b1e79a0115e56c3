"""
create_lafken.generator - Project Creation Pipeline
===================================================

This module turns resolved ``ProjectOptions`` into a project on disk.
The heavy lifting, walking the template tree, is delegated to the
materializer; this module adds everything around it.

Architecture
------------
The generator follows a pipeline pattern:

    1. Check the bundled template directory exists
    2. Build the template context (project name, services, fresh uuid)
    3. Materialize the template tree into the target directory
    4. Install dependencies with the chosen package manager (optional)
    5. Print next steps

Steps 1-3 are fatal on failure. Step 4 is not: a failed install leaves a
usable project and is reported as a warning, just like the original tool.

Partial output from a failed materialization is left in place so the user
can inspect or delete it; the target directory may have held files before
we started, so removing it is never safe.

Usage Example
-------------
>>> from create_lafken.generator import create_project
>>> from create_lafken.models import ProjectOptions, Service
>>> options = ProjectOptions(name="orders", services=[Service.API], install=False)
>>> result = create_project(options)
>>> result.project_path
PosixPath('/current/dir/orders')
"""

from __future__ import annotations

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from create_lafken.errors import MaterializeError
from create_lafken.materializer import TEMPLATE_SUFFIX, materialize


if TYPE_CHECKING:
    from create_lafken.engine import TemplateEngine
    from create_lafken.models import PackageManager, ProjectOptions


# =============================================================================
# Module-Level Configuration
# =============================================================================

# Console for rich output
console = Console()

# Bundled lafken project template
TEMPLATE_DIR = Path(__file__).parent / "templates" / "project"


# =============================================================================
# Result Data Classes
# =============================================================================


@dataclass
class GenerationResult:
    """
    Result of a project creation.

    Attributes
    ----------
    success : bool
        Whether the template tree was materialized.

    project_path : Path
        Directory the project was created in.

    files_created : list[Path]
        Files written, relative to ``project_path``.

    dependencies_installed : bool
        Whether the package manager install ran and succeeded.

    warnings : list[str]
        Non-fatal problems, e.g. a failed install.

    errors : list[str]
        The fatal error, if any.
    """

    success: bool
    project_path: Path
    files_created: list[Path] = field(default_factory=list)
    dependencies_installed: bool = False
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)


# =============================================================================
# Target Directory Helpers
# =============================================================================


def is_directory_empty(path: Path) -> bool:
    """
    Whether ``path`` has no entries.

    A directory that does not exist counts as empty: nothing would be
    overwritten by creating a project there.
    """
    try:
        return not any(path.iterdir())
    except FileNotFoundError:
        return True


# =============================================================================
# Dependency Installation
# =============================================================================


def install_dependencies(target_dir: Path, package_manager: PackageManager) -> bool:
    """
    Run the package manager's install command in ``target_dir``.

    Parameters
    ----------
    target_dir : Path
        Root of the generated project.

    package_manager : PackageManager
        Which package manager to run.

    Returns
    -------
    bool
        True if the install succeeded, False otherwise.

    Notes
    -----
    If the package manager is not installed or the install fails, this
    returns False but does not raise. The project is still usable; the
    user can install later.
    """
    try:
        subprocess.run(
            package_manager.install_command,
            cwd=target_dir,
            capture_output=True,
            check=True,
        )
        return True

    except (subprocess.CalledProcessError, FileNotFoundError):
        return False


def next_steps(options: ProjectOptions) -> list[str]:
    """
    Commands the user should run after creation.

    Examples
    --------
    >>> next_steps(ProjectOptions(name="orders", install=False))
    ['cd orders', 'npm install', 'npm run dev']
    """
    steps: list[str] = []
    if not options.use_current_dir:
        steps.append(f"cd {options.name}")
    if not options.install:
        steps.append(" ".join(options.package_manager.install_command))
    steps.append(options.package_manager.dev_command)
    return steps


# =============================================================================
# Main Generation Function
# =============================================================================


def create_project(
    options: ProjectOptions,
    *,
    verbose: bool = True,
    template_dir: Path | None = None,
    engine: TemplateEngine | None = None,
) -> GenerationResult:
    """
    Create a lafken project from the bundled template.

    The caller is expected to have settled whether a non-empty target
    directory is acceptable; this function writes into it regardless.

    Parameters
    ----------
    options : ProjectOptions
        Resolved project options.

    verbose : bool, default=True
        If True, display progress information to the console.

    template_dir : Path | None
        Template tree to materialize. Defaults to ``TEMPLATE_DIR``.

    engine : TemplateEngine | None
        Template engine override, mainly for tests.

    Returns
    -------
    GenerationResult
        Result object containing success status and details.

    Raises
    ------
    FileNotFoundError
        If ``template_dir`` does not exist.
    MaterializeError
        If the template tree could not be materialized. Files written
        before the failure are left on disk.
    """
    template_dir = template_dir or TEMPLATE_DIR
    target_dir = options.target_dir
    result = GenerationResult(success=False, project_path=target_dir)

    if not template_dir.is_dir():
        msg = f"Template directory not found at {template_dir}"
        result.errors.append(msg)
        if verbose:
            console.print(f"[bold red]Error:[/] {escape(msg)}")
        raise FileNotFoundError(msg)

    if verbose:
        console.print()
        console.print(f"[bold]🚀 Creating project in {escape(str(target_dir))}...[/]")

    context = options.to_context()

    try:
        materialized = materialize(
            template_dir,
            target_dir,
            context,
            engine=engine,
            suffix=TEMPLATE_SUFFIX,
            console=console if verbose else None,
        )
    except MaterializeError as e:
        result.errors.append(str(e))
        if verbose:
            console.print(f"\n[bold red]{e.kind.description}:[/] {escape(str(e))}")
            console.print("[dim]Files written before the error were left in place.[/]")
        raise

    result.success = True
    result.files_created.extend(materialized.files_created)

    if verbose:
        console.print("[green]✓[/] Project created successfully!")

    if options.install:
        if verbose:
            console.print()
            console.print(
                f"[bold]📦 Installing dependencies with {options.package_manager.value}...[/]"
            )

        result.dependencies_installed = install_dependencies(
            target_dir, options.package_manager
        )

        if result.dependencies_installed:
            if verbose:
                console.print("  [green]✓[/] Dependencies installed successfully!")
        else:
            result.warnings.append(
                f"Failed to install dependencies with {options.package_manager.value}"
            )
            if verbose:
                console.print("  [yellow]⚠[/] Failed to install dependencies")

    if verbose:
        steps = "\n".join(f"  {step}" for step in next_steps(options))
        console.print()
        console.print(
            Panel(
                f"[bold green]🎉 All done! Happy coding with lafken![/]\n\n"
                f"[dim]Location:[/] {escape(str(target_dir))}\n\n"
                f"[bold]Next steps:[/]\n{steps}",
                title="[bold green]Success[/]",
                border_style="green",
            )
        )

    return result
