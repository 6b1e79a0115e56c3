"""
create_lafken.cli - Command Line Interface
==========================================

This module provides the command-line interface for create-lafken using
Typer, with questionary for interactive prompts and Rich for output.

Architecture
------------
    app (main entry point)
    └── new  - Create a new lafken project

``new`` resolves every option from, in order of precedence: command line
flags, a ``--config`` TOML file, interactive prompts, and finally model
defaults. The --yes flag skips all prompts for CI usage.

Usage Examples
--------------
Interactive mode (prompts for options):
    $ create-lafken new

Non-interactive mode:
    $ create-lafken new orders -s api -s queue -m pnpm --yes

From a config file:
    $ create-lafken new --config lafken.toml --yes

See Also
--------
- generator.py: Project creation pipeline
- models.py: Option and context models
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import questionary
import tomli
import typer
from pydantic import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from create_lafken import __version__
from create_lafken.errors import MaterializeError
from create_lafken.generator import create_project, is_directory_empty
from create_lafken.models import (
    DEFAULT_PROJECT_NAME,
    PackageManager,
    ProjectOptions,
    Service,
    validate_project_name,
)


# =============================================================================
# CLI Application Setup
# =============================================================================

app = typer.Typer(
    name="create-lafken",
    help="Create a new lafken serverless project.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=True,
)

# Console for rich output
console = Console()


# =============================================================================
# Version Callback
# =============================================================================

def version_callback(value: bool) -> None:
    """Display version information and exit."""
    if value:
        console.print(Panel(
            f"[bold cyan]create-lafken[/] version [cyan]{__version__}[/]\n\n"
            f"[dim]lafken project bootstrapper[/]",
            border_style="cyan",
        ))
        raise typer.Exit()


# =============================================================================
# Interactive Prompts
# =============================================================================

def _name_validator(value: str) -> bool | str:
    try:
        validate_project_name(value)
    except ValueError as e:
        return str(e)
    return True


def prompt_project_name() -> str:
    """
    Prompt for the project name.

    Returns
    -------
    str
        A name that passes ``validate_project_name``.
    """
    result = questionary.text(
        "Project name:",
        default=DEFAULT_PROJECT_NAME,
        validate=_name_validator,
    ).ask()

    if result is None:
        raise typer.Abort()

    return result.strip()


def prompt_use_current_dir(name: str) -> bool:
    """Ask whether to create the project in the current directory."""
    result = questionary.confirm(
        f'Current directory is already named "{name}". Create project here?',
        default=True,
    ).ask()

    if result is None:
        raise typer.Abort()

    return result


def prompt_overwrite() -> bool:
    """Ask whether to continue into a non-empty directory."""
    result = questionary.confirm(
        "⚠️  Directory is not empty. Continue anyway?",
        default=False,
    ).ask()

    if result is None:
        raise typer.Abort()

    return result


def prompt_services() -> list[Service]:
    """
    Interactively prompt for the services to include.

    Returns
    -------
    list[Service]
        Selected services, in the order they are listed.
    """
    choices = [
        questionary.Choice(title=service.description, value=service)
        for service in Service
    ]

    result = questionary.checkbox(
        "Select services to include:",
        choices=choices,
    ).ask()

    if result is None:
        raise typer.Abort()

    return result


def prompt_install() -> bool:
    """Ask whether to install dependencies after creation."""
    result = questionary.confirm(
        "Install dependencies?",
        default=True,
    ).ask()

    if result is None:
        raise typer.Abort()

    return result


def prompt_package_manager() -> PackageManager:
    """
    Interactively prompt for the package manager.

    Returns
    -------
    PackageManager
        The selected package manager.
    """
    choices = [
        questionary.Choice(title=pm.value, value=pm)
        for pm in PackageManager
    ]

    result = questionary.select(
        "Select package manager:",
        choices=choices,
        default=PackageManager.NPM,
    ).ask()

    if result is None:
        raise typer.Abort()

    return result


# =============================================================================
# Main Application Callback
# =============================================================================

@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """
    [bold]create-lafken[/] - lafken project bootstrapper.

    [bold]Quick Start:[/]

        create-lafken new

    [bold]Non-interactive:[/]

        create-lafken new orders --service api --yes
    """


# =============================================================================
# New Command - Create a New Project
# =============================================================================

@app.command()
def new(
    name: Annotated[
        str | None,
        typer.Argument(
            help="Name of the project to create",
        ),
    ] = None,
    services: Annotated[
        list[Service] | None,
        typer.Option(
            "--service",
            "-s",
            help="Service to include (repeatable): api, auth, bucket, dynamo, "
            "event, queue, schedule, state-machine",
        ),
    ] = None,
    package_manager: Annotated[
        PackageManager | None,
        typer.Option(
            "--package-manager",
            "-m",
            help="Package manager: npm, yarn, pnpm",
        ),
    ] = None,
    no_install: Annotated[
        bool,
        typer.Option(
            "--no-install",
            help="Skip dependency installation",
        ),
    ] = False,
    here: Annotated[
        bool,
        typer.Option(
            "--here",
            help="Create the project in the output directory itself",
        ),
    ] = False,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Write into a non-empty directory without asking",
        ),
    ] = False,
    output_dir: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Directory to create the project in (default: current directory)",
            file_okay=False,
        ),
    ] = None,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="TOML file with project options",
            exists=True,
            dir_okay=False,
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip all prompts, use defaults",
        ),
    ] = False,
) -> None:
    """
    Create a new lafken project.

    Copies the bundled project template into a new directory, renders its
    templates with your project name and services, and installs
    dependencies.

    [bold]Examples:[/]

        # Interactive mode (prompts for all options)
        create-lafken new

        # API + queue project, installed with pnpm
        create-lafken new orders -s api -s queue -m pnpm --yes

        # Scaffold into the current directory, skip install
        create-lafken new orders --here --no-install
    """
    should_prompt = not yes

    console.print("[bold cyan]🌊 Welcome to lafken 🌊[/]")

    # Options from the config file, if any
    base = ProjectOptions()
    if config:
        try:
            base = ProjectOptions.from_toml(config)
        except (ValidationError, tomli.TOMLDecodeError) as e:
            rprint(
                f"[red]Error:[/] Invalid config file {escape(str(config))}:\n"
                f"{escape(str(e))}"
            )
            raise typer.Exit(1)
    from_file = base.model_fields_set

    # Resolve project name
    resolved_name: str
    if name:
        resolved_name = name
    elif "name" in from_file:
        resolved_name = base.name
    elif should_prompt:
        resolved_name = prompt_project_name()
    else:
        resolved_name = DEFAULT_PROJECT_NAME

    try:
        resolved_name = validate_project_name(resolved_name)
    except ValueError as e:
        rprint(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    # Resolve target directory
    cwd = output_dir or Path.cwd()
    use_current_dir = here
    if not here and cwd.name == resolved_name:
        use_current_dir = prompt_use_current_dir(resolved_name) if should_prompt else True

    try:
        options = ProjectOptions(
            name=resolved_name,
            use_current_dir=use_current_dir,
            output_dir=cwd,
        )
    except ValidationError as e:
        rprint(f"[red]Error:[/] {escape(str(e))}")
        raise typer.Exit(1)

    target_dir = options.target_dir

    if target_dir.is_dir() and not is_directory_empty(target_dir) and not force:
        if not should_prompt:
            rprint(
                f"[red]Error:[/] Directory '{escape(str(target_dir))}' is not empty. "
                "Use --force to create the project anyway."
            )
            raise typer.Exit(1)
        if not prompt_overwrite():
            console.print("\n❌ Project creation cancelled")
            raise typer.Exit(0)

    # Resolve services
    resolved_services: list[Service]
    if services:
        resolved_services = services
    elif "services" in from_file:
        resolved_services = base.services
    elif should_prompt:
        resolved_services = prompt_services()
    else:
        resolved_services = []

    # Resolve install and package manager
    resolved_install: bool
    if no_install:
        resolved_install = False
    elif "install" in from_file:
        resolved_install = base.install
    elif should_prompt:
        resolved_install = prompt_install()
    else:
        resolved_install = True

    resolved_pm: PackageManager
    if package_manager:
        resolved_pm = package_manager
    elif "package_manager" in from_file:
        resolved_pm = base.package_manager
    elif should_prompt and resolved_install:
        resolved_pm = prompt_package_manager()
    else:
        resolved_pm = PackageManager.NPM

    options = options.model_copy(update={
        "services": resolved_services,
        "install": resolved_install,
        "package_manager": resolved_pm,
    })

    # Show configuration summary if in interactive mode
    if should_prompt:
        console.print()
        table = Table(title="Project Configuration", show_header=False)
        table.add_column("Setting", style="cyan")
        table.add_column("Value", style="green")

        table.add_row("Name", options.name)
        table.add_row("Directory", escape(str(options.target_dir)))
        table.add_row("Services", ", ".join(options.service_ids) or "none")
        table.add_row(
            "Install",
            options.package_manager.value if options.install else "skipped",
        )

        console.print(table)

    # Create the project
    try:
        create_project(options, verbose=True)
    except (MaterializeError, FileNotFoundError):
        # Already reported by create_project
        raise typer.Exit(1)


# =============================================================================
# Entry Point
# =============================================================================

if __name__ == "__main__":
    app()
