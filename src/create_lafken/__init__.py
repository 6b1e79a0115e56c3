"""
create-lafken - lafken Project Bootstrapper
===========================================

A CLI tool that creates new lafken serverless projects from a bundled
template tree, wiring in the services you pick and installing
dependencies with your package manager of choice.

Quick Start
-----------
```bash
# Install create-lafken
pip install create-lafken

# Create a new project interactively
create-lafken new

# Or with options
create-lafken new orders --service api --service queue --package-manager pnpm
```

Example
-------
>>> from pathlib import Path
>>> from create_lafken import TemplateContext, materialize
>>> ctx = TemplateContext.create("demo", ["api"])
>>> materialize(Path("my-template"), Path("demo"), ctx).files_created
[PosixPath('README.md')]

Architecture
------------
The package is organized into these main modules:

- ``cli``: Typer-based command line interface and prompts
- ``generator``: Project creation pipeline (target dir, install, hints)
- ``materializer``: Recursive template tree copy/render
- ``engine``: Jinja2-backed template engine capability
- ``errors``: Materialization failure taxonomy
- ``models``: Pydantic models for options and template context
- ``templates``: The bundled lafken project template
"""

# =============================================================================
# Package Metadata
# =============================================================================
__version__ = "0.1.0"
__license__ = "MIT"

# =============================================================================
# Public API Exports
# =============================================================================
# These are the main functions/classes users should interact with when using
# create-lafken as a library (as opposed to the CLI)

from create_lafken.engine import JinjaEngine, TemplateEngine
from create_lafken.errors import (
    DestinationWriteError,
    ErrorKind,
    MaterializeError,
    RenderError,
    SourceAccessError,
)
from create_lafken.generator import create_project
from create_lafken.materializer import TEMPLATE_SUFFIX, MaterializeResult, materialize
from create_lafken.models import PackageManager, ProjectOptions, Service, TemplateContext


__all__ = [
    "TEMPLATE_SUFFIX",
    "DestinationWriteError",
    "ErrorKind",
    # Template engine
    "JinjaEngine",
    # Errors
    "MaterializeError",
    "MaterializeResult",
    # Models
    "PackageManager",
    "ProjectOptions",
    "RenderError",
    "Service",
    "SourceAccessError",
    "TemplateContext",
    "TemplateEngine",
    # Version info
    "__version__",
    # Core functions
    "create_project",
    "materialize",
]
