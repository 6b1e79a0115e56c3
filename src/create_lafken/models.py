"""
create_lafken.models - Pydantic Models for Project Creation
===========================================================

This module defines the data models shared by the CLI, the generator and
the materializer. Pydantic gives us validation of user input with clear
error messages, TOML/dict loading, and immutable value objects where we
need them.

Architecture Notes
------------------
    ProjectOptions (what the user asked for)
    ├── name: str
    ├── services: list[Service]
    ├── install: bool
    ├── package_manager: PackageManager
    └── use_current_dir / output_dir

    TemplateContext (what templates see, frozen)
    ├── appName
    ├── services
    └── uuid

``ProjectOptions`` is resolved first (prompts, flags, config file), then
turned into a ``TemplateContext`` exactly once per run via ``to_context()``.

Usage Example
-------------
>>> from create_lafken.models import ProjectOptions, Service
>>> options = ProjectOptions(name="orders", services=[Service.API, Service.QUEUE])
>>> context = options.to_context()
>>> context.as_template_vars()["services"]
['api', 'queue']
"""

from __future__ import annotations

import re
import uuid as uuid_lib
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Constants
# =============================================================================

DEFAULT_PROJECT_NAME = "my-lafken-app"

PROJECT_NAME_PATTERN = re.compile(r"^[a-z0-9-_]+$", re.IGNORECASE)


def validate_project_name(value: str) -> str:
    """
    Check a project name against the allowed character set.

    Shared by the ``ProjectOptions`` validator and the interactive prompt,
    so both reject the same names with the same message.

    Raises
    ------
    ValueError
        If the name is empty or contains unsupported characters.
    """
    value = value.strip()
    if not value:
        msg = "Project name cannot be empty"
        raise ValueError(msg)
    if not PROJECT_NAME_PATTERN.match(value):
        msg = "Project name can only contain letters, numbers, hyphens and underscores"
        raise ValueError(msg)
    return value


# =============================================================================
# Enumerations
# =============================================================================

class Service(str, Enum):
    """
    lafken services that can be wired into a new project.

    The value is the identifier templates receive in ``services``; the
    description is what the CLI checkbox shows.

    Examples
    --------
    >>> Service("state-machine")
    <Service.STATE_MACHINE: 'state-machine'>
    >>> Service.BUCKET.description
    'S3 Bucket'
    """

    API = "api"
    AUTH = "auth"
    BUCKET = "bucket"
    DYNAMO = "dynamo"
    EVENT = "event"
    QUEUE = "queue"
    SCHEDULE = "schedule"
    STATE_MACHINE = "state-machine"

    @property
    def description(self) -> str:
        """Human-readable name for CLI prompts."""
        descriptions = {
            Service.API: "API Gateway",
            Service.AUTH: "Cognito Authentication",
            Service.BUCKET: "S3 Bucket",
            Service.DYNAMO: "DynamoDB",
            Service.EVENT: "EventBridge Events",
            Service.QUEUE: "SQS Queue",
            Service.SCHEDULE: "EventBridge Schedule",
            Service.STATE_MACHINE: "Step Functions",
        }
        return descriptions[self]


class PackageManager(str, Enum):
    """
    JavaScript package managers supported for the post-creation install.

    Attributes
    ----------
    NPM : str
        The default.

    YARN : str
        Yarn classic or berry, invoked as ``yarn install``.

    PNPM : str
        pnpm.
    """

    NPM = "npm"
    YARN = "yarn"
    PNPM = "pnpm"

    @property
    def install_command(self) -> list[str]:
        """
        Argument vector that installs dependencies.

        Returns
        -------
        list[str]
            e.g. ``["npm", "install"]``.
        """
        return [self.value, "install"]

    @property
    def dev_command(self) -> str:
        """
        Command shown in the next-steps hint to start the dev server.

        npm needs ``run`` for custom scripts, yarn and pnpm do not.
        """
        if self is PackageManager.NPM:
            return "npm run dev"
        return f"{self.value} dev"


# =============================================================================
# Template Context
# =============================================================================

class TemplateContext(BaseModel):
    """
    The variables every template in the tree is rendered with.

    Instances are frozen: the context is built once per run and handed
    unchanged to every level of the recursive walk. Templates see the
    field aliases (``appName``, ``services``, ``uuid``).

    Attributes
    ----------
    app_name : str
        Project name, exposed to templates as ``appName``.

    services : tuple[str, ...]
        Selected service identifiers in selection order. Duplicates are
        not expected but are not rejected.

    uuid : str
        A unique identifier generated for this project.

    Examples
    --------
    >>> ctx = TemplateContext(appName="demo", services=("api",), uuid="abc-123")
    >>> ctx.app_name
    'demo'
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    app_name: str = Field(alias="appName", description="Project name")
    services: tuple[str, ...] = Field(
        default=(),
        description="Selected service identifiers, in order",
    )
    uuid: str = Field(description="Unique project identifier")

    @classmethod
    def create(cls, app_name: str, services: list[str] | tuple[str, ...] = ()) -> TemplateContext:
        """
        Build a context with a freshly generated uuid4.

        Parameters
        ----------
        app_name : str
            Project name.

        services : list[str] | tuple[str, ...]
            Service identifiers, order preserved.
        """
        return cls(
            app_name=app_name,
            services=tuple(services),
            uuid=str(uuid_lib.uuid4()),
        )

    def as_template_vars(self) -> dict[str, Any]:
        """
        Variables in the shape templates expect.

        A new dict is returned on every call, with ``services`` as a fresh
        list, so nothing a template engine does to it can leak back into
        the context.
        """
        data = self.model_dump(by_alias=True)
        data["services"] = list(self.services)
        return data


# =============================================================================
# Project Options
# =============================================================================

class ProjectOptions(BaseModel):
    """
    Everything the user decided about the project to create.

    Built interactively by the CLI, from flags, or from a TOML file via
    ``from_toml``. The generator turns it into a target directory and a
    ``TemplateContext``.

    Attributes
    ----------
    name : str
        Project name. Letters, numbers, hyphens and underscores only.

    services : list[Service]
        Services to include, in selection order.

    install : bool
        Run the package manager's install after materialization.

    package_manager : PackageManager
        Which package manager to install with and to mention in hints.

    use_current_dir : bool
        Create the project in ``output_dir`` itself instead of
        ``output_dir / name``.

    output_dir : Path
        Parent directory of the project (or the project directory itself
        when ``use_current_dir`` is set).
    """

    name: str = Field(
        default=DEFAULT_PROJECT_NAME,
        description="Project name",
        max_length=214,
    )
    services: list[Service] = Field(
        default_factory=list,
        description="Services to include",
    )
    install: bool = Field(
        default=True,
        description="Install dependencies after creation",
    )
    package_manager: PackageManager = Field(
        default=PackageManager.NPM,
        description="Package manager used for installation",
    )
    use_current_dir: bool = Field(
        default=False,
        description="Create the project in output_dir itself",
    )
    output_dir: Path = Field(
        default_factory=Path.cwd,
        description="Directory the project is created in",
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Reject empty names and names with unsupported characters."""
        return validate_project_name(v)

    @property
    def target_dir(self) -> Path:
        """
        Directory the template tree is materialized into.

        Returns
        -------
        Path
            ``output_dir`` when creating in place, else ``output_dir / name``.
        """
        if self.use_current_dir:
            return self.output_dir
        return self.output_dir / self.name

    @property
    def service_ids(self) -> list[str]:
        """Selected service identifiers in selection order."""
        return [service.value for service in self.services]

    def to_context(self) -> TemplateContext:
        """Resolve the template context for this project, with a new uuid."""
        return TemplateContext.create(self.name, self.service_ids)

    @classmethod
    def from_toml(cls, path: Path, **overrides: Any) -> ProjectOptions:
        """
        Load options from a TOML file.

        Keys map one-to-one onto the model fields. Keyword overrides win
        over values from the file; ``None`` overrides are ignored so CLI
        flags that were not passed do not blank out the file's values.

        Parameters
        ----------
        path : Path
            Path to the TOML file.

        Raises
        ------
        FileNotFoundError
            If the file doesn't exist.
        ValidationError
            If the file contains invalid values.
        """
        import tomli

        with open(path, "rb") as f:
            data = tomli.load(f)

        data.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**data)
