"""
create_lafken.engine - Template Engine Capability
=================================================

The materializer only needs one thing from a template engine: turn a
template's text plus a context into output text, or fail. That capability
is the ``TemplateEngine`` protocol; ``JinjaEngine`` is the implementation
used by default.

Undefined Variables
-------------------
``JinjaEngine`` renders with ``jinja2.StrictUndefined``: a template that
references a name missing from the context fails with ``RenderError``
instead of silently rendering an empty string.

Usage Example
-------------
>>> engine = JinjaEngine()
>>> engine.render("Hello {{appName}}", {"appName": "demo"})
'Hello demo'
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

from jinja2 import Environment, StrictUndefined, TemplateError, TemplateSyntaxError

from create_lafken.errors import RenderError


if TYPE_CHECKING:
    from collections.abc import Mapping


class TemplateEngine(Protocol):
    """
    Anything that can render template text with a context.

    Implementations raise ``RenderError`` (or their own exception type,
    which the materializer wraps) when the template is malformed or
    references something the context does not provide.
    """

    def render(self, text: str, context: Mapping[str, Any]) -> str: ...


class JinjaEngine:
    """
    Jinja2-backed ``TemplateEngine``.

    The environment is configured for generating source and config files:
    - Autoescaping disabled (the output is not HTML)
    - Trailing newlines preserved so files end the way the template does
    - ``StrictUndefined`` so typos in variable names fail loudly

    Parameters
    ----------
    env : Environment | None
        A preconfigured environment to use instead of the default one.
    """

    def __init__(self, env: Environment | None = None) -> None:
        self.env = env or create_jinja_env()

    def render(self, text: str, context: Mapping[str, Any]) -> str:
        """
        Render ``text`` with ``context``.

        Raises
        ------
        RenderError
            On syntax errors, undefined variables, or any other Jinja2
            error raised while rendering.
        """
        try:
            template = self.env.from_string(text)
            return template.render(**context)
        except TemplateSyntaxError as e:
            raise RenderError(message=f"Template syntax error at line {e.lineno}: {e.message}") from e
        except TemplateError as e:
            raise RenderError(message=e.message) from e


def create_jinja_env() -> Environment:
    """
    Create the Jinja2 environment used by ``JinjaEngine``.

    Returns
    -------
    Environment
        Environment with strict undefined handling and autoescape off.
    """
    return Environment(
        undefined=StrictUndefined,
        autoescape=False,
        keep_trailing_newline=True,
    )
