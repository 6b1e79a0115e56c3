"""
pytest configuration and shared fixtures for create-lafken tests.

Fixtures defined here are automatically available to all tests.

Fixtures
--------
context : TemplateContext
    A fixed template context with a known uuid.

make_tree : Callable
    Builds a source tree on disk from a ``{relative_path: content}`` dict.
"""

from collections.abc import Callable
from pathlib import Path

import pytest

from create_lafken.models import TemplateContext


@pytest.fixture
def context() -> TemplateContext:
    """Template context with deterministic values."""
    return TemplateContext(
        appName="demo",
        services=("api", "queue"),
        uuid="abc-123",
    )


@pytest.fixture
def png_bytes() -> bytes:
    """Binary content that is not valid UTF-8 and contains CRLF bytes."""
    return b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\xff\xfe\r\n\x00"


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Empty source root for a template tree."""
    path = tmp_path / "template"
    path.mkdir()
    return path


@pytest.fixture
def dest_dir(tmp_path: Path) -> Path:
    """Destination root; not created up front."""
    return tmp_path / "output"


@pytest.fixture
def make_tree(source_dir: Path) -> Callable[[dict[str, str | bytes | None]], Path]:
    """
    Build a source tree from a mapping of relative paths to contents.

    ``str`` values are written as UTF-8 text, ``bytes`` verbatim, and
    ``None`` creates an empty directory.
    """

    def _make(entries: dict[str, str | bytes | None]) -> Path:
        for rel, content in entries.items():
            path = source_dir / rel
            if content is None:
                path.mkdir(parents=True, exist_ok=True)
                continue
            path.parent.mkdir(parents=True, exist_ok=True)
            if isinstance(content, bytes):
                path.write_bytes(content)
            else:
                path.write_text(content, encoding="utf-8")
        return source_dir

    return _make


# =============================================================================
# pytest Configuration
# =============================================================================

def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers used in our test suite."""
    config.addinivalue_line(
        "markers", "posix: marks tests relying on POSIX file permissions"
    )
