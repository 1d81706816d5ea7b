"""Shared pytest fixtures for the slicegen test suite.

Provides reusable fixtures for:
- A temporary host project with a composition root
- Scaffold configurations pointing at that project
- A fresh in-memory store
"""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from slicegen.config import ScaffoldConfig
from slicegen.store import DatabaseService


# ---------------------------------------------------------------------------
# Composition root sources
# ---------------------------------------------------------------------------

COMPOSITION_ROOT = textwrap.dedent(
    '''\
    """Application composition root."""

    from slicegen.modules import create_app
    from slicegen.store import DatabaseModule

    MODULES = [DatabaseModule]

    app = create_app(MODULES)
    '''
)


@pytest.fixture
def composition_source() -> str:
    """Single-line registry composition root."""
    return COMPOSITION_ROOT


@pytest.fixture
def multiline_composition_source() -> str:
    """Composition root with a one-element-per-line registry and comments."""
    return textwrap.dedent(
        '''\
        from __future__ import annotations

        from slicegen.modules import create_app
        from slicegen.store import DatabaseModule
        from .users.users_module import UsersModule

        MODULES = [
            DatabaseModule,  # shared store
            UsersModule,
        ]

        app = create_app(MODULES)
        '''
    )


# ---------------------------------------------------------------------------
# Host project
# ---------------------------------------------------------------------------


@pytest.fixture
def host_project(tmp_path: Path) -> Path:
    """Temporary host project with ``app/app_module.py`` (auto-cleanup)."""
    project_dir = tmp_path / "host-project"
    source_dir = project_dir / "app"
    source_dir.mkdir(parents=True)
    (source_dir / "__init__.py").write_text("", encoding="utf-8")
    (source_dir / "app_module.py").write_text(COMPOSITION_ROOT, encoding="utf-8")
    yield project_dir


@pytest.fixture
def scaffold_config(host_project: Path) -> ScaffoldConfig:
    """ScaffoldConfig targeting the temporary host project."""
    return ScaffoldConfig(project_root=host_project)


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


@pytest.fixture
def db() -> DatabaseService:
    """A fresh, empty store."""
    return DatabaseService()
