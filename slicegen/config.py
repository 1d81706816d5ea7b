"""slicegen configuration.

Typed settings for the scaffolder, using a Pydantic v2 model so values are
validated at construction time and can be loaded from environment variables
without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

_TRUTHY = {"1", "true", "yes", "on"}


class ScaffoldConfig(BaseModel):
    """Where the scaffolder writes and what it patches.

    Instances are typically created once by the CLI entry point and handed
    to :class:`~slicegen.scaffolder.generator.ModuleGenerator`.
    """

    project_root: Path = Field(default=Path("."))
    source_dir: str = Field(default="app", description="Package holding feature modules")
    composition_file: str = Field(
        default="app_module.py", description="Composition root, relative to source_dir"
    )
    registry_name: str = Field(
        default="MODULES", description="Module-level list that registers feature modules"
    )
    store_import: str = Field(
        default="slicegen", description="Package generated code imports the store and runtime from"
    )
    force: bool = Field(default=False, description="Overwrite existing generated files")

    # ------------------------------------------------------------------
    # Derived paths (read-only properties)
    # ------------------------------------------------------------------

    @property
    def source_path(self) -> Path:
        """Directory that receives one sub-package per feature."""
        return self.project_root / self.source_dir

    @property
    def composition_path(self) -> Path:
        """Path to the composition root file."""
        return self.source_path / self.composition_file

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "ScaffoldConfig":
        """Build a ``ScaffoldConfig`` from environment variables.

        Recognised variables (all optional):
            SLICEGEN_PROJECT_ROOT, SLICEGEN_SOURCE_DIR,
            SLICEGEN_COMPOSITION_FILE, SLICEGEN_REGISTRY_NAME,
            SLICEGEN_STORE_IMPORT, SLICEGEN_FORCE.

        Keyword arguments whose value is not ``None`` take precedence over
        the environment.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("SLICEGEN_PROJECT_ROOT"):
            kwargs["project_root"] = Path(os.environ["SLICEGEN_PROJECT_ROOT"])
        if os.environ.get("SLICEGEN_SOURCE_DIR"):
            kwargs["source_dir"] = os.environ["SLICEGEN_SOURCE_DIR"]
        if os.environ.get("SLICEGEN_COMPOSITION_FILE"):
            kwargs["composition_file"] = os.environ["SLICEGEN_COMPOSITION_FILE"]
        if os.environ.get("SLICEGEN_REGISTRY_NAME"):
            kwargs["registry_name"] = os.environ["SLICEGEN_REGISTRY_NAME"]
        if os.environ.get("SLICEGEN_STORE_IMPORT"):
            kwargs["store_import"] = os.environ["SLICEGEN_STORE_IMPORT"]
        if os.environ.get("SLICEGEN_FORCE"):
            kwargs["force"] = os.environ["SLICEGEN_FORCE"].strip().lower() in _TRUTHY

        kwargs.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**kwargs)
