"""Feature-module scaffolding orchestrator.

Takes a feature name and generates one CRUD vertical slice inside the host
project: entity, repository, service, controller and module descriptor, then
registers the module in the project's composition root.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from slicegen.config import ScaffoldConfig
from slicegen.utils import ensure_dir, write_if_absent

from .composition import patch_composition_file
from .naming import FeatureDescriptor
from .templates import ARTIFACT_KINDS, TemplateRenderer


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


class GeneratedArtifact(BaseModel):
    """One rendered file, path relative to the source directory."""

    relative_path: str
    content: str


class GenerationResult(BaseModel):
    """Outcome of one generator run."""

    feature: FeatureDescriptor
    directory: Path
    written: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    registered: bool = False


# ---------------------------------------------------------------------------
# Main generator
# ---------------------------------------------------------------------------


class ModuleGenerator:
    """Generates one feature module and wires it into the composition root.

    Steps, in order:
    1. Ensure ``<source_dir>/<package>/`` exists.
    2. Write the five artifacts, skipping files that already exist unless
       ``config.force`` is set.
    3. Import and register ``<TypeName>Module`` in the composition root.

    Nothing is rolled back: if step 3 fails, the artifacts from step 2 stay
    on disk.
    """

    def __init__(
        self,
        config: ScaffoldConfig | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.config = config or ScaffoldConfig()
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def render_artifacts(self, feature: FeatureDescriptor) -> list[GeneratedArtifact]:
        """Render all five artifacts for *feature* without touching the disk."""
        context = self._build_context(feature)
        return [
            GeneratedArtifact(
                relative_path=f"{feature.package_name}/{feature.artifact_name(kind)}",
                content=self.renderer.render_artifact(kind, context),
            )
            for kind in ARTIFACT_KINDS
        ]

    def generate(self, name: str | None) -> GenerationResult:
        """Generate the feature module called *name*.

        Raises:
            UsageError: If *name* is missing or unusable.  Raised before any
                file-system change.
            FileNotFoundError: If the composition root does not exist.
            CompositionError: If the composition root cannot be patched.
        """
        feature = FeatureDescriptor.from_raw(name)
        source_path = self.config.source_path
        directory = ensure_dir(source_path / feature.package_name)

        result = GenerationResult(feature=feature, directory=directory)
        for artifact in self.render_artifacts(feature):
            target = source_path / artifact.relative_path
            if write_if_absent(target, artifact.content, force=self.config.force):
                result.written.append(artifact.relative_path)
            else:
                result.skipped.append(artifact.relative_path)

        result.registered = patch_composition_file(
            self.config.composition_path,
            feature.module_class,
            feature.module_import_path,
            registry_name=self.config.registry_name,
        )
        return result

    # -- Context building --------------------------------------------------

    def _build_context(self, feature: FeatureDescriptor) -> dict[str, Any]:
        """Build the Jinja2 template context for *feature*."""
        return {
            "type_name": feature.type_name,
            "normalized_name": feature.normalized_name,
            "package_name": feature.package_name,
            "store_import": self.config.store_import,
        }
