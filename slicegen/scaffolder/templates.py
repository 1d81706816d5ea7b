"""Jinja2 template rendering for feature-module scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``slicegen/scaffolder/templates/`` directory and renders them with the names
of the feature being generated.  Every template is a static body with name
substitutions only, so rendering is a pure function of its context.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .naming import pascal_case


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"

# Artifact kinds in generation order; each maps to ``<kind>.py.j2``.
ARTIFACT_KINDS: tuple[str, ...] = (
    "entity",
    "repository",
    "service",
    "controller",
    "module",
)


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the Jinja2 templates of one generated feature module.

    The renderer discovers ``.j2`` template files under a configurable
    template directory.  Undefined variables raise instead of rendering as
    empty strings.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filter
        self.env.filters["pascal_case"] = pascal_case

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"service.py.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    def render_string(self, template_string: str, context: dict[str, Any]) -> str:
        """Render an inline template string with the provided context."""
        template = self.env.from_string(template_string)
        return template.render(**context)

    def render_artifact(self, kind: str, context: dict[str, Any]) -> str:
        """Render the template for one artifact kind (``"entity"``, ``"service"``...)."""
        if kind not in ARTIFACT_KINDS:
            raise ValueError(f"Unknown artifact kind: {kind!r}")
        return self.render(f"{kind}.py.j2", context)

    # -- Utility -----------------------------------------------------------

    def list_templates(self) -> list[str]:
        """Return a sorted list of all ``.j2`` template names."""
        if not self.template_dir.is_dir():
            return []
        return sorted(
            str(p.relative_to(self.template_dir))
            for p in self.template_dir.rglob("*.j2")
        )
