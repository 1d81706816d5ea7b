"""Tests for the Jinja2 artifact templates (slicegen.scaffolder.templates)."""

from __future__ import annotations

import ast
from pathlib import Path

import pytest
from jinja2 import UndefinedError

from slicegen.scaffolder.templates import ARTIFACT_KINDS, TemplateRenderer


pytestmark = pytest.mark.unit


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


@pytest.fixture
def context() -> dict[str, str]:
    return {
        "type_name": "JobRole",
        "normalized_name": "job-role",
        "package_name": "job_role",
        "store_import": "slicegen",
    }


def _class_names(source: str) -> list[str]:
    return [node.name for node in ast.walk(ast.parse(source)) if isinstance(node, ast.ClassDef)]


class TestTemplateDiscovery:
    def test_one_template_per_artifact(self, renderer: TemplateRenderer):
        assert renderer.list_templates() == sorted(f"{kind}.py.j2" for kind in ARTIFACT_KINDS)

    def test_missing_template_dir(self, tmp_path: Path):
        assert TemplateRenderer(tmp_path / "nowhere").list_templates() == []

    def test_unknown_kind(self, renderer: TemplateRenderer, context: dict[str, str]):
        with pytest.raises(ValueError, match="Unknown artifact kind"):
            renderer.render_artifact("migration", context)

    def test_undefined_variable_raises(self, renderer: TemplateRenderer):
        with pytest.raises(UndefinedError):
            renderer.render_artifact("entity", {})

    def test_pascal_case_filter(self, renderer: TemplateRenderer):
        assert renderer.render_string("{{ name | pascal_case }}", {"name": "job-role"}) == "JobRole"


class TestArtifactBodies:
    @pytest.mark.parametrize("kind", ARTIFACT_KINDS)
    def test_renders_valid_python(self, renderer: TemplateRenderer, context: dict[str, str], kind: str):
        ast.parse(renderer.render_artifact(kind, context))

    def test_entity(self, renderer: TemplateRenderer, context: dict[str, str]):
        source = renderer.render_artifact("entity", context)
        assert _class_names(source) == ["JobRole"]
        assert "@dataclass" in source
        for field_name in ("id: str", "title: str", "description: str"):
            assert field_name in source

    def test_repository_targets_normalized_table(self, renderer: TemplateRenderer, context: dict[str, str]):
        source = renderer.render_artifact("repository", context)
        assert _class_names(source) == ["JobRoleRepository"]
        assert 'table = "job-role"' in source
        assert "from slicegen.store import DatabaseService" in source
        assert "from .job_role_entity import JobRole" in source

    def test_service_raises_not_found(self, renderer: TemplateRenderer, context: dict[str, str]):
        source = renderer.render_artifact("service", context)
        assert _class_names(source) == ["JobRoleService"]
        assert 'raise NotFoundError("JobRole not found")' in source

    def test_controller_routes(self, renderer: TemplateRenderer, context: dict[str, str]):
        source = renderer.render_artifact("controller", context)
        assert _class_names(source) == ["JobRoleController"]
        assert 'APIRouter(prefix="/job-role"' in source
        assert 'add_api_route("/{id}", self.get_by_id, methods=["GET"])' in source
        assert 'add_api_route("", self.list, methods=["GET"])' in source
        assert 'add_api_route("", self.create, methods=["POST"])' in source

    def test_module_wiring(self, renderer: TemplateRenderer, context: dict[str, str]):
        source = renderer.render_artifact("module", context)
        assert "JobRoleModule = Module(" in source
        assert "imports=[DatabaseModule]" in source
        assert "controllers=[JobRoleController]" in source
        assert "providers=[JobRoleService, JobRoleRepository]" in source

    def test_custom_store_import(self, renderer: TemplateRenderer, context: dict[str, str]):
        context["store_import"] = "backend.core"
        source = renderer.render_artifact("module", context)
        assert "from backend.core.modules import Module" in source
        assert "from backend.core.store import DatabaseModule" in source

    def test_rendering_is_pure(self, renderer: TemplateRenderer, context: dict[str, str]):
        for kind in ARTIFACT_KINDS:
            assert renderer.render_artifact(kind, context) == renderer.render_artifact(kind, dict(context))
