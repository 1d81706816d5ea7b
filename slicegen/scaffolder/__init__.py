"""slicegen scaffolder -- generates one CRUD feature module per invocation.

This package renders the entity, repository, service, controller and module
files of a feature from Jinja2 templates and registers the new module in the
host project's composition root.

Quick usage::

    from pathlib import Path

    from slicegen.config import ScaffoldConfig
    from slicegen.scaffolder import ModuleGenerator

    generator = ModuleGenerator(ScaffoldConfig(project_root=Path("./backend")))
    result = generator.generate("candidate")
"""

from slicegen.scaffolder.composition import (
    CompositionError,
    CompositionRoot,
    register_module,
)
from slicegen.scaffolder.generator import GenerationResult, ModuleGenerator
from slicegen.scaffolder.naming import FeatureDescriptor, UsageError, pascal_case
from slicegen.scaffolder.templates import TemplateRenderer

__all__ = [
    "CompositionError",
    "CompositionRoot",
    "FeatureDescriptor",
    "GenerationResult",
    "ModuleGenerator",
    "TemplateRenderer",
    "UsageError",
    "pascal_case",
    "register_module",
]
