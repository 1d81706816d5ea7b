"""Module runtime that generated feature modules plug into.

A :class:`Module` groups the controllers and providers of one feature and
names the lower-level modules they depend on.  :func:`create_app` walks a list
of modules, builds every provider once through a small constructor-injection
:class:`Container`, and mounts each controller's ``router`` on a FastAPI app.

Quick usage::

    from slicegen.modules import create_app
    from slicegen.store import DatabaseModule

    MODULES = [DatabaseModule]
    app = create_app(MODULES)
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class NotFoundError(Exception):
    """Raised by a service when a lookup by id finds nothing.

    :func:`create_app` maps it to an HTTP 404 response.
    """


class ModuleError(Exception):
    """Raised when a dependency cannot be resolved from the registered providers."""


# ---------------------------------------------------------------------------
# Module descriptor
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class Module:
    """Aggregate wiring for one feature."""

    name: str
    imports: list[Module] = field(default_factory=list)
    controllers: list[type] = field(default_factory=list)
    providers: list[type] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"Module({self.name!r})"


def iter_modules(modules: list[Module]) -> Iterator[Module]:
    """Yield *modules* and their imports depth-first, dependencies first, each once."""
    seen: set[int] = set()

    def _walk(module: Module) -> Iterator[Module]:
        if id(module) in seen:
            return
        seen.add(id(module))
        for dependency in module.imports:
            yield from _walk(dependency)
        yield module

    for module in modules:
        yield from _walk(module)


# ---------------------------------------------------------------------------
# Container
# ---------------------------------------------------------------------------


class Container:
    """Builds providers by constructor injection, one instance per class."""

    def __init__(self) -> None:
        self._providers: set[type] = set()
        self._instances: dict[type, Any] = {}

    def register(self, provider: type) -> None:
        self._providers.add(provider)

    def is_registered(self, provider: type) -> bool:
        return provider in self._providers

    def resolve(self, cls: type) -> Any:
        """Return the shared instance of *cls*, building its dependencies first.

        Every annotated ``__init__`` parameter must itself be a registered
        provider; controllers are resolved the same way but are not shared
        unless registered.

        Raises:
            ModuleError: If a parameter type has no registered provider or
                carries no annotation.
        """
        if cls in self._instances:
            return self._instances[cls]

        kwargs: dict[str, Any] = {}
        if cls.__init__ is not object.__init__:
            hints = typing.get_type_hints(cls.__init__)
            params = list(inspect.signature(cls.__init__).parameters.values())[1:]
            for param in params:
                if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
                    continue
                dependency = hints.get(param.name)
                if dependency is None:
                    raise ModuleError(
                        f"{cls.__name__}.__init__ parameter '{param.name}' has no type annotation"
                    )
                if not self.is_registered(dependency):
                    raise ModuleError(
                        f"No provider for {getattr(dependency, '__name__', dependency)} "
                        f"required by {cls.__name__}"
                    )
                kwargs[param.name] = self.resolve(dependency)

        instance = cls(**kwargs)
        if self.is_registered(cls):
            self._instances[cls] = instance
        return instance


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------


async def _not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"detail": str(exc)})


def create_app(modules: list[Module], title: str = "slicegen app") -> FastAPI:
    """Build a FastAPI application from a list of modules.

    Providers of all modules (including imported ones) are registered before
    anything is built, so a controller may depend on a provider declared by a
    module listed later.  The container is exposed as ``app.state.container``.
    """
    app = FastAPI(title=title)
    container = Container()
    ordered = list(iter_modules(modules))

    for module in ordered:
        for provider in module.providers:
            container.register(provider)

    for module in ordered:
        for controller_cls in module.controllers:
            controller = container.resolve(controller_cls)
            app.include_router(controller.router)

    app.add_exception_handler(NotFoundError, _not_found_handler)
    app.state.container = container
    app.state.modules = [module.name for module in ordered]
    return app
