"""Registration of generated modules in the host composition root.

The composition root is an ordinary Python file holding the imports of every
feature module and one module-level list that registers them, e.g.::

    from slicegen.modules import create_app
    from slicegen.store import DatabaseModule
    from .candidate.candidate_module import CandidateModule

    MODULES = [DatabaseModule, CandidateModule]

    app = create_app(MODULES)

:class:`CompositionRoot` parses the file with :mod:`ast` into an ordered list
of :class:`ImportSpec` entries plus the ordered registry elements, and renders
edits back into the original text without touching anything else.  The two
edits (adding the import, appending to the registry) are checked and applied
independently, so either may be repaired without duplicating the other.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from pathlib import Path


class CompositionError(Exception):
    """Raised when the composition root cannot be parsed or has no registry list."""


# ---------------------------------------------------------------------------
# Structured view
# ---------------------------------------------------------------------------


@dataclass
class ImportSpec:
    """One top-level ``from <path> import <names>`` statement."""

    module: str
    names: list[str]
    level: int = 0

    @property
    def path(self) -> str:
        return "." * self.level + self.module

    def render(self) -> str:
        return f"from {self.path} import {', '.join(self.names)}"

    @classmethod
    def from_path(cls, path: str, names: list[str]) -> "ImportSpec":
        stripped = path.lstrip(".")
        return cls(module=stripped, names=list(names), level=len(path) - len(stripped))


@dataclass
class CompositionRoot:
    """Parsed composition root: imports, registry elements, and splice points."""

    source: str
    registry_name: str
    imports: list[ImportSpec]
    modules: list[str]
    new_imports: list[ImportSpec] = field(default_factory=list)
    new_modules: list[str] = field(default_factory=list)

    # Character offsets into ``source``.
    import_anchor: int = 0
    list_start: int = 0
    list_end: int = 0
    last_element_end: int | None = None
    statement_indent: str = ""
    element_indent: str = "    "
    multiline: bool = False

    # -- Parsing -----------------------------------------------------------

    @classmethod
    def parse(cls, source: str, registry_name: str = "MODULES") -> "CompositionRoot":
        """Parse *source* and locate its imports and registry list.

        Raises:
            CompositionError: If *source* is not valid Python or defines no
                module-level ``<registry_name> = [...]`` assignment.
        """
        try:
            tree = ast.parse(source)
        except SyntaxError as exc:
            raise CompositionError(f"Composition root is not valid Python: {exc}") from exc

        lines = source.splitlines(keepends=True)
        imports: list[ImportSpec] = []
        last_import: ast.stmt | None = None
        registry: ast.List | None = None
        registry_stmt: ast.stmt | None = None

        for stmt in tree.body:
            if isinstance(stmt, ast.ImportFrom):
                imports.append(
                    ImportSpec(
                        module=stmt.module or "",
                        names=[alias.asname or alias.name for alias in stmt.names],
                        level=stmt.level,
                    )
                )
                last_import = stmt
            elif isinstance(stmt, ast.Import):
                last_import = stmt
            elif registry is None:
                value = _registry_value(stmt, registry_name)
                if value is not None:
                    registry, registry_stmt = value, stmt

        if registry is None or registry_stmt is None:
            raise CompositionError(
                f"No module-level '{registry_name} = [...]' list found in composition root"
            )

        if last_import is not None:
            anchor = _offset(lines, last_import.end_lineno + 1, 0)
        elif _has_docstring(tree):
            anchor = _offset(lines, tree.body[0].end_lineno + 1, 0)
        else:
            anchor = 0

        root = cls(
            source=source,
            registry_name=registry_name,
            imports=imports,
            modules=[ast.get_source_segment(source, elt) or "" for elt in registry.elts],
            import_anchor=anchor,
            list_start=_offset(lines, registry.lineno, registry.col_offset),
            list_end=_offset(lines, registry.end_lineno, registry.end_col_offset),
            statement_indent=_leading_whitespace(lines[registry_stmt.lineno - 1]),
            multiline=registry.lineno != registry.end_lineno,
        )
        if registry.elts:
            last = registry.elts[-1]
            root.last_element_end = _offset(lines, last.end_lineno, last.end_col_offset)
            if root.multiline and last.lineno != registry.lineno:
                root.element_indent = _leading_whitespace(lines[last.lineno - 1])
            elif root.multiline:
                root.element_indent = root.statement_indent + "    "
            # The closing bracket shares a line with the last element.
            if last.end_lineno == registry.end_lineno:
                root.last_element_end = None
        else:
            root.element_indent = root.statement_indent + "    "
        return root

    # -- Queries -----------------------------------------------------------

    def imported_from(self, name: str) -> str | None:
        """Path *name* is imported from at top level, or ``None``."""
        for spec in [*self.imports, *self.new_imports]:
            if name in spec.names:
                return spec.path
        return None

    def has_import(self, name: str, path: str) -> bool:
        return self.imported_from(name) == path

    def is_registered(self, name: str) -> bool:
        return name in self.modules or name in self.new_modules

    # -- Edits -------------------------------------------------------------

    def add_import(self, name: str, path: str) -> bool:
        """Queue ``from <path> import <name>`` unless it is already present.

        Raises:
            CompositionError: If *name* is already imported from another path.
        """
        existing = self.imported_from(name)
        if existing == path:
            return False
        if existing is not None:
            raise CompositionError(
                f"'{name}' is already imported from '{existing}', not '{path}'"
            )
        self.new_imports.append(ImportSpec.from_path(path, [name]))
        return True

    def register(self, name: str) -> bool:
        """Queue *name* for the registry list unless it is already listed."""
        if self.is_registered(name):
            return False
        self.new_modules.append(name)
        return True

    # -- Rendering ---------------------------------------------------------

    def render(self) -> str:
        """Return the source with all queued edits applied.

        Untouched regions, comments included, are reproduced verbatim.
        """
        edits: list[tuple[int, int, str]] = []

        if self.new_imports:
            text = "".join(f"{spec.render()}\n" for spec in self.new_imports)
            if self.import_anchor == len(self.source) and self.source and not self.source.endswith("\n"):
                text = "\n" + text
            edits.append((self.import_anchor, self.import_anchor, text))

        if self.new_modules:
            edits.append(self._registry_edit())

        result = self.source
        for start, end, text in sorted(edits, key=lambda e: e[0], reverse=True):
            result = result[:start] + text + result[end:]
        return result

    def _registry_edit(self) -> tuple[int, int, str]:
        if self.multiline and self.last_element_end is not None:
            # Append after the last element, keeping the existing layout.
            tail = self.source[self.last_element_end:self.list_end]
            trailing_comma = tail.lstrip(" \t").startswith(",")
            line_end = self.source.index("\n", self.last_element_end)
            added = "".join(f"{self.element_indent}{name},\n" for name in self.new_modules)
            if trailing_comma:
                return (line_end + 1, line_end + 1, added)
            insert_at = self.last_element_end
            rest = self.source[insert_at:line_end + 1]
            return (insert_at, line_end + 1, "," + rest + added)
        return (self.list_start, self.list_end, self.render_registry())

    def render_registry(self) -> str:
        """Serialise the full registry list, existing elements first."""
        elements = [*self.modules, *self.new_modules]
        if not elements:
            return "[]"
        if not self.multiline:
            return "[" + ", ".join(elements) + "]"
        body = "".join(f"{self.element_indent}{element},\n" for element in elements)
        return "[\n" + body + self.statement_indent + "]"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def register_module(
    registry_text: str,
    module_name: str,
    import_path: str,
    *,
    registry_name: str = "MODULES",
) -> str:
    """Return *registry_text* with *module_name* imported and registered.

    Pure text transformation: the import and the registry entry are each
    added only when missing.  Input that already has both comes back
    unchanged.

    Args:
        registry_text: Current source of the composition root.
        module_name: Name to import and register (e.g. ``"CandidateModule"``).
        import_path: Module path to import from (e.g.
            ``".candidate.candidate_module"``).
        registry_name: Name of the module-level registry list.

    Raises:
        CompositionError: If the text cannot be parsed, has no registry list,
            or already imports *module_name* from a different path.
    """
    root = CompositionRoot.parse(registry_text, registry_name)
    root.add_import(module_name, import_path)
    root.register(module_name)
    return root.render()


def patch_composition_file(
    path: str | Path,
    module_name: str,
    import_path: str,
    *,
    registry_name: str = "MODULES",
) -> bool:
    """Read, patch and write the composition root at *path*.

    The file is only rewritten when its content changes.

    Returns:
        ``True`` if the file was rewritten.

    Raises:
        FileNotFoundError: If the composition root does not exist.
        CompositionError: See :func:`register_module`.
    """
    file_path = Path(path)
    current = file_path.read_text(encoding="utf-8")
    updated = register_module(
        current, module_name, import_path, registry_name=registry_name
    )
    if updated == current:
        return False
    file_path.write_text(updated, encoding="utf-8")
    return True


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _registry_value(stmt: ast.stmt, registry_name: str) -> ast.List | None:
    """Return the list literal assigned to *registry_name* by *stmt*, if any."""
    if isinstance(stmt, ast.Assign):
        targets = stmt.targets
    elif isinstance(stmt, ast.AnnAssign) and stmt.value is not None:
        targets = [stmt.target]
    else:
        return None
    if not isinstance(stmt.value, ast.List):
        return None
    for target in targets:
        if isinstance(target, ast.Name) and target.id == registry_name:
            return stmt.value
    return None


def _has_docstring(tree: ast.Module) -> bool:
    return (
        bool(tree.body)
        and isinstance(tree.body[0], ast.Expr)
        and isinstance(tree.body[0].value, ast.Constant)
        and isinstance(tree.body[0].value.value, str)
    )


def _offset(lines: list[str], lineno: int, col_offset: int) -> int:
    """Convert an ast (1-based line, UTF-8 byte column) position to a str offset."""
    if lineno > len(lines):
        return sum(len(line) for line in lines)
    prefix = sum(len(line) for line in lines[: lineno - 1])
    column = len(lines[lineno - 1].encode("utf-8")[:col_offset].decode("utf-8"))
    return prefix + column


def _leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip(" \t"))]
