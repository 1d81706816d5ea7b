"""Feature-name transforms for the module scaffolder.

A feature name arrives as a free-form CLI token.  It is case-folded into the
``normalized_name`` used for the route segment and the store table, and
pascal-cased into the ``type_name`` embedded in every generated class name.
"""

from __future__ import annotations

import keyword
import re

from pydantic import BaseModel, Field

_SEPARATOR_RUN = re.compile(r"[-_\s]+(.)?")
_SEPARATORS = re.compile(r"[-_\s]+")


class UsageError(ValueError):
    """Raised when the generator is invoked without a usable feature name."""


def pascal_case(value: str) -> str:
    """Convert ``job-role`` / ``job_role`` / ``job role`` to ``JobRole``.

    Each run of hyphens, underscores or whitespace is dropped and the
    character after it upper-cased; the first character of the result is
    upper-cased as well.  Every other character keeps its case.
    """
    collapsed = _SEPARATOR_RUN.sub(
        lambda m: m.group(1).upper() if m.group(1) else "", str(value)
    )
    return collapsed[:1].upper() + collapsed[1:]


def package_case(value: str) -> str:
    """Collapse separator runs to ``_`` so the name can be imported as a package."""
    return _SEPARATORS.sub("_", value)


class FeatureDescriptor(BaseModel):
    """Names derived from one generator invocation."""

    raw_name: str
    normalized_name: str = Field(..., min_length=1)
    type_name: str = Field(..., min_length=1)
    package_name: str = Field(..., min_length=1)

    @classmethod
    def from_raw(cls, raw_name: str | None) -> "FeatureDescriptor":
        """Build the descriptor for *raw_name*.

        Raises:
            UsageError: If the name is missing or blank, or does not yield an
                importable Python package name and a non-empty class name.
        """
        if raw_name is None or not raw_name.strip():
            raise UsageError("a feature name is required")

        normalized = raw_name.lower()
        package = package_case(normalized)
        if not package.isidentifier() or keyword.iskeyword(package):
            raise UsageError(
                f"'{raw_name}' does not produce an importable package name ({package!r})"
            )

        type_name = pascal_case(normalized)
        if not type_name:
            raise UsageError(f"'{raw_name}' does not produce a class name")

        return cls(
            raw_name=raw_name,
            normalized_name=normalized,
            type_name=type_name,
            package_name=package,
        )

    # -- Derived names -----------------------------------------------------

    @property
    def module_class(self) -> str:
        """Name of the generated module descriptor, e.g. ``CandidateModule``."""
        return f"{self.type_name}Module"

    @property
    def module_import_path(self) -> str:
        """Import path of the module file relative to the composition root."""
        return f".{self.package_name}.{self.package_name}_module"

    def artifact_name(self, kind: str) -> str:
        """File name of one generated artifact, e.g. ``candidate_service.py``."""
        return f"{self.package_name}_{kind}.py"
