"""Java source parsing into a javadoc-style symbol tree."""

from __future__ import annotations

from jdcov.parsing.java import CompilationUnit, JavaExtractor
from jdcov.parsing.loader import SourceModelError, discover_sources, load_source_set
from jdcov.parsing.model import (
    UNNAMED_PACKAGE,
    Access,
    ClassDoc,
    ClassKind,
    EnumConstantDoc,
    ExecutableDoc,
    ExecutableKind,
    FieldDoc,
    PackageDoc,
    ParameterDoc,
    SourceSet,
    ThrownExceptionDoc,
)


def extract_from_source(
    source: bytes,
    file_path: str = "<memory>",
    access: Access = Access.PROTECTED,
) -> CompilationUnit:
    """Parse one Java compilation unit held in memory."""
    return JavaExtractor(access=access).extract(source, file_path=file_path)


__all__ = [
    "UNNAMED_PACKAGE",
    "Access",
    "ClassDoc",
    "ClassKind",
    "CompilationUnit",
    "EnumConstantDoc",
    "ExecutableDoc",
    "ExecutableKind",
    "FieldDoc",
    "JavaExtractor",
    "PackageDoc",
    "ParameterDoc",
    "SourceModelError",
    "SourceSet",
    "ThrownExceptionDoc",
    "discover_sources",
    "extract_from_source",
    "load_source_set",
]
