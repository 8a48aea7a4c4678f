"""Symbol tree extracted from Java sources.

These dataclasses are the parsed source model the coverage statistics read
from. They mirror what the javadoc tool exposes for a compilation unit:
raw comment text, source positions, and the declared members of every
class-like type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

UNNAMED_PACKAGE = ""


class ClassKind(Enum):
    """Kind of a class-like declaration."""

    CLASS = "Class"
    INTERFACE = "Interface"
    ENUM = "Enum"
    ANNOTATION = "Annotation"
    RECORD = "Record"


class ExecutableKind(Enum):
    """Kind of an executable member."""

    CONSTRUCTOR = "Constructor"
    METHOD = "Method"


class Access(Enum):
    """Declaration access level, from most to least visible."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PACKAGE = "package"
    PRIVATE = "private"

    @property
    def rank(self) -> int:
        """Position in visibility order (0 = public)."""
        return _ACCESS_ORDER.index(self)

    def visible_at(self, level: Access) -> bool:
        """Return True if a declaration with this access is shown at *level*."""
        return self.rank <= level.rank


_ACCESS_ORDER = (Access.PUBLIC, Access.PROTECTED, Access.PACKAGE, Access.PRIVATE)


@dataclass
class PackageDoc:
    """A package and its ``package-info.java`` comment."""

    name: str
    comment: str | None = None


@dataclass
class ParameterDoc:
    """A declared parameter; ``comment`` is the matching ``@param`` text."""

    name: str
    type_name: str | None = None
    comment: str | None = None

    @property
    def has_source_position(self) -> bool:
        return True


@dataclass
class ThrownExceptionDoc:
    """A type named in a ``throws`` clause; ``comment`` is its ``@throws`` text."""

    name: str
    comment: str | None = None

    @property
    def has_source_position(self) -> bool:
        return True


@dataclass
class FieldDoc:
    """A field or interface constant."""

    name: str
    comment: str | None = None
    line: int | None = None
    access: Access = Access.PACKAGE

    @property
    def has_source_position(self) -> bool:
        return self.line is not None


@dataclass
class EnumConstantDoc:
    """An enum constant."""

    name: str
    comment: str | None = None
    line: int | None = None

    @property
    def has_source_position(self) -> bool:
        return self.line is not None


@dataclass
class ExecutableDoc:
    """A constructor, method or annotation element.

    Synthesized executables, such as the implicit default constructor,
    carry ``line=None``.
    """

    name: str
    kind: ExecutableKind = ExecutableKind.METHOD
    comment: str | None = None
    line: int | None = None
    access: Access = Access.PACKAGE
    parameters: list[ParameterDoc] | None = field(default_factory=list)
    thrown_exceptions: list[ThrownExceptionDoc] | None = field(default_factory=list)

    @property
    def has_source_position(self) -> bool:
        return self.line is not None


@dataclass
class ClassDoc:
    """A class, interface, enum, annotation type or record.

    Nested types are separate ``ClassDoc`` entries whose ``name`` is
    dotted with the enclosing type names (``Outer.Inner``).
    """

    name: str
    kind: ClassKind = ClassKind.CLASS
    package: PackageDoc | None = None
    comment: str | None = None
    line: int | None = None
    access: Access = Access.PACKAGE
    fields: list[FieldDoc] | None = field(default_factory=list)
    constructors: list[ExecutableDoc] | None = field(default_factory=list)
    methods: list[ExecutableDoc] | None = field(default_factory=list)
    enum_constants: list[EnumConstantDoc] | None = field(default_factory=list)
    file_path: str = ""

    @property
    def has_source_position(self) -> bool:
        return self.line is not None

    @property
    def package_name(self) -> str:
        """Name of the containing package (empty for the unnamed package)."""
        return self.package.name if self.package is not None else UNNAMED_PACKAGE

    @property
    def qualified_name(self) -> str:
        """Fully qualified dotted name."""
        if self.package_name:
            return f"{self.package_name}.{self.name}"
        return self.name


@dataclass
class SourceSet:
    """Fully materialized symbol tree of an analysed source set."""

    classes: list[ClassDoc] = field(default_factory=list)
    """Every visible class-like declaration, in discovery order."""

    packages: dict[str, PackageDoc] = field(default_factory=dict)
    """Packages by name, shared with ``ClassDoc.package``."""

    files: list[str] = field(default_factory=list)
    """Source files that were parsed."""
