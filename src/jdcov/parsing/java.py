"""Java symbol extractor.

Walks a tree-sitter Java AST and builds the :mod:`jdcov.parsing.model`
symbol tree the way the javadoc tool would see it: only declarations visible
at the requested access level, nested types as separate classes, and an
implicit default constructor (with no source position) for classes that
declare none.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from jdcov.parsing.javadoc import is_javadoc, parse_javadoc, strip_comment
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
    ThrownExceptionDoc,
)
from jdcov.parsing.treesitter import (
    collect_error_ranges,
    has_parse_errors,
    node_line,
    node_text,
    parse_code,
)

if TYPE_CHECKING:
    import tree_sitter

logger = logging.getLogger(__name__)

_TYPE_DECLARATIONS: dict[str, ClassKind] = {
    "class_declaration": ClassKind.CLASS,
    "interface_declaration": ClassKind.INTERFACE,
    "enum_declaration": ClassKind.ENUM,
    "annotation_type_declaration": ClassKind.ANNOTATION,
    "record_declaration": ClassKind.RECORD,
}

_FIELD_DECLARATIONS = frozenset({"field_declaration", "constant_declaration"})
_CONSTRUCTOR_DECLARATIONS = frozenset(
    {"constructor_declaration", "compact_constructor_declaration"}
)
_METHOD_DECLARATIONS = frozenset({"method_declaration", "annotation_type_element_declaration"})
_PARAMETER_NODES = frozenset({"formal_parameter", "spread_parameter"})

# "comment" is the node name used by older tree-sitter-java grammars
_COMMENT_NODES = frozenset({"block_comment", "line_comment", "comment"})

_ACCESS_KEYWORDS = frozenset({"public", "protected", "private"})

# Types whose constructors get synthesized when none is declared
_IMPLICIT_CONSTRUCTOR_KINDS = frozenset({ClassKind.CLASS, ClassKind.RECORD})


@dataclass
class CompilationUnit:
    """Symbols extracted from one ``.java`` file."""

    file_path: str
    package: PackageDoc
    classes: list[ClassDoc] = field(default_factory=list)
    has_errors: bool = False
    error_ranges: list[tuple[int, int]] = field(default_factory=list)


def _leading_javadoc(node: tree_sitter.Node) -> str | None:
    """Raw text of the javadoc comment attached to a declaration, if any."""
    sibling = node.prev_sibling
    while sibling is not None and sibling.type in _COMMENT_NODES:
        text = node_text(sibling)
        if is_javadoc(text):
            return strip_comment(text)
        sibling = sibling.prev_sibling
    return None


def _declared_access(node: tree_sitter.Node) -> Access | None:
    for child in node.children:
        if child.type != "modifiers":
            continue
        for modifier in child.children:
            if modifier.type in _ACCESS_KEYWORDS:
                return Access(modifier.type)
    return None


def _body_members(body: tree_sitter.Node | None) -> list[tree_sitter.Node]:
    """Named children of a type body, with enum body declarations flattened."""
    if body is None:
        return []
    members: list[tree_sitter.Node] = []
    for child in body.named_children:
        if child.type == "enum_body_declarations":
            members.extend(child.named_children)
        else:
            members.append(child)
    return members


def _parameter_name(node: tree_sitter.Node) -> str:
    name_node = node.child_by_field_name("name")
    if name_node is None:
        for child in node.named_children:
            if child.type == "variable_declarator":
                name_node = child.child_by_field_name("name")
            elif child.type == "identifier":
                name_node = child
    return node_text(name_node)


def _parameter_type(node: tree_sitter.Node) -> str | None:
    type_node = node.child_by_field_name("type")
    if type_node is not None:
        return node_text(type_node)
    for child in node.named_children:
        if child.type not in {"modifiers", "variable_declarator", "identifier"}:
            return node_text(child) + "..."
    return None


class JavaExtractor:
    """Build javadoc-style symbols from Java source."""

    def __init__(self, access: Access = Access.PROTECTED) -> None:
        self.access = access

    def extract(self, source: bytes, file_path: str = "<memory>") -> CompilationUnit:
        """Parse one compilation unit."""
        tree = parse_code(source)
        root = tree.root_node

        unit = CompilationUnit(
            file_path=file_path,
            package=self._parse_package(root),
            has_errors=has_parse_errors(root),
            error_ranges=collect_error_ranges(root),
        )
        for child in root.named_children:
            kind = _TYPE_DECLARATIONS.get(child.type)
            if kind is not None:
                self._parse_type(
                    child,
                    kind,
                    unit,
                    prefix="",
                    default_access=Access.PACKAGE,
                )
        logger.debug("Extracted %d type(s) from %s", len(unit.classes), file_path)
        return unit

    def _parse_package(self, root: tree_sitter.Node) -> PackageDoc:
        for child in root.named_children:
            if child.type != "package_declaration":
                continue
            name = next(
                (
                    node_text(sub)
                    for sub in child.named_children
                    if sub.type in {"scoped_identifier", "identifier"}
                ),
                UNNAMED_PACKAGE,
            )
            return PackageDoc(name=name, comment=_leading_javadoc(child))
        return PackageDoc(name=UNNAMED_PACKAGE)

    def _visible(self, access: Access) -> bool:
        return access.visible_at(self.access)

    def _parse_type(
        self,
        node: tree_sitter.Node,
        kind: ClassKind,
        unit: CompilationUnit,
        *,
        prefix: str,
        default_access: Access,
    ) -> None:
        access = _declared_access(node) or default_access
        if not self._visible(access):
            return

        simple_name = node_text(node.child_by_field_name("name"))
        member_access = (
            Access.PUBLIC if kind in {ClassKind.INTERFACE, ClassKind.ANNOTATION} else Access.PACKAGE
        )
        # Enum constructors are implicitly private
        constructor_access = Access.PRIVATE if kind is ClassKind.ENUM else member_access

        fields: list[FieldDoc] = []
        constructors: list[ExecutableDoc] = []
        methods: list[ExecutableDoc] = []
        enum_constants: list[EnumConstantDoc] = []
        nested: list[tuple[tree_sitter.Node, ClassKind]] = []
        declares_constructor = False

        for member in _body_members(node.child_by_field_name("body")):
            if member.type in _FIELD_DECLARATIONS:
                fields.extend(self._parse_fields(member, member_access))
            elif member.type in _CONSTRUCTOR_DECLARATIONS:
                declares_constructor = True
                constructor = self._parse_executable(
                    member, ExecutableKind.CONSTRUCTOR, constructor_access, simple_name
                )
                if constructor is not None:
                    constructors.append(constructor)
            elif member.type in _METHOD_DECLARATIONS:
                method = self._parse_executable(member, ExecutableKind.METHOD, member_access)
                if method is not None:
                    methods.append(method)
            elif member.type == "enum_constant":
                enum_constants.append(
                    EnumConstantDoc(
                        name=node_text(member.child_by_field_name("name")),
                        comment=_leading_javadoc(member),
                        line=node_line(member),
                    )
                )
            elif member.type in _TYPE_DECLARATIONS:
                nested.append((member, _TYPE_DECLARATIONS[member.type]))

        if not declares_constructor and kind in _IMPLICIT_CONSTRUCTOR_KINDS:
            constructors.append(
                ExecutableDoc(
                    name=simple_name,
                    kind=ExecutableKind.CONSTRUCTOR,
                    access=access,
                )
            )

        class_doc = ClassDoc(
            name=prefix + simple_name,
            kind=kind,
            package=unit.package,
            comment=_leading_javadoc(node),
            line=node_line(node),
            access=access,
            fields=fields,
            constructors=constructors,
            methods=methods,
            enum_constants=enum_constants,
            file_path=unit.file_path,
        )
        unit.classes.append(class_doc)

        for nested_node, nested_kind in nested:
            self._parse_type(
                nested_node,
                nested_kind,
                unit,
                prefix=f"{class_doc.name}.",
                default_access=member_access,
            )

    def _parse_fields(self, node: tree_sitter.Node, default_access: Access) -> list[FieldDoc]:
        access = _declared_access(node) or default_access
        if not self._visible(access):
            return []
        comment = _leading_javadoc(node)
        return [
            FieldDoc(
                name=node_text(declarator.child_by_field_name("name")),
                comment=comment,
                line=node_line(declarator),
                access=access,
            )
            for declarator in node.named_children
            if declarator.type == "variable_declarator"
        ]

    def _parse_executable(
        self,
        node: tree_sitter.Node,
        kind: ExecutableKind,
        default_access: Access,
        name: str | None = None,
    ) -> ExecutableDoc | None:
        access = _declared_access(node) or default_access
        if not self._visible(access):
            return None

        raw = _leading_javadoc(node)
        javadoc = parse_javadoc(raw) if raw else None

        parameters: list[ParameterDoc] = []
        params_node = node.child_by_field_name("parameters")
        if params_node is not None:
            for child in params_node.named_children:
                if child.type not in _PARAMETER_NODES:
                    continue
                param_name = _parameter_name(child)
                parameters.append(
                    ParameterDoc(
                        name=param_name,
                        type_name=_parameter_type(child),
                        comment=javadoc.param_comment(param_name) if javadoc else None,
                    )
                )

        thrown: list[ThrownExceptionDoc] = []
        for child in node.children:
            if child.type != "throws":
                continue
            for type_node in child.named_children:
                exception_name = node_text(type_node)
                thrown.append(
                    ThrownExceptionDoc(
                        name=exception_name,
                        comment=javadoc.throws_comment(exception_name) if javadoc else None,
                    )
                )

        return ExecutableDoc(
            name=name or node_text(node.child_by_field_name("name")),
            kind=kind,
            comment=raw,
            line=node_line(node),
            access=access,
            parameters=parameters,
            thrown_exceptions=thrown,
        )
