"""Tree-sitter wrapper for parsing Java compilation units."""

from __future__ import annotations

import functools
import logging
from pathlib import Path

import tree_sitter
import tree_sitter_language_pack as tslp

logger = logging.getLogger(__name__)

JAVA_EXTENSION = ".java"


def is_java_file(file_path: str | Path) -> bool:
    """Return True for ``.java`` files (case-insensitive)."""
    return Path(file_path).suffix.lower() == JAVA_EXTENSION


@functools.cache
def get_parser() -> tree_sitter.Parser:
    """Get the (cached) tree-sitter Java parser."""
    return tslp.get_parser("java")


def parse_code(source: bytes) -> tree_sitter.Tree:
    """Parse Java source bytes into a tree-sitter AST."""
    return get_parser().parse(source)


def has_parse_errors(root: tree_sitter.Node) -> bool:
    """Check if the AST contains any parse errors."""
    return root.has_error


def collect_error_ranges(root: tree_sitter.Node) -> list[tuple[int, int]]:
    """Collect line ranges of parse error nodes."""
    errors: list[tuple[int, int]] = []
    _walk_errors(root, errors)
    return errors


def _walk_errors(node: tree_sitter.Node, errors: list[tuple[int, int]]) -> None:
    if node.is_error or node.is_missing:
        errors.append((node.start_point.row + 1, node.end_point.row + 1))
        return
    for child in node.children:
        _walk_errors(child, errors)


def node_text(node: tree_sitter.Node | None) -> str:
    """Decode node text from bytes, returning empty string for None."""
    if node is None:
        return ""
    return node.text.decode("utf-8", errors="replace") if node.text else ""


def node_line(node: tree_sitter.Node) -> int:
    """1-based start line of a node."""
    return node.start_point.row + 1
