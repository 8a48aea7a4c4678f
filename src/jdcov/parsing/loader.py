"""Build a :class:`SourceSet` from files and directories of Java sources."""

from __future__ import annotations

import fnmatch
import logging
from pathlib import Path
from typing import TYPE_CHECKING

from jdcov.parsing.java import CompilationUnit, JavaExtractor
from jdcov.parsing.model import Access, PackageDoc, SourceSet
from jdcov.parsing.treesitter import is_java_file

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

logger = logging.getLogger(__name__)

PACKAGE_INFO_FILE = "package-info.java"


class SourceModelError(Exception):
    """Raised when Java sources cannot be turned into a symbol tree."""


def _is_excluded(path: Path, root: Path, patterns: Sequence[str]) -> bool:
    candidates = [path.as_posix()]
    try:
        candidates.append(path.relative_to(root).as_posix())
    except ValueError:
        pass
    return any(
        fnmatch.fnmatch(candidate, pattern) for pattern in patterns for candidate in candidates
    )


def discover_sources(
    paths: Iterable[str | Path],
    exclude_patterns: Sequence[str] = (),
) -> list[Path]:
    """Expand files and directories into a de-duplicated list of ``.java`` files.

    Raises:
        SourceModelError: If a path does not exist.
    """
    found: dict[Path, None] = {}
    for raw in paths:
        path = Path(raw)
        if not path.exists():
            raise SourceModelError(f"Source path does not exist: {path}")
        if path.is_file():
            if is_java_file(path) and not _is_excluded(path, path.parent, exclude_patterns):
                found[path.resolve()] = None
            continue
        for candidate in sorted(path.rglob("*")):
            if (
                candidate.is_file()
                and is_java_file(candidate)
                and not _is_excluded(candidate, path, exclude_patterns)
            ):
                found[candidate.resolve()] = None
    return list(found)


def _read_source(path: Path, encoding: str) -> bytes:
    try:
        data = path.read_bytes()
    except OSError as e:
        raise SourceModelError(f"Cannot read {path}: {e}") from e
    try:
        text = data.decode(encoding)
    except (UnicodeDecodeError, LookupError) as e:
        raise SourceModelError(f"Cannot decode {path} as {encoding}: {e}") from e
    return text.encode("utf-8")


def _merge_unit(
    source_set: SourceSet,
    unit: CompilationUnit,
    known: set[str],
    *,
    is_package_info: bool,
) -> None:
    package = source_set.packages.setdefault(unit.package.name, PackageDoc(unit.package.name))
    if is_package_info:
        package.comment = unit.package.comment

    for class_doc in unit.classes:
        class_doc.package = package
        if class_doc.qualified_name in known:
            logger.warning(
                "Duplicate type %s in %s ignored", class_doc.qualified_name, unit.file_path
            )
            continue
        known.add(class_doc.qualified_name)
        source_set.classes.append(class_doc)


def load_source_set(
    paths: Iterable[str | Path],
    *,
    access: Access = Access.PROTECTED,
    exclude_patterns: Sequence[str] = (),
    encoding: str = "utf-8",
    fail_on_parse_errors: bool = True,
) -> SourceSet:
    """Parse every Java file under *paths* into one symbol tree.

    ``package-info.java`` files only contribute package comments.

    Raises:
        SourceModelError: If a path is missing, a file cannot be read or
            decoded, or a file has syntax errors while
            ``fail_on_parse_errors`` is set.
    """
    extractor = JavaExtractor(access=access)
    source_set = SourceSet()
    known: set[str] = set()

    for path in discover_sources(paths, exclude_patterns):
        unit = extractor.extract(_read_source(path, encoding), file_path=str(path))
        if unit.has_errors:
            lines = ", ".join(f"{start}-{end}" for start, end in unit.error_ranges)
            if fail_on_parse_errors:
                raise SourceModelError(f"Syntax errors in {path} (lines {lines})")
            logger.warning("Syntax errors in %s (lines %s); using partial tree", path, lines)
        _merge_unit(source_set, unit, known, is_package_info=path.name == PACKAGE_INFO_FILE)
        source_set.files.append(str(path))

    logger.info(
        "Loaded %d type(s) in %d package(s) from %d file(s)",
        len(source_set.classes),
        len(source_set.packages),
        len(source_set.files),
    )
    return source_set
