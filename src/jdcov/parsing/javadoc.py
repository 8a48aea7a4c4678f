"""Javadoc comment text handling.

Only what coverage needs: stripping the comment delimiters down to the raw
comment text, and splitting block tags so ``@param`` and ``@throws``
descriptions can be attached to parameters and thrown exceptions.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_BLOCK_TAG_RE = re.compile(r"^@(\w+)(?:\s+(.*))?$")

_THROWS_TAGS = frozenset({"throws", "exception"})


@dataclass(frozen=True)
class DocTag:
    """A block tag such as ``@param name description``."""

    name: str
    text: str


@dataclass
class Javadoc:
    """A parsed javadoc comment."""

    description: str
    tags: list[DocTag] = field(default_factory=list)

    def param_comment(self, param_name: str) -> str | None:
        """Description of the ``@param`` tag naming *param_name* exactly."""
        for tag in self.tags:
            if tag.name != "param":
                continue
            target, description = _split_first_word(tag.text)
            if target == param_name:
                return description
        return None

    def throws_comment(self, exception_name: str) -> str | None:
        """Description of the ``@throws``/``@exception`` tag for *exception_name*.

        Types are compared by simple name so ``java.io.IOException`` in the
        tag matches ``IOException`` in the ``throws`` clause.
        """
        wanted = simple_type_name(exception_name)
        for tag in self.tags:
            if tag.name not in _THROWS_TAGS:
                continue
            target, description = _split_first_word(tag.text)
            if target and simple_type_name(target) == wanted:
                return description
        return None


def is_javadoc(comment: str) -> bool:
    """Return True for ``/** ... */`` comments (``/**/`` is a plain comment)."""
    return comment.startswith("/**") and comment.endswith("*/") and comment != "/**/"


def strip_comment(comment: str) -> str:
    """Return the raw text of a block comment without delimiters and ``*`` gutters."""
    body = comment
    if body.startswith("/**"):
        body = body[3:]
    elif body.startswith("/*"):
        body = body[2:]
    if body.endswith("*/"):
        body = body[:-2]

    lines: list[str] = []
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith("*"):
            stripped = stripped.lstrip("*")
            if stripped.startswith(" "):
                stripped = stripped[1:]
        lines.append(stripped.rstrip())
    return "\n".join(lines).strip()


def parse_javadoc(raw: str) -> Javadoc:
    """Split raw comment text into its main description and block tags."""
    description: list[str] = []
    tags: list[tuple[str, list[str]]] = []

    for line in raw.splitlines():
        match = _BLOCK_TAG_RE.match(line.strip())
        if match:
            tags.append((match.group(1), [match.group(2) or ""]))
        elif tags:
            tags[-1][1].append(line.strip())
        else:
            description.append(line)

    return Javadoc(
        description="\n".join(description).strip(),
        tags=[DocTag(name=name, text=" ".join(parts).strip()) for name, parts in tags],
    )


def simple_type_name(type_name: str) -> str:
    """Strip package qualifiers and type arguments: ``a.b.Foo<T>`` -> ``Foo``."""
    base = type_name.split("<", 1)[0].strip()
    return base.rsplit(".", 1)[-1]


def _split_first_word(text: str) -> tuple[str, str]:
    parts = text.split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()
