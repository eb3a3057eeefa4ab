"""
luadoc/adapters/doc_block.py

Doc block interpretation: a run of ``---`` comment lines → DocBlock.

Continuation rules:
  - a plain text line is appended to the description of the most recent
    ``@field`` or ``@param`` if one is pending, otherwise to the block's
    general description
  - the pending field / parameter is dropped as soon as an annotation of a
    different kind (or any unknown ``@word``) shows up, or on a marker-only
    line (``---``)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from luadoc.adapters.patterns import AnnotationKind, classify_annotation
from luadoc.config import DOC_COMMENT_MARKER
from luadoc.doc.builders import (
    FieldBuilder,
    ParameterBuilder,
    ReturnValueBuilder,
    append_line,
)


@dataclass
class ClassDecl:
    name: str
    parent: Optional[str] = None      # captured, not used downstream
    is_enum: bool = False


@dataclass
class DocBlock:
    description: Optional[str] = None
    class_decl: Optional[ClassDecl] = None
    type_decl: Optional[FieldBuilder] = None
    fields: List[FieldBuilder] = field(default_factory=list)
    parameters: List[ParameterBuilder] = field(default_factory=list)
    returns: List[ReturnValueBuilder] = field(default_factory=list)
    non_static: bool = False

    @property
    def is_class(self) -> bool:
        return self.class_decl is not None and not self.class_decl.is_enum

    @property
    def is_enum(self) -> bool:
        return self.class_decl is not None and self.class_decl.is_enum

    def find_parameter(self, name: str) -> Optional[ParameterBuilder]:
        for p in self.parameters:
            if p.name == name:
                return p
        return None


def _strip_marker(line: str) -> str:
    if line.startswith(DOC_COMMENT_MARKER):
        line = line[len(DOC_COMMENT_MARKER):]
    return line.strip()


def interpret_block(lines: Sequence[str]) -> DocBlock:
    """
    Interpret trimmed doc-comment lines (each starting with ``---``).

    Malformed annotations are dropped silently; they only reset the
    continuation state.
    """
    block = DocBlock()
    description: Optional[str] = None
    last_field: Optional[FieldBuilder] = None
    last_param: Optional[ParameterBuilder] = None

    for line in lines:
        kind, m = classify_annotation(line)

        if kind in (AnnotationKind.CLASS, AnnotationKind.ENUM):
            last_field = last_param = None
            block.class_decl = ClassDecl(
                name=m.group(1),
                parent=m.group(2),
                is_enum=kind is AnnotationKind.ENUM,
            )
            desc = (m.group(3) or "").strip()
            if desc:
                description = append_line(description, desc)
            continue

        if kind is AnnotationKind.FIELD:
            last_param = None
            last_field = FieldBuilder(
                name=m.group(2),
                type=m.group(3),
                is_static=False,
                description=m.group(4) or None,
            )
            block.fields.append(last_field)
            continue

        if kind is AnnotationKind.TYPE:
            last_field = last_param = None
            block.type_decl = FieldBuilder(type=m.group(1), description=m.group(2))
            continue

        if kind is AnnotationKind.PARAM:
            last_field = None
            last_param = ParameterBuilder(
                name=m.group(1),
                type=m.group(2),
                description=m.group(3),
            )
            block.parameters.append(last_param)
            continue

        if kind is AnnotationKind.RETURN:
            last_field = last_param = None
            block.returns.append(
                ReturnValueBuilder(type=m.group(1), name=m.group(2), description=m.group(3))
            )
            continue

        if kind is AnnotationKind.NON_STATIC:
            last_field = last_param = None
            block.non_static = True
            continue

        if kind is AnnotationKind.OTHER:
            last_field = last_param = None
            continue

        content = _strip_marker(line)
        if not content:
            last_field = last_param = None
            continue

        if last_field is not None:
            last_field.description = append_line(last_field.description, content)
        elif last_param is not None:
            last_param.description = append_line(last_param.description, content)
        else:
            description = append_line(description, content)

    block.description = description
    return block
