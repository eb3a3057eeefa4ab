"""
Multi-file merge for project mode.

Each file of a namespace is parsed on its own; the results are folded left
to right in configuration order. A class seen in an earlier file wins on
conflicts: its description (if any), and its fields / functions on
duplicate names. Global functions and namespace fields are concatenated.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict, Iterable, List, TypeVar

from luadoc.doc.model import LuaClass, LuaDoc, Namespace

_T = TypeVar("_T")


def _union_by_name(existing: Iterable[_T], incoming: Iterable[_T]) -> tuple:
    merged: Dict[str, _T] = {}
    for item in existing:
        merged.setdefault(item.name, item)
    for item in incoming:
        merged.setdefault(item.name, item)
    return tuple(merged.values())


def merge_class(existing: LuaClass, incoming: LuaClass) -> LuaClass:
    """Union two descriptions of the same class; ``existing`` has priority."""
    return LuaClass(
        name=existing.name,
        description=existing.description if existing.description else incoming.description,
        fields=_union_by_name(existing.fields, incoming.fields),
        functions=_union_by_name(existing.functions, incoming.functions),
    )


def merge_classes(existing: Iterable[LuaClass], incoming: Iterable[LuaClass]) -> tuple:
    """Append new classes, merge the ones already present (exact name match)."""
    result: List[LuaClass] = list(existing)
    index = {c.name: i for i, c in enumerate(result)}

    for cls in incoming:
        i = index.get(cls.name)
        if i is None:
            index[cls.name] = len(result)
            result.append(cls)
        else:
            result[i] = merge_class(result[i], cls)

    return tuple(result)


def merge_namespace(accumulated: Namespace, incoming: Namespace) -> Namespace:
    return replace(
        accumulated,
        functions=accumulated.functions + incoming.functions,
        classes=merge_classes(accumulated.classes, incoming.classes),
        fields=accumulated.fields + incoming.fields,
    )


def merge_docs(name: str, docs: Iterable[LuaDoc]) -> Namespace:
    """Fold per-file results (in order) into one namespace called ``name``."""
    result = Namespace(name=name)
    for doc in docs:
        for ns in doc.namespaces:
            result = merge_namespace(result, ns)
    return result
