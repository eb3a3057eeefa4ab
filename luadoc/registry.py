from __future__ import annotations

from typing import Dict, List, Set

from luadoc.config import DEFAULT_NAMESPACE
from luadoc.doc.builders import ClassBuilder, FunctionBuilder
from luadoc.doc.model import Field, LuaDoc, Namespace


class DocRegistry:
    """
    Per-file accumulator for class builders, global functions, namespace
    fields and the names of locals seen so far.

    Classes are created lazily on first reference and kept in first-seen
    order; ``flatten()`` turns everything into a frozen ``LuaDoc``.
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE) -> None:
        self.namespace = namespace
        self.classes: Dict[str, ClassBuilder] = {}
        self.global_functions: List[FunctionBuilder] = []
        self.fields: List[Field] = []
        self.local_variables: Set[str] = set()

    def class_builder(self, name: str) -> ClassBuilder:
        builder = self.classes.get(name)
        if builder is None:
            builder = ClassBuilder(name=name)
            self.classes[name] = builder
        return builder

    def add_global_function(self, builder: FunctionBuilder) -> None:
        self.global_functions.append(builder)

    def add_field(self, value: Field) -> None:
        self.fields.append(value)

    def record_local(self, name: str) -> None:
        self.local_variables.add(name)

    def is_hidden_local(self, name: str) -> bool:
        # a local that was documented as a class/enum is part of the API
        return name in self.local_variables and name not in self.classes

    def flatten(self) -> LuaDoc:
        namespace = Namespace(
            name=self.namespace,
            functions=tuple(b.build() for b in self.global_functions),
            classes=tuple(b.build() for b in self.classes.values()),
            fields=tuple(self.fields),
        )
        return LuaDoc(namespaces=(namespace,))
