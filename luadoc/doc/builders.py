"""
Mutable builders for the documentation model.

A builder is owned by the parsing pass that created it and is the only
thing that gets mutated while a file is scanned. ``build()`` validates the
required attributes and copies the collected values into the frozen
dataclasses from ``doc/model.py``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from luadoc.doc.model import Field, Function, LuaClass, Parameter, ReturnValue


class DocModelError(ValueError):
    """A finished documentation value is missing a required attribute."""


def _clean_description(text: Optional[str]) -> Optional[str]:
    # absent descriptions are None, never ""
    if text is None:
        return None
    text = text.strip()
    return text or None


def split_optional(type_expr: str) -> tuple[str, bool]:
    """
    "number?" -> ("number", True)
    "number"  -> ("number", False)
    """
    if type_expr.endswith("?"):
        return type_expr[:-1], True
    return type_expr, False


def append_line(existing: Optional[str], line: str) -> str:
    """Newline-join a continuation line onto an optional description."""
    if not existing:
        return line
    return f"{existing}\n{line}"


@dataclass
class FieldBuilder:
    name: Optional[str] = None
    type: Optional[str] = None
    is_static: bool = False
    description: Optional[str] = None

    def build(self) -> Field:
        if self.name is None:
            raise DocModelError("Lua field must have a name")
        if self.type is None:
            raise DocModelError(f"Lua field '{self.name}' must have a type")
        return Field(
            name=self.name,
            type=self.type,
            is_static=self.is_static,
            description=_clean_description(self.description),
        )


@dataclass
class ParameterBuilder:
    name: Optional[str] = None
    type: Optional[str] = None
    description: Optional[str] = None

    def build(self) -> Parameter:
        if self.name is None:
            raise DocModelError("Lua parameter must have a name")
        if self.type is None:
            raise DocModelError(f"Lua parameter '{self.name}' must have a type")
        clean_type, optional = split_optional(self.type)
        return Parameter(
            name=self.name,
            type=clean_type,
            optional=optional,
            description=_clean_description(self.description),
        )


@dataclass
class ReturnValueBuilder:
    type: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None

    def build(self) -> ReturnValue:
        if self.type is None:
            raise DocModelError("Lua return value must have a type")
        clean_type, _ = split_optional(self.type)
        return ReturnValue(
            type=clean_type,
            name=self.name or "",
            description=_clean_description(self.description),
        )


@dataclass
class FunctionBuilder:
    name: Optional[str] = None
    is_static: bool = True
    description: Optional[str] = None
    parameters: List[Parameter] = field(default_factory=list)
    returns: List[ReturnValue] = field(default_factory=list)

    def add_parameter(self, parameter: Parameter) -> None:
        self.parameters.append(parameter)

    def add_return(self, return_value: ReturnValue) -> None:
        self.returns.append(return_value)

    def build(self) -> Function:
        if self.name is None:
            raise DocModelError("Lua function must have a name")
        return Function(
            name=self.name,
            is_static=self.is_static,
            description=_clean_description(self.description),
            parameters=tuple(self.parameters),
            returns=tuple(self.returns),
        )


@dataclass
class ClassBuilder:
    name: Optional[str] = None
    description: Optional[str] = None
    fields: List[Field] = field(default_factory=list)
    functions: List[Function] = field(default_factory=list)

    def set_description(self, description: Optional[str]) -> None:
        # a later block without text keeps what we already have
        description = _clean_description(description)
        if description is not None:
            self.description = description

    def add_field(self, value: Field) -> None:
        self.fields.append(value)

    def add_function(self, function: Function) -> None:
        self.functions.append(function)

    def build(self) -> LuaClass:
        if self.name is None:
            raise DocModelError("Lua class must have a name")
        return LuaClass(
            name=self.name,
            description=_clean_description(self.description),
            fields=tuple(self.fields),
            functions=tuple(self.functions),
        )
