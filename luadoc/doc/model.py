from dataclasses import dataclass
from typing import Optional, Tuple

# Finished documentation values. Built once by the builders in doc/builders.py
# and never mutated afterwards (merge produces new values).

@dataclass(frozen=True)
class Field:
    name: str
    type: str                 # free-form type expression, e.g. "number|nil"
    is_static: bool = False
    description: Optional[str] = None

@dataclass(frozen=True)
class Parameter:
    name: str
    type: str                 # clean type, trailing "?" already stripped
    optional: bool = False
    description: Optional[str] = None

@dataclass(frozen=True)
class ReturnValue:
    type: str
    name: str = ""
    description: Optional[str] = None

@dataclass(frozen=True)
class Function:
    name: str
    is_static: bool = True
    description: Optional[str] = None
    parameters: Tuple[Parameter, ...] = ()
    returns: Tuple[ReturnValue, ...] = ()

@dataclass(frozen=True)
class LuaClass:
    name: str
    description: Optional[str] = None
    fields: Tuple[Field, ...] = ()
    functions: Tuple[Function, ...] = ()

@dataclass(frozen=True)
class Namespace:
    name: str
    functions: Tuple[Function, ...] = ()
    classes: Tuple[LuaClass, ...] = ()
    fields: Tuple[Field, ...] = ()

@dataclass(frozen=True)
class LuaDoc:
    namespaces: Tuple[Namespace, ...] = ()
