from __future__ import annotations

import json
from typing import Any, Dict

from luadoc.config import JSON_INDENT
from luadoc.doc.model import Field, Function, LuaClass, LuaDoc, Namespace, Parameter, ReturnValue


def _field(f: Field) -> Dict[str, Any]:
    return {
        "name": f.name,
        "type": f.type,
        "isStatic": f.is_static,
        "description": f.description,
    }


def _parameter(p: Parameter) -> Dict[str, Any]:
    return {
        "name": p.name,
        "type": p.type,
        "optional": p.optional,
        "description": p.description,
    }


def _return(r: ReturnValue) -> Dict[str, Any]:
    return {
        "type": r.type,
        "name": r.name,
        "description": r.description,
    }


def _function(fn: Function) -> Dict[str, Any]:
    return {
        "name": fn.name,
        "isStatic": fn.is_static,
        "description": fn.description,
        "parameters": [_parameter(p) for p in fn.parameters],
        "returns": [_return(r) for r in fn.returns],
    }


def _class(c: LuaClass) -> Dict[str, Any]:
    return {
        "name": c.name,
        "description": c.description,
        "fields": [_field(f) for f in c.fields],
        "functions": [_function(fn) for fn in c.functions],
    }


def _namespace(ns: Namespace) -> Dict[str, Any]:
    return {
        "name": ns.name,
        "classes": [_class(c) for c in ns.classes],
        "functions": [_function(fn) for fn in ns.functions],
        "fields": [_field(f) for f in ns.fields],
    }


def doc_to_json_dict(doc: LuaDoc) -> Dict[str, Any]:
    """
    Plain-dict view of a LuaDoc for JSON output / API responses.
    Lists keep insertion order; missing descriptions stay None (-> null).
    """
    return {"namespaces": [_namespace(ns) for ns in doc.namespaces]}


def export_json(doc: LuaDoc, indent: int | None = JSON_INDENT) -> str:
    return json.dumps(doc_to_json_dict(doc), indent=indent or None, ensure_ascii=False)
