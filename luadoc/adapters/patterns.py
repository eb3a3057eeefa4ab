"""
luadoc/adapters/patterns.py

Annotation grammar for LuaDoc-style comments (``---@class``, ``---@param`` ...)
and the handful of code-line patterns the adapter correlates them with.

The grammar is a fixed, ordered table of (kind, compiled pattern) pairs.
``classify_annotation`` walks the table in order and returns the first hit,
so more specific rules must come before the catch-all ``OTHER`` rule.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Optional, Tuple


class AnnotationKind(Enum):
    CLASS = "class"
    ENUM = "enum"
    FIELD = "field"
    TYPE = "type"
    PARAM = "param"
    RETURN = "return"
    NON_STATIC = "non-static"
    OTHER = "other"          # any other @word, content discarded


# ---------------------------------------------------------------------------
# Type expressions
# ---------------------------------------------------------------------------

# number | my.Class | string[] | table<string, number> | nil?
_TYPE_ATOM = r"[\w.?\[\]]+(?:<[^>]+>)?"
# fun(a: number, cb: fun(): nil): boolean  (one level of nested parens)
_FUN_ATOM = r"fun\((?:[^()]|\([^()]*\))*\)(?:\s*:\s*" + _TYPE_ATOM + r")?"
_ALTERNATIVE = r"(?:" + _FUN_ATOM + r"|" + _TYPE_ATOM + r")"
TYPE_EXPR = _ALTERNATIVE + r"(?:\|" + _ALTERNATIVE + r")*\??"


# ---------------------------------------------------------------------------
# Annotation table
# ---------------------------------------------------------------------------

ANNOTATION_RULES: Tuple[Tuple[AnnotationKind, re.Pattern], ...] = (
    # ---@class NAME [: PARENT] [desc]
    (AnnotationKind.CLASS, re.compile(r"---@class\s+([^\s:]+)(?:\s*:\s*(\S+))?\s*(.*)")),
    # ---@enum NAME [: PARENT] [desc]
    (AnnotationKind.ENUM, re.compile(r"---@enum\s+([^\s:]+)(?:\s*:\s*(\S+))?\s*(.*)")),
    # ---@field [private|public] NAME TYPE [desc]
    (
        AnnotationKind.FIELD,
        re.compile(
            r"---@field\s+(?:(private|public|protected|package)\s+)?(\w+)\s+("
            + TYPE_EXPR
            + r")\s*(.*)"
        ),
    ),
    # ---@type TYPE [desc]
    (AnnotationKind.TYPE, re.compile(r"---@type\s+(" + TYPE_EXPR + r")(?:\s+(.+))?")),
    # ---@param NAME TYPE [desc]
    (
        AnnotationKind.PARAM,
        re.compile(r"---@param\s+(\w+|\.\.\.)\s+(" + TYPE_EXPR + r")(?:\s+(.+))?"),
    ),
    # ---@return TYPE [NAME] [desc]
    (
        AnnotationKind.RETURN,
        re.compile(r"---@return\s+(" + TYPE_EXPR + r")(?:\s+(\w+))?(?:\s+(.+))?"),
    ),
    (AnnotationKind.NON_STATIC, re.compile(r"---@(?:non|none)-static\b")),
    (AnnotationKind.OTHER, re.compile(r"---\s*@\w")),
)

META = re.compile(r"---@meta\b")


# ---------------------------------------------------------------------------
# Code-line patterns
# ---------------------------------------------------------------------------

# function Owner.Sub:name(a, b)  -> ("Owner.Sub", ":", "name", "a, b")
FUNCTION = re.compile(r"function\s+(?:(\w+(?:\.\w+)*)([.:]))?(\w+)\s*\(([^)]*)\)")
# Owner.field =   (but not ==)
ASSIGNMENT = re.compile(r"(\w+(?:\.\w+)*)\s*=(?!=)")
# local declarations, anchored on the trimmed code line
LOCAL = re.compile(r"^local\s+")
# a value-returning return statement
RETURN = re.compile(r"\breturn\s+")
# RED = 1
ENUM_VALUE = re.compile(r"(\w+)\s*=")
# "double" or 'single' quoted string, with escapes
STRING_LITERAL = re.compile(r"'(?:\\.|[^'\\])*'|\"(?:\\.|[^\"\\])*\"")


def classify_annotation(line: str) -> Tuple[Optional[AnnotationKind], Optional[re.Match]]:
    """
    Match one trimmed doc-comment line against the annotation table.

    Returns (kind, match) for the first rule that matches at the start of the
    line, or (None, None) for a plain continuation line. A line whose keyword
    is known but whose body is malformed lands on ``OTHER``.
    """
    for kind, pattern in ANNOTATION_RULES:
        m = pattern.match(line)
        if m:
            return kind, m
    return None, None


def is_doc_comment(trimmed: str) -> bool:
    return trimmed.startswith("---") and not META.match(trimmed)
