"""
luadoc/adapters/lua_adapter.py

Lua source → LuaDoc builder.

Scans annotated Lua text line by line (no Lua parser involved), collects
``---`` doc blocks and correlates each block with the next code line to
decide what is being documented:

  - ``---@class``  → class (+ ``@field`` members)
  - ``---@enum``   → enum modelled as a class, values read from the table body
  - ``---@type``   → static field from a ``Owner.field = ...`` assignment
                     (or a namespace field for a bare ``NAME = ...``)
  - anything else → function declaration (``function Owner:name(a, b)``)

Undocumented ``function`` lines are picked up as well, with every parameter
typed ``any``. Names declared with ``local`` are remembered and their
members are left out of the output unless the local itself was documented
as a class or enum.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from luadoc.adapters.doc_block import DocBlock, interpret_block
from luadoc.adapters.patterns import ASSIGNMENT, FUNCTION, LOCAL, is_doc_comment
from luadoc.adapters.scanners import LineCursor, has_return_statement, scan_enum_body
from luadoc.config import ANY_TYPE, DEFAULT_NAMESPACE, INLINE_COMMENT_MARKER
from luadoc.doc.builders import (
    ClassBuilder,
    FieldBuilder,
    FunctionBuilder,
    ParameterBuilder,
    ReturnValueBuilder,
)
from luadoc.doc.model import LuaDoc
from luadoc.registry import DocRegistry

logger = logging.getLogger(__name__)


def parse_parameter_names(raw: Optional[str]) -> List[str]:
    """ "a, b , ..." → ["a", "b", "..."] """
    if not raw or not raw.strip():
        return []
    return [p.strip() for p in raw.split(",") if p.strip()]


class LuaAdapter:
    language = "lua"

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def parse(self, code: str, namespace: str = DEFAULT_NAMESPACE) -> LuaDoc:
        """Parse one Lua source into a single-namespace LuaDoc."""
        registry = DocRegistry(namespace)
        cursor = LineCursor(code)
        comment_block: List[str] = []

        while True:
            line = cursor.readline()
            if line is None:
                break
            self._process_line(line, cursor, comment_block, registry)

        doc = registry.flatten()
        ns = doc.namespaces[0]
        logger.debug(
            "Parsed namespace %s: %d classes, %d functions, %d fields",
            ns.name, len(ns.classes), len(ns.functions), len(ns.fields),
        )
        return doc

    def build_doc_for_code(self, code: str, filename: Optional[str] = None) -> LuaDoc:
        """Single-file helper (for /parse and the CLI)."""
        if filename:
            logger.debug("Parsing %s", filename)
        return self.parse(code)

    # ------------------------------------------------------------------
    # Line state machine
    # ------------------------------------------------------------------

    def _process_line(
        self,
        line: str,
        cursor: LineCursor,
        comment_block: List[str],
        registry: DocRegistry,
    ) -> None:
        trimmed = line.strip()

        if LOCAL.match(trimmed):
            m = ASSIGNMENT.search(trimmed)
            if m:
                registry.record_local(m.group(1))

        if is_doc_comment(trimmed):
            comment_block.append(trimmed)
            return

        if trimmed and not trimmed.startswith(INLINE_COMMENT_MARKER):
            # code line: closes the pending block, if any
            if comment_block:
                block = interpret_block(comment_block)
                comment_block.clear()
                self._correlate(block, trimmed, cursor, registry)
            else:
                self._process_function(None, trimmed, cursor, registry)
            return

        if not trimmed and comment_block:
            # blank line: only class / enum declarations survive without code
            block = interpret_block(comment_block)
            comment_block.clear()
            if block.class_decl is not None:
                self._commit_class(block, registry)

    # ------------------------------------------------------------------
    # Correlation: doc block + next code line
    # ------------------------------------------------------------------

    def _correlate(
        self,
        block: DocBlock,
        code_line: str,
        cursor: LineCursor,
        registry: DocRegistry,
    ) -> None:
        if block.is_class:
            self._commit_class(block, registry)
        elif block.is_enum:
            enum = self._commit_class(block, registry)
            scan_enum_body(cursor, enum, code_line)
        elif block.type_decl is not None:
            self._process_static_field(block, code_line, registry)
        else:
            self._process_function(block, code_line, cursor, registry)

    def _commit_class(self, block: DocBlock, registry: DocRegistry) -> ClassBuilder:
        builder = registry.class_builder(block.class_decl.name)
        builder.set_description(block.description)
        for f in block.fields:
            builder.add_field(f.build())
        return builder

    def _process_static_field(self, block: DocBlock, code_line: str, registry: DocRegistry) -> None:
        if LOCAL.match(code_line):
            return

        m = ASSIGNMENT.search(code_line)
        if not m:
            return

        full_name = m.group(1)
        if registry.is_hidden_local(full_name):
            return

        parts = full_name.split(".")
        if len(parts) == 2:
            owner, field_name = parts
            if registry.is_hidden_local(owner):
                return
            target = FieldBuilder(
                name=field_name,
                type=block.type_decl.type,
                is_static=True,
                description=block.type_decl.description,
            )
            registry.class_builder(owner).add_field(target.build())
        elif len(parts) == 1:
            target = FieldBuilder(
                name=full_name,
                type=block.type_decl.type,
                is_static=True,
                description=block.type_decl.description,
            )
            registry.add_field(target.build())

    def _process_function(
        self,
        block: Optional[DocBlock],
        code_line: str,
        cursor: LineCursor,
        registry: DocRegistry,
    ) -> None:
        """
        Build a function from a declaration line. ``block`` is None for
        undocumented functions.
        """
        if LOCAL.match(code_line):
            return

        m = FUNCTION.search(code_line)
        if not m:
            return

        owner, separator, name, raw_params = m.group(1), m.group(2), m.group(3), m.group(4)
        if owner is not None and registry.is_hidden_local(owner.split(".")[0]):
            return

        func = FunctionBuilder(name=name)
        if block is not None:
            func.description = block.description

        # "." or no owner → static, ":" → instance; @non-static wins
        if block is not None and block.non_static:
            func.is_static = False
        else:
            func.is_static = separator is None or separator == "."

        for param_name in parse_parameter_names(raw_params):
            documented = block.find_parameter(param_name) if block is not None else None
            if documented is not None:
                func.add_parameter(documented.build())
            else:
                func.add_parameter(ParameterBuilder(name=param_name, type=ANY_TYPE).build())

        if block is not None and block.returns:
            for r in block.returns:
                func.add_return(r.build())
        elif has_return_statement(cursor, code_line):
            func.add_return(ReturnValueBuilder(type=ANY_TYPE).build())

        if owner is not None:
            registry.class_builder(owner).add_function(func.build())
        else:
            registry.add_global_function(func)
