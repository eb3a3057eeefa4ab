import pytest

from luadoc.adapters.lua_adapter import LuaAdapter, parse_parameter_names
from luadoc.doc.builders import DocModelError, FieldBuilder


def parse(code):
    doc = LuaAdapter().parse(code)
    assert len(doc.namespaces) == 1
    return doc.namespaces[0]


def get_class(ns, name):
    return {c.name: c for c in ns.classes}[name]


def get_function(owner, name):
    return {f.name: f for f in owner.functions}[name]


VECTOR = """
---@class Vector
---@field x number
---@field y number
local Vector = {}

---@param dx number
---@return number
function Vector:length(dx)
  return dx
end
"""


def test_vector_end_to_end():
    ns = parse(VECTOR)
    assert ns.name == "global"
    assert [c.name for c in ns.classes] == ["Vector"]

    vector = get_class(ns, "Vector")
    assert [(f.name, f.type, f.is_static) for f in vector.fields] == [
        ("x", "number", False),
        ("y", "number", False),
    ]

    length = get_function(vector, "length")
    assert length.is_static is False
    assert [(p.name, p.type) for p in length.parameters] == [("dx", "number")]
    assert [r.type for r in length.returns] == ["number"]
    assert ns.functions == ()


def test_parameters_follow_declaration_order_not_doc_order():
    ns = parse("""
---@param b string Second
---@param ghost table Not a parameter
---@param a number First
function M.pair(a, b, c)
end
""")
    fn = get_function(get_class(ns, "M"), "pair")
    assert [(p.name, p.type) for p in fn.parameters] == [
        ("a", "number"),
        ("b", "string"),
        ("c", "any"),
    ]
    assert fn.parameters[2].description is None
    assert "ghost" not in [p.name for p in fn.parameters]


def test_optional_param_type_is_stripped():
    ns = parse("""
---@param opts table? Options
function configure(opts)
end
""")
    param = ns.functions[0].parameters[0]
    assert param.optional is True
    assert param.type == "table"
    assert param.description == "Options"


def test_explicit_returns_win_over_body():
    ns = parse("""
---@return boolean ok
---@return string err
function check()
  print("no return here")
end
""")
    fn = ns.functions[0]
    assert [(r.type, r.name) for r in fn.returns] == [("boolean", "ok"), ("string", "err")]


def test_inferred_return_from_body():
    ns = parse("""
--- Adds one
function inc(n)
  return n + 1
end

--- Prints
function show(n)
  print(n)
end
""")
    inc, show = ns.functions
    assert [(r.type, r.name, r.description) for r in inc.returns] == [("any", "", None)]
    assert show.returns == ()
    assert inc.description == "Adds one"


def test_separator_decides_static_and_non_static_annotation_overrides():
    ns = parse("""
---@class Shape
Shape = {}

--- Factory
function Shape.new()
end

--- Method
function Shape:area()
end

---@non-static
function Shape.perimeter(self)
end
""")
    shape = get_class(ns, "Shape")
    assert get_function(shape, "new").is_static is True
    assert get_function(shape, "area").is_static is False
    assert get_function(shape, "perimeter").is_static is False


def test_undocumented_functions_get_any_types():
    ns = parse("""
function Util.clamp(v, lo, hi)
  if v < lo then return lo end
  return v
end
""")
    clamp = get_function(get_class(ns, "Util"), "clamp")
    assert clamp.description is None
    assert clamp.is_static is True
    assert [(p.name, p.type, p.optional) for p in clamp.parameters] == [
        ("v", "any", False),
        ("lo", "any", False),
        ("hi", "any", False),
    ]
    assert len(clamp.returns) == 1


def test_local_functions_and_members_of_locals_are_skipped():
    ns = parse("""
local helpers = {}

function helpers.trim(s)
  return s
end

--- Documented local function
local function secret()
end

---@type number
helpers.count = 0

function public()
end
""")
    assert [f.name for f in ns.functions] == ["public"]
    assert ns.classes == ()


def test_static_field_from_type_annotation():
    ns = parse("""
---@class Game
Game = {}

---@type integer Max players per match
Game.MAX_PLAYERS = 16

---@type string
local name = "x"
""")
    game = get_class(ns, "Game")
    assert [(f.name, f.type, f.is_static, f.description) for f in game.fields] == [
        ("MAX_PLAYERS", "integer", True, "Max players per match"),
    ]


def test_type_annotation_on_global_becomes_namespace_field():
    ns = parse("""
---@type boolean Debug switch
DEBUG = false
""")
    assert [(f.name, f.type, f.is_static) for f in ns.fields] == [("DEBUG", "boolean", True)]


def test_class_created_lazily_by_method():
    ns = parse("""
function Inventory:add(item)
end

---@class Inventory Holds items
---@field size integer
Inventory.size = 0
""")
    assert [c.name for c in ns.classes] == ["Inventory"]
    inv = get_class(ns, "Inventory")
    assert inv.description == "Holds items"
    assert [f.name for f in inv.functions] == ["add"]
    assert [f.name for f in inv.fields] == ["size"]


def test_class_block_closed_by_blank_line():
    ns = parse("""
---@class Settings Global settings
---@field volume number

---@enum Mode

function run()
end
""")
    assert [c.name for c in ns.classes] == ["Settings", "Mode"]
    settings = get_class(ns, "Settings")
    assert settings.description == "Global settings"
    assert [f.name for f in settings.fields] == ["volume"]
    assert get_class(ns, "Mode").fields == ()


def test_blank_line_drops_function_docs():
    ns = parse("""
--- Lost description
---@param x number

function f(x)
end
""")
    fn = ns.functions[0]
    assert fn.description is None
    assert fn.parameters[0].type == "any"


def test_meta_line_is_ignored():
    ns = parse("""
---@meta
---@class Api
Api = {}
""")
    assert [c.name for c in ns.classes] == ["Api"]


def test_later_class_block_without_text_keeps_description():
    ns = parse("""
---@class Foo The foo
Foo = {}

---@class Foo
---@field extra string
Foo.extra = ""
""")
    foo = get_class(ns, "Foo")
    assert foo.description == "The foo"
    assert [f.name for f in foo.fields] == ["extra"]


def test_lines_inside_function_body_are_still_scanned():
    ns = parse("""
function outer()
  ---@class Inner
  local Inner = {}
  function Inner.make()
  end
end
""")
    assert [f.name for f in ns.functions] == ["outer"]
    assert [f.name for f in get_class(ns, "Inner").functions] == ["make"]


def test_parse_parameter_names():
    assert parse_parameter_names(" a, b ,, ... ") == ["a", "b", "..."]
    assert parse_parameter_names("") == []
    assert parse_parameter_names(None) == []


def test_varargs_param_documentation():
    ns = parse("""
---@param ... any Values to log
function log(...)
end
""")
    param = ns.functions[0].parameters[0]
    assert (param.name, param.type, param.description) == ("...", "any", "Values to log")


def test_field_without_type_is_fatal():
    with pytest.raises(DocModelError):
        FieldBuilder(name="x").build()
