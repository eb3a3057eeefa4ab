from luadoc.adapters.lua_adapter import LuaAdapter
from luadoc.doc.model import Field, Function, LuaClass, LuaDoc, Namespace
from luadoc.merge import merge_class, merge_classes, merge_docs


def num(name, description=None):
    return Field(name=name, type="number", description=description)


def test_merge_class_unions_fields_first_wins():
    first = LuaClass(name="Foo", fields=(num("a", "from first"), num("b")))
    second = LuaClass(name="Foo", fields=(num("a", "from second"), num("c")))

    merged = merge_class(first, second)

    assert [f.name for f in merged.fields] == ["a", "b", "c"]
    assert merged.fields[0].description == "from first"


def test_merge_class_unions_functions_by_name():
    first = LuaClass(name="Foo", functions=(Function(name="run", description="first"),))
    second = LuaClass(
        name="Foo",
        functions=(Function(name="run", description="second"), Function(name="stop")),
    )
    merged = merge_class(first, second)
    assert [(f.name, f.description) for f in merged.functions] == [
        ("run", "first"),
        ("stop", None),
    ]


def test_merge_class_description_first_non_empty():
    assert merge_class(LuaClass("Foo", "one"), LuaClass("Foo", "two")).description == "one"
    assert merge_class(LuaClass("Foo"), LuaClass("Foo", "two")).description == "two"


def test_merge_class_leaves_inputs_untouched():
    first = LuaClass(name="Foo", fields=(num("a"),))
    second = LuaClass(name="Foo", fields=(num("b"),))
    merge_class(first, second)
    assert first.fields == (num("a"),)
    assert second.fields == (num("b"),)


def test_merge_classes_appends_unseen_in_order():
    merged = merge_classes(
        (LuaClass("A"), LuaClass("B")),
        (LuaClass("C"), LuaClass("A", "late")),
    )
    assert [(c.name, c.description) for c in merged] == [("A", "late"), ("B", None), ("C", None)]


def test_merge_two_files_declaring_same_class():
    adapter = LuaAdapter()
    first = adapter.parse("""
---@class Foo The foo
---@field a number
---@field shared string first definition
Foo = {}
""", "game")
    second = adapter.parse("""
---@class Foo Other text
---@field shared boolean
---@field b number
Foo = {}

function helper()
end
""", "game")

    ns = merge_docs("game", [first, second])

    assert ns.name == "game"
    assert [c.name for c in ns.classes] == ["Foo"]
    foo = ns.classes[0]
    assert foo.description == "The foo"
    assert [(f.name, f.type) for f in foo.fields] == [
        ("a", "number"),
        ("shared", "string"),
        ("b", "number"),
    ]
    assert [f.name for f in ns.functions] == ["helper"]


def test_global_functions_and_fields_are_concatenated():
    one = LuaDoc((Namespace("x", functions=(Function("f"),), fields=(num("N"),)),))
    two = LuaDoc((Namespace("x", functions=(Function("f"),), fields=(num("N"),)),))
    ns = merge_docs("x", [one, two])
    assert [f.name for f in ns.functions] == ["f", "f"]
    assert [f.name for f in ns.fields] == ["N", "N"]
