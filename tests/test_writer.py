import json
from pathlib import Path

from externgen import generate_externs
from externgen.ingest import parse_node
from externgen.settings import ExternsSettings
from externgen.writer import FILE_BANNER, STRICT_DIRECTIVE, ExternsWriter

SAMPLES_DIR = Path(__file__).parent / "samples"

RAW = ExternsSettings(beautify=False)


def _load_sample(name: str) -> dict:
    return json.loads((SAMPLES_DIR / name).read_text(encoding="utf-8"))


def test_module_with_property():
    ast = {
        "ns": {
            "kind": "Module",
            "qualifiedName": "ns",
            "x": {"kind": "Property", "qualifiedName": "ns.x", "type": "number"},
        }
    }

    writer = ExternsWriter(ast, settings=RAW)

    assert writer.blocks == (
        "var ns = {};",
        "/**\n * @type {number}\n*/\nns.x;",
    )
    assert writer.render() == (
        f"{FILE_BANNER}\n{STRICT_DIRECTIVE}\n\n"
        "var ns = {};\n\n"
        "/**\n * @type {number}\n*/\nns.x;\n"
    )


def test_non_strict_has_no_directive():
    writer = ExternsWriter({}, settings=ExternsSettings(strict=False, beautify=False))

    assert writer.render() == f"{FILE_BANNER}\n"


def test_root_is_never_emitted():
    writer = ExternsWriter(
        {"kind": "Module", "qualifiedName": "root"}, settings=RAW
    )

    assert writer.blocks == ()


def test_empty_field_name_is_not_emitted():
    writer = ExternsWriter(
        {"": {"kind": "Module", "qualifiedName": "hidden"}}, settings=RAW
    )

    assert writer.blocks == ()


def test_unknown_kind_children_are_still_emitted():
    ast = {
        "alias": {
            "kind": "Unknown",
            "qualifiedName": "ns.alias",
            "inner": {"kind": "Variable", "qualifiedName": "ns.alias.inner"},
        }
    }

    writer = ExternsWriter(ast, settings=RAW)

    assert writer.blocks == ("/**\n*/\nns.alias.inner;",)


def test_leaf_kinds_do_not_traverse_children():
    ast = {
        "f": {
            "kind": "Function",
            "qualifiedName": "f",
            "nested": {"kind": "Variable", "qualifiedName": "f.nested"},
        }
    }

    writer = ExternsWriter(ast, settings=RAW)

    assert writer.blocks == ("/**\n*/\nf = function() {};",)


def test_class_children_before_members():
    ast = {
        "C": {
            "kind": "Class",
            "qualifiedName": "C",
            "#": {"m": {"kind": "Method", "qualifiedName": "C.prototype.m"}},
            "s": {"kind": "Function", "qualifiedName": "C.s", "isStatic": True},
        }
    }

    writer = ExternsWriter(ast, settings=RAW)

    names = [block.splitlines()[-1] for block in writer.blocks]
    assert names == [
        "C = function() {};",
        "C.s = function() {};",
        "C.prototype.m = function() {};",
    ]


def test_each_member_is_emitted_once():
    ast = {
        "I": {
            "kind": "Interface",
            "qualifiedName": "I",
            "members": {"p": {"kind": "Property", "qualifiedName": "I.p"}},
        }
    }

    writer = ExternsWriter(ast, settings=RAW)

    assert len(writer.blocks) == 2
    assert writer.blocks[1] == "/**\n*/\nI.p;"


def test_strict_null_checks():
    ast = {"p": {"kind": "Property", "qualifiedName": "p", "type": "Foo"}}

    writer = ExternsWriter(ast, settings=RAW, strict_null_checks=True)

    assert writer.blocks == ("/**\n * @type {!Foo}\n*/\np;",)


def test_accepts_parsed_tree():
    tree = parse_node({"ns": {"kind": "Module", "qualifiedName": "ns"}})

    assert ExternsWriter(tree, settings=RAW).blocks == ("var ns = {};",)


def test_sample_document():
    writer = ExternsWriter(_load_sample("simple.json"), settings=RAW)

    expected = (SAMPLES_DIR / "simple.externs.js").read_text(encoding="utf-8")
    assert writer.render().strip() == expected.strip()


def test_rendering_is_deterministic():
    ast = _load_sample("simple.json")

    first = generate_externs(ast)
    second = generate_externs(ast)

    assert first == second


def test_to_code_is_cached():
    writer = ExternsWriter(_load_sample("simple.json"))

    assert writer.to_code() is writer.to_code()


def test_formatted_output():
    code = generate_externs(
        {
            "ns": {
                "kind": "Module",
                "qualifiedName": "ns",
                "E": {
                    "kind": "Enum",
                    "qualifiedName": "ns.E",
                    "members": [{"name": "A", "value": 0}, {"name": "B", "value": 1}],
                },
            }
        }
    )

    assert code.startswith("/**")
    assert "@externs" in code
    assert STRICT_DIRECTIVE in code
    assert "var ns = {};" in code
    assert "A: 0," in code
    assert "@enum {number}" in code


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("EXTERNGEN_STRICT", "false")
    monkeypatch.setenv("EXTERNGEN_BEAUTIFY", "false")

    writer = ExternsWriter({})

    assert writer.render() == f"{FILE_BANNER}\n"


def test_untyped_node_members_bucket_is_not_walked():
    ast = {"ns": {"#": {"x": {"kind": "Property", "qualifiedName": "ns.x"}}}}

    writer = ExternsWriter(ast, settings=RAW)

    assert writer.blocks == ()


def test_unknown_kind_members_bucket_is_not_walked():
    ast = {
        "a": {
            "kind": "Alias",
            "qualifiedName": "a",
            "#": {"x": {"kind": "Property", "qualifiedName": "a.x"}},
        }
    }

    writer = ExternsWriter(ast, settings=RAW)

    assert writer.blocks == ()


def test_class_declaration_named_members():
    ast = {
        "C": {
            "kind": "Class",
            "qualifiedName": "C",
            "members": {
                "kind": "Property",
                "qualifiedName": "C.members",
                "type": "number",
            },
        }
    }

    writer = ExternsWriter(ast, settings=RAW)

    assert writer.blocks == (
        "/**\n * @constructor\n*/\nC = function() {};",
        "/**\n * @type {number}\n*/\nC.members;",
    )


def test_buffer_is_frozen_after_serialization():
    writer = ExternsWriter(_load_sample("simple.json"), settings=RAW)
    code = writer.to_code()

    assert not hasattr(writer, "traverse")
    assert writer.to_code() == code
    assert writer.render() == code
