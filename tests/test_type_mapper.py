"""Tests for mapping type expressions to TypeScript."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from cmdbind.parse_type_expr import parse_type_expr
from cmdbind.resolution_result import Ambiguous, FoundWithAlias, NotFound
from cmdbind.type_expr import CustomRef, GenericParam, TupleOf, Unit, Unrecognized
from cmdbind.type_mapper import TypeMapper


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("String", "string"),
        ("&str", "string"),
        ("u64", "number"),
        ("f32", "number"),
        ("bool", "boolean"),
        ("chrono::NaiveDate", "string"),
        ("Uuid", "string"),
        ("Duration", "number"),
        ("serde_json::Value", "unknown"),
        ("Bytes", "number[]"),
        ("Vec<String>", "string[]"),
        ("Option<i32>", "number | null"),
        ("Vec<Option<i32>>", "(number | null)[]"),
        ("Result<Vec<u8>, String>", "number[]"),
        ("HashMap<String, bool>", "Record<string, boolean>"),
        ("(i32, String)", "[number, string]"),
        ("()", "void"),
    ],
)
def test_builtin_mapping(text: str, expected: str) -> None:
    """Verify primitives and containers."""
    assert TypeMapper().map(parse_type_expr(text)) == expected


def test_special_expressions() -> None:
    """Verify units, generic parameters and unrecognized types."""
    mapper = TypeMapper()
    assert mapper.map(Unit()) == "void"
    assert mapper.map(TupleOf(())) == "void"
    assert mapper.map(GenericParam("T")) == "T"
    assert mapper.map(Unrecognized("dyn Fn()")) == "unknown"


def test_collected_custom_types_get_affixes() -> None:
    """Verify that collected types use the configured prefix and suffix."""
    mapper = TypeMapper(["User"], type_prefix="Api", type_suffix="Dto")
    assert mapper.map(parse_type_expr("Vec<crate::models::User>")) == "ApiUserDto[]"
    assert mapper.map(CustomRef("Unknown")) == "Unknown"


def test_generic_custom_type_arguments() -> None:
    """Verify that generic arguments are rendered after the name."""
    mapper = TypeMapper(["Page", "User"])
    assert mapper.map(parse_type_expr("Page<User>")) == "Page<User>"


def test_aliased_import_renders_declared_name() -> None:
    """Verify that a renamed import maps to the declaration's name."""
    resolver = MagicMock()
    resolver.resolve_type.return_value = FoundWithAlias(Path("models.rs"), "User")
    mapper = TypeMapper(["User"], resolver)
    context = Path("commands.rs")

    assert mapper.map(CustomRef("Member"), context) == "User"
    resolver.resolve_type.assert_called_with("Member", context)
    assert mapper.referenced_types(CustomRef("Member"), context) == ["User"]


def test_unresolved_custom_type_maps_to_unknown() -> None:
    """Verify that a reference the resolver cannot find renders as unknown."""
    resolver = MagicMock()
    resolver.resolve_type.return_value = NotFound()
    mapper = TypeMapper(["User"], resolver)
    context = Path("commands.rs")

    assert mapper.map(CustomRef("ext::Thing"), context) == "unknown"
    assert mapper.referenced_types(CustomRef("ext::Thing"), context) == []


def test_ambiguous_custom_type_does_not_borrow_collected_name() -> None:
    """Verify that an ambiguous reference is not rendered as a same-named type."""
    resolver = MagicMock()
    resolver.resolve_type.return_value = Ambiguous((Path("x.rs"), Path("y.rs")))
    mapper = TypeMapper(["User"], resolver)
    context = Path("z.rs")

    assert mapper.map(CustomRef("User"), context) == "unknown"
    assert mapper.map(parse_type_expr("Vec<User>"), context) == "unknown[]"
    assert mapper.referenced_types(parse_type_expr("Option<User>"), context) == []
