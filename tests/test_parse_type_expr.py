"""Tests for parsing textual type annotations."""

import pytest

from cmdbind.parse_type_expr import parse_type_expr
from cmdbind.type_expr import (
    CustomRef,
    Fallible,
    GenericParam,
    ListOf,
    MapOf,
    OptionalOf,
    Primitive,
    TupleOf,
    Unit,
    Unrecognized,
    iter_custom_refs,
)


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("String", Primitive("String")),
        ("&str", Primitive("String")),
        ("&'a mut str", Primitive("String")),
        ("i64", Primitive("i64")),
        ("bool", Primitive("bool")),
        ("chrono::DateTime<Utc>", Primitive("DateTime")),
        ("uuid::Uuid", Primitive("Uuid")),
        ("()", Unit()),
    ],
)
def test_scalars(text: str, expected: object) -> None:
    """Verify that scalar and well-known types become primitives."""
    assert parse_type_expr(text) == expected


def test_nested_containers() -> None:
    """Verify that containers nest and keep the full custom path."""
    assert parse_type_expr("Result<Vec<crate::models::User>, String>") == Fallible(
        ListOf(CustomRef("crate::models::User"))
    )
    assert parse_type_expr("Option<Box<Item>>") == OptionalOf(CustomRef("Item"))
    assert parse_type_expr("HashMap<String, Arc<Item>>") == MapOf(
        Primitive("String"), CustomRef("Item")
    )


def test_tuples_slices_and_arrays() -> None:
    """Verify tuple, slice and fixed array syntax."""
    assert parse_type_expr("(i32, String)") == TupleOf(
        (Primitive("i32"), Primitive("String"))
    )
    assert parse_type_expr("&[Item]") == ListOf(CustomRef("Item"))
    assert parse_type_expr("[u8; 32]") == ListOf(Primitive("u8"))


def test_generic_custom_types_keep_arguments() -> None:
    """Verify that a generic custom type records its arguments."""
    assert parse_type_expr("Page<User>") == CustomRef("Page", (CustomRef("User"),))


def test_generic_params() -> None:
    """Verify that declared generic parameters are recognized."""
    assert parse_type_expr("Vec<T>", ["T"]) == ListOf(GenericParam("T"))
    assert parse_type_expr("T") == CustomRef("T")


def test_lifetimes_in_generic_arguments_are_skipped() -> None:
    """Verify that lifetime arguments carry no type."""
    assert parse_type_expr("State<'_, AppState>") == CustomRef(
        "State", (CustomRef("AppState"),)
    )


@pytest.mark.parametrize("text", ["Vec<", "dyn Fn()", "impl Serialize", "Vec<>", "%"])
def test_unparsable_types_are_unrecognized(text: str) -> None:
    """Verify that bad input never raises."""
    assert isinstance(parse_type_expr(text), Unrecognized)


def test_iter_custom_refs_walks_containers_once() -> None:
    """Verify that references are found through containers without duplicates."""
    expr = parse_type_expr("Result<(Vec<User>, Option<Team>, HashMap<Id, User>), E>")
    assert list(iter_custom_refs(expr)) == ["User", "Team", "Id"]


def test_iter_custom_refs_includes_generic_arguments() -> None:
    """Verify that arguments of generic custom types are walked."""
    assert list(iter_custom_refs(parse_type_expr("Page<Vec<User>>"))) == [
        "Page",
        "User",
    ]
