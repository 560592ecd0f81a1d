"""Tests for rendering the generated TypeScript files."""

from pathlib import Path

from cmdbind.facts import (
    ALIAS,
    ENUM,
    STRUCT,
    CommandArg,
    CommandSignature,
    DeclarationFact,
    FieldFact,
    VariantFact,
)
from cmdbind.filter_declarations import filter_declarations
from cmdbind.parse_type_expr import parse_type_expr
from cmdbind.render_commands_file import render_commands_file, types_import_path
from cmdbind.render_types_file import GENERATED_HEADER, render_types_file
from cmdbind.type_expr import CustomRef, Primitive
from cmdbind.type_mapper import TypeMapper

MODELS = Path("models.rs")


def test_render_struct_with_generics_and_optional_field() -> None:
    """Verify interface output."""
    decl = DeclarationFact(
        name="Page",
        kind=STRUCT,
        file=MODELS,
        generics=["T"],
        fields=[
            FieldFact("items", parse_type_expr("Vec<T>", ["T"])),
            FieldFact("next", parse_type_expr("Option<String>"), optional=True),
            FieldFact("total", Primitive("u32")),
        ],
    )
    text = render_types_file([decl], TypeMapper(["Page"]))
    assert text.startswith(GENERATED_HEADER)
    assert (
        "export interface Page<T> {\n"
        "  items: T[];\n"
        "  next?: string | null;\n"
        "  total: number;\n"
        "}\n"
    ) in text


def test_render_unit_enum_as_string_union() -> None:
    """Verify that unit-only enums become string literal unions."""
    decl = DeclarationFact(
        name="Role",
        kind=ENUM,
        file=MODELS,
        variants=[VariantFact("Admin"), VariantFact("Member")],
    )
    text = render_types_file([decl], TypeMapper(["Role"]))
    assert 'export type Role = "Admin" | "Member";' in text


def test_render_quotes_non_identifier_field_names() -> None:
    """Verify that serialized names which are not identifiers are quoted."""
    decl = DeclarationFact(
        name="Session",
        kind=STRUCT,
        file=MODELS,
        fields=[
            FieldFact("user-id", Primitive("u64")),
            FieldFact("$ref", Primitive("String")),
            FieldFact("2fa", Primitive("bool"), optional=True),
        ],
    )
    text = render_types_file([decl], TypeMapper(["Session"]))
    assert (
        "export interface Session {\n"
        '  "user-id": number;\n'
        "  $ref: string;\n"
        '  "2fa"?: boolean | null;\n'
        "}\n"
    ) in text


def test_render_quotes_non_identifier_variant_keys() -> None:
    """Verify that payload variant keys are quoted when needed."""
    decl = DeclarationFact(
        name="Event",
        kind=ENUM,
        file=MODELS,
        variants=[
            VariantFact("log-line", tuple=[Primitive("String")]),
            VariantFact("Closed"),
        ],
    )
    text = render_types_file([decl], TypeMapper(["Event"]))
    assert 'export type Event =\n  | { "log-line": string }\n  | "Closed";' in text


def test_render_payload_enum_as_tagged_union() -> None:
    """Verify the externally tagged shape of payload variants."""
    decl = DeclarationFact(
        name="Shape",
        kind=ENUM,
        file=MODELS,
        variants=[
            VariantFact("Empty"),
            VariantFact("Circle", tuple=[Primitive("f64")]),
            VariantFact("Rect", tuple=[Primitive("f64"), Primitive("f64")]),
            VariantFact("Point", fields=[FieldFact("x", Primitive("i32"))]),
        ],
    )
    text = render_types_file([decl], TypeMapper(["Shape"]))
    assert (
        "export type Shape =\n"
        '  | "Empty"\n'
        "  | { Circle: number }\n"
        "  | { Rect: [number, number] }\n"
        "  | { Point: { x: number } };"
    ) in text


def test_render_alias() -> None:
    """Verify that aliases become type declarations."""
    decl = DeclarationFact(
        name="Users",
        kind=ALIAS,
        file=MODELS,
        alias_type=parse_type_expr("Vec<User>"),
        base_name="Vec",
    )
    text = render_types_file([decl], TypeMapper(["Users", "User"]))
    assert "export type Users = User[];" in text


def test_render_commands_file() -> None:
    """Verify the invoke import, type import and wrapper functions."""
    signatures = [
        CommandSignature(
            name="get_user",
            args=[CommandArg("user_id", Primitive("i32"))],
            return_type=parse_type_expr("Result<User, String>"),
            source_file=Path("commands.rs"),
        ),
        CommandSignature(
            name="save_team",
            args=[
                CommandArg("team_data", CustomRef("Team")),
                CommandArg("force", Primitive("bool")),
            ],
            return_type=None,
            source_file=Path("commands.rs"),
            rename_all="snake_case",
        ),
        CommandSignature(
            name="ping", args=[], return_type=None, source_file=Path("commands.rs")
        ),
    ]
    text = render_commands_file(
        signatures,
        TypeMapper(["User", "Team"]),
        invoke_import="@tauri-apps/api/core",
        types_import="./types",
    )

    assert 'import { invoke } from "@tauri-apps/api/core";' in text
    assert 'import type { Team, User } from "./types";' in text
    assert (
        "export async function getUser(userId: number): Promise<User> {\n"
        '  return invoke<User>("get_user", { userId });\n'
        "}"
    ) in text
    assert (
        "export async function saveTeam(teamData: Team, force: boolean): "
        "Promise<void> {\n"
        '  return invoke<void>("save_team", { "team_data": teamData, force });\n'
        "}"
    ) in text
    assert 'return invoke<void>("ping");' in text


def test_render_commands_function_affixes_and_no_types() -> None:
    """Verify function affixes and that no type import is emitted when unused."""
    sig = CommandSignature(
        name="ping", args=[], return_type=None, source_file=Path("commands.rs")
    )
    text = render_commands_file(
        [sig],
        TypeMapper(),
        invoke_import="@tauri-apps/api/core",
        types_import="./types",
        function_prefix="cmd",
        function_suffix="Async",
    )
    assert "import type" not in text
    assert "export async function cmdpingAsync(): Promise<void>" in text


def test_types_import_path() -> None:
    """Verify relative, extensionless specifiers."""
    assert types_import_path(Path("src/gen/commands.ts"), Path("src/gen/types.ts")) == (
        "./types"
    )
    assert types_import_path(Path("src/api/commands.ts"), Path("src/types.ts")) == (
        "../types"
    )


def test_filter_declarations_keeps_resolved_pairs() -> None:
    """Verify that only the resolved definition of each name survives."""
    a = DeclarationFact(name="User", kind=STRUCT, file=Path("a.rs"))
    b = DeclarationFact(name="User", kind=STRUCT, file=Path("b.rs"))
    team = DeclarationFact(name="Team", kind=STRUCT, file=Path("a.rs"))
    unused = DeclarationFact(name="Unused", kind=STRUCT, file=Path("a.rs"))

    kept = filter_declarations(
        [a, b, team, unused], {"User": Path("b.rs"), "Team": Path("a.rs")}
    )
    assert kept == [b, team]
