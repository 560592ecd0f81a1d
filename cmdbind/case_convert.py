"""Utilities for converting identifiers between naming conventions."""


def to_camel_case(s: str) -> str:
    """Convert snake_case to camelCase.

    Leading, doubled and trailing underscores are dropped; the first kept
    character is lowercased and everything else is left alone, so
    `HELLO` becomes `hELLO` and `getUser` is unchanged.
    """
    result = []
    capitalize_next = False
    seen_non_underscore = False
    for c in s:
        if c == "_":
            if seen_non_underscore:
                capitalize_next = True
        elif capitalize_next:
            result.append(c.upper())
            capitalize_next = False
        elif not seen_non_underscore:
            result.append(c.lower())
            seen_non_underscore = True
        else:
            result.append(c)
    return "".join(result)


def to_pascal_case(s: str) -> str:
    """Convert snake_case to PascalCase."""
    camel = to_camel_case(s)
    return camel[:1].upper() + camel[1:]


def to_snake_case(s: str) -> str:
    """Convert PascalCase or camelCase to snake_case."""
    result = []
    for i, c in enumerate(s):
        if c.isupper() and i > 0 and result[-1] != "_":
            result.append("_")
        result.append(c.lower())
    return "".join(result)


def to_screaming_snake_case(s: str) -> str:
    """Convert PascalCase to SCREAMING_SNAKE_CASE."""
    return to_snake_case(s).upper()


def to_kebab_case(s: str) -> str:
    """Convert PascalCase to kebab-case."""
    return to_snake_case(s).replace("_", "-")


def to_screaming_kebab_case(s: str) -> str:
    """Convert PascalCase to SCREAMING-KEBAB-CASE."""
    return to_kebab_case(s).upper()


RENAME_POLICIES = {
    "camelCase": to_camel_case,
    "snake_case": to_snake_case,
    "PascalCase": to_pascal_case,
    "SCREAMING_SNAKE_CASE": to_screaming_snake_case,
    "kebab-case": to_kebab_case,
    "SCREAMING-KEBAB-CASE": to_screaming_kebab_case,
    "lowercase": str.lower,
    "UPPERCASE": str.upper,
}


def apply_rename_policy(name: str, policy: str | None) -> str:
    """Rename a snake_case identifier; unknown or missing policies mean camelCase."""
    return RENAME_POLICIES.get(policy or "camelCase", to_camel_case)(name)
