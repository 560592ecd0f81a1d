"""Logic for rendering the generated TypeScript command bindings."""

import os
from pathlib import Path

from cmdbind.case_convert import apply_rename_policy, to_camel_case
from cmdbind.facts import CommandSignature
from cmdbind.render_types_file import GENERATED_HEADER
from cmdbind.type_mapper import TypeMapper


def render_commands_file(
    signatures: list[CommandSignature],
    mapper: TypeMapper,
    *,
    invoke_import: str,
    types_import: str,
    function_prefix: str = "",
    function_suffix: str = "",
) -> str:
    """Render one async wrapper around `invoke` per command.

    `types_import` is the module specifier of the generated types file, as
    returned by `types_import_path`.
    """
    parts = [GENERATED_HEADER, "", f'import {{ invoke }} from "{invoke_import}";']

    used: list[str] = []
    for sig in signatures:
        for expr in sig.type_exprs():
            for name in mapper.referenced_types(expr, sig.source_file):
                if name not in used:
                    used.append(name)
    if used:
        names = ", ".join(mapper.type_name(n) for n in sorted(used))
        parts.append(f'import type {{ {names} }} from "{types_import}";')
    parts.append("")

    for sig in signatures:
        fn_name = f"{function_prefix}{to_camel_case(sig.name)}{function_suffix}"
        parts.append(_render_command(sig, fn_name, mapper))
        parts.append("")
    return "\n".join(parts).rstrip() + "\n"


def types_import_path(commands_file: Path, types_file: Path) -> str:
    """Return the relative, extensionless specifier of `types_file`."""
    target = types_file.with_suffix("")
    rel = Path(os.path.relpath(target, commands_file.parent)).as_posix()
    return rel if rel.startswith(".") else f"./{rel}"


def _render_command(sig: CommandSignature, fn_name: str, mapper: TypeMapper) -> str:
    params = []
    entries = []
    for arg in sig.args:
        param = to_camel_case(arg.name)
        key = apply_rename_policy(arg.name, sig.rename_all)
        params.append(f"{param}: {mapper.map(arg.type, sig.source_file)}")
        entries.append(param if key == param else f'"{key}": {param}')

    if sig.return_type is None:
        ret = "void"
    else:
        ret = mapper.map(sig.return_type, sig.source_file)

    call = f'invoke<{ret}>("{sig.name}"'
    if entries:
        call += ", { " + ", ".join(entries) + " }"
    call += ")"
    return "\n".join(
        [
            f"export async function {fn_name}({', '.join(params)}): Promise<{ret}> {{",
            f"  return {call};",
            "}",
        ]
    )
