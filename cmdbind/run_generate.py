"""Orchestration logic for generating TypeScript bindings from fact files."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cmdbind.build_facts import build_facts
from cmdbind.build_field_facts import build_field_facts
from cmdbind.errors import ConfigError, TypeConflictError
from cmdbind.facts import FileFacts
from cmdbind.filter_declarations import filter_declarations
from cmdbind.module_path_for_file import DEFAULT_INDEX_FILE_STEMS
from cmdbind.path_resolver import PathResolver
from cmdbind.render_commands_file import render_commands_file, types_import_path
from cmdbind.render_types_file import render_types_file
from cmdbind.resolution_report import ResolutionReport
from cmdbind.scan_fact_files import scan_fact_files
from cmdbind.scope_builder import ScopeBuilder
from cmdbind.type_mapper import TypeMapper
from cmdbind.usage_collector import UsageCollector
from cmdbind.validate_config import validate_config

logger = logging.getLogger(__name__)


@dataclass
class GenerationSummary:
    """Counts for a finished generation run."""

    commands: int
    types: int
    files_written: list[Path] = field(default_factory=list)


def run_generate(
    config: dict[str, Any],
    dry_run: bool = False,
    report_path: str | Path | None = None,
) -> GenerationSummary:
    """Execute the full generation pipeline.

    Raises TypeConflictError, before anything is written, when a type name
    resolves to more than one file.
    """
    validate_config(config)
    inputs = config["input"]
    outputs = config["output"]
    naming = config.get("naming") or {}

    source, synthetic = _load_facts(inputs)
    source_root = Path(inputs["source_root"]) if inputs.get("source_root") else None
    builder = ScopeBuilder(
        source_root, inputs.get("index_file_stems") or DEFAULT_INDEX_FILE_STEMS
    )
    for facts in source:
        builder.add_file(facts)
    for facts in synthetic:
        builder.add_synthetic(facts)
    scopes, index = builder.build()
    resolver = PathResolver(scopes, index)

    declarations = [d for facts in source + synthetic for d in facts.declarations]
    signatures = [c for facts in source + synthetic for c in facts.commands]
    logger.info(
        f"Loaded {len(signatures)} commands and {len(declarations)} declarations"
    )

    result = UsageCollector(resolver).collect(
        signatures, build_field_facts(declarations)
    )

    if report_path:
        report = ResolutionReport(resolver)
        for sig in signatures:
            report.add_command(sig)
        report.generate_report(report_path, result)
        logger.info(f"Resolution report written to {report_path}")

    if result.has_conflicts:
        raise TypeConflictError(result.conflicts)

    kept = filter_declarations(declarations, result.resolved)
    mapper = TypeMapper(
        [d.name for d in kept],
        resolver,
        type_prefix=naming.get("type_prefix") or "",
        type_suffix=naming.get("type_suffix") or "",
    )

    types_file = Path(outputs["types_file"])
    commands_file = Path(outputs["commands_file"])
    rendered = {
        types_file: render_types_file(kept, mapper),
        commands_file: render_commands_file(
            signatures,
            mapper,
            invoke_import=outputs.get("invoke_import") or "@tauri-apps/api/core",
            types_import=types_import_path(commands_file, types_file),
            function_prefix=naming.get("function_prefix") or "",
            function_suffix=naming.get("function_suffix") or "",
        ),
    }

    summary = GenerationSummary(commands=len(signatures), types=len(kept))
    if dry_run:
        logger.info(
            f"Dry run: {summary.commands} commands and {summary.types} types "
            "would be generated"
        )
        return summary

    for path, text in rendered.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        summary.files_written.append(path)
        logger.info(f"Wrote {path}")
    return summary


def _load_facts(inputs: dict[str, Any]) -> tuple[list[FileFacts], list[FileFacts]]:
    """Discover and load facts; everything under the synthetic dir is synthetic."""
    facts_dir = Path(inputs["facts_dir"])
    exclude = inputs.get("exclude") or []
    source_root = Path(inputs["source_root"]) if inputs.get("source_root") else None

    fact_files = scan_fact_files(facts_dir, exclude)
    if not fact_files:
        raise ConfigError(f"No fact files found under: {facts_dir}")
    logger.info(f"Found {len(fact_files)} fact files under {facts_dir}")
    source, synthetic = build_facts(fact_files, source_root)

    synthetic_dir = inputs.get("synthetic_facts_dir")
    if synthetic_dir:
        extra_source, extra_synthetic = build_facts(
            scan_fact_files(Path(synthetic_dir), exclude), source_root
        )
        synthetic.extend(extra_source)
        synthetic.extend(extra_synthetic)
    return source, synthetic
