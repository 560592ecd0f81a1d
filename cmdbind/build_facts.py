"""Logic for loading every discovered fact document."""

import logging
from pathlib import Path

from cmdbind.errors import FactFormatError
from cmdbind.facts import FileFacts
from cmdbind.load_fact_file import load_fact_file

logger = logging.getLogger(__name__)


def build_facts(
    fact_files: list[Path], source_root: Path | None = None
) -> tuple[list[FileFacts], list[FileFacts]]:
    """Load fact files and split them into source and synthetic facts.

    Malformed documents are logged and skipped.
    """
    source: list[FileFacts] = []
    synthetic: list[FileFacts] = []
    for f in fact_files:
        try:
            facts = load_fact_file(f, source_root)
        except FactFormatError as e:
            logger.warning(f"Skipping fact file {e}")
            continue
        except OSError as e:
            logger.warning(f"Skipping unreadable fact file {f}: {e}")
            continue
        if facts.is_synthetic:
            synthetic.append(facts)
        else:
            source.append(facts)

    logger.info(
        f"Loaded {len(source)} source and {len(synthetic)} synthetic fact files"
    )
    return source, synthetic
