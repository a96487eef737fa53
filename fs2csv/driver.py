import logging
from pathlib import Path
from typing import List, Optional

from .exporter import ProgressCallback, SinkFactory, export_collection
from .models import ExportOptions, ExportSummary
from .sink import create_csv_sink

LOGGER = logging.getLogger(__name__)


class NoCollectionsFoundError(Exception):
    pass


def parse_collection_list(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [name.strip() for name in text.split(",")]


def prepare_output_dir(path) -> Path:
    output_dir = Path(path)
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def resolve_collections(store, text: Optional[str]) -> List[str]:
    """Use the explicit list when given, otherwise every top-level collection."""
    names = parse_collection_list(text)
    if names:
        return names
    names = list(store.list_collection_names())
    if not names:
        raise NoCollectionsFoundError("no collections found in database")
    return names


def run_export(
    store,
    names: List[str],
    options: ExportOptions,
    sink_factory: SinkFactory = create_csv_sink,
    progress: Optional[ProgressCallback] = None
) -> ExportSummary:
    """Export the given collections one after another.

    The output directory must already exist (see ``prepare_output_dir``).
    """
    LOGGER.info("Exporting %d collection(s): %s", len(names), ", ".join(names))
    outcomes = []
    for name in names:
        outcomes.append(export_collection(
            name,
            store.stream_documents(name, options.limit),
            Path(options.output_dir),
            limit=options.limit,
            sink_factory=sink_factory,
            progress=progress
        ))
    summary = ExportSummary(outcomes)
    for line in summary.lines():
        LOGGER.info(line)
    return summary
