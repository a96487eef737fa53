import logging
from pathlib import Path
from itertools import islice
from typing import Callable, Iterable, List, Optional

from .models import CollectionExportOutcome, Document
from .normalize import format_value
from .schema import SchemaAccumulator
from .sink import CsvSink, create_csv_sink

LOGGER = logging.getLogger(__name__)

PROGRESS_EVERY = 500

SinkFactory = Callable[[Path, str], CsvSink]
ProgressCallback = Callable[[str, int], None]


def _read_documents(name, documents, schema, limit, progress):
    if limit > 0:
        documents = islice(documents, limit)
    buffer: List[Document] = []
    for document in documents:
        schema.add(document)
        buffer.append(document)
        if len(buffer) % PROGRESS_EVERY == 0:
            LOGGER.info("  ...read %d documents from %r", len(buffer), name)
            if progress is not None:
                progress(name, len(buffer))
    return buffer


def render_row(document: Document, fields: List[str]) -> List[str]:
    return [document.id] + [format_value(document.fields.get(x)) for x in fields]


def export_collection(
    name: str,
    documents: Iterable[Document],
    output_dir: Path,
    limit: int = 0,
    sink_factory: SinkFactory = create_csv_sink,
    progress: Optional[ProgressCallback] = None
) -> CollectionExportOutcome:
    """Export one collection into a CSV file.

    The whole collection is read into memory first, since the header depends
    on every document. Failures are reported in the returned outcome instead of
    being raised.
    """
    LOGGER.info("Exporting collection %r...", name)
    schema = SchemaAccumulator()
    # Counts stay at zero when reading fails, the buffer is dropped
    count = fields = 0
    try:
        buffer = _read_documents(name, documents, schema, limit, progress)
        count, fields = len(buffer), schema.field_count
        if not buffer:
            LOGGER.info("  Collection %r is empty, skipping.", name)
            return CollectionExportOutcome(name)
        LOGGER.info(
            "  Read %d documents from %r with %d unique fields.",
            count, name, fields)
        columns = schema.finalize()
        with sink_factory(output_dir, name) as sink:
            sink.write_row(columns)
            for document in buffer:
                sink.write_row(render_row(document, columns[1:]))
        LOGGER.info("  Wrote %s (%d rows)", sink.path, count)
        return CollectionExportOutcome(
            name, count, fields, sink.path)
    except Exception as e:
        LOGGER.error("ERROR exporting %r: %s", name, e)
        return CollectionExportOutcome(
            name, count, fields, error=str(e) or type(e).__name__)
