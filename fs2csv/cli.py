"""Export Firestore collections into one CSV file per collection.

Example usage: `fs2csv --project my-project --collections users,orders --output export`
"""
import logging
from pathlib import Path
from typing import Optional

import typer

from .db import DEFAULT_DATABASE, FirestoreStore, create_client
from .driver import prepare_output_dir, resolve_collections, run_export
from .models import ExportOptions

LOGGER = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)


@app.command()
def export(
    project: str = typer.Option(
        ..., envvar="GOOGLE_CLOUD_PROJECT", help="GCP project ID."),
    database: str = typer.Option(
        DEFAULT_DATABASE, envvar="FIRESTORE_DATABASE", help="Firestore database name."),
    collections: str = typer.Option(
        "", help="Comma-separated collection names (default: all top-level)."),
    limit: int = typer.Option(
        0, min=0, help="Max documents per collection (0 = all)."),
    output: Path = typer.Option(
        Path("."), help="Output directory for CSV files."),
    keyfile: Optional[str] = typer.Option(
        None, envvar="GOOGLE_APPLICATION_CREDENTIALS",
        help="Service account key file."),
    debug: bool = typer.Option(False, help="Enable debug logging."),
):
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=logging.DEBUG if debug else logging.INFO)
    try:
        client = create_client(project, database, keyfile)
    except Exception as e:
        LOGGER.error("Failed to create Firestore client: %s", e)
        raise typer.Exit(code=1)
    try:
        output_dir = prepare_output_dir(output)
    except OSError as e:
        LOGGER.error("Failed to create output directory %r: %s", str(output), e)
        client.close()
        raise typer.Exit(code=1)
    store = FirestoreStore(client)
    try:
        names = resolve_collections(store, collections)
    except Exception as e:
        LOGGER.error("Failed to resolve collections: %s", e)
        client.close()
        raise typer.Exit(code=1)
    try:
        summary = run_export(
            store, names, ExportOptions(limit=limit, output_dir=output_dir))
    finally:
        client.close()
    if not summary.ok:
        LOGGER.error(
            "Export completed with errors in: %s", ", ".join(summary.failed))
        raise typer.Exit(code=1)
    LOGGER.info("Export completed successfully.")


def main():
    app()


if __name__ == "__main__":
    main()
