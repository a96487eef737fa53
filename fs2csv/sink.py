import logging
from pathlib import Path
from typing import List, Optional, Sequence

import polars as pl

LOGGER = logging.getLogger(__name__)

BATCH_SIZE = 1000


class CsvSink:
    """Row-oriented CSV writer backed by polars.

    Rows are buffered and written in batches with ``DataFrame.write_csv``, which
    quotes fields containing the delimiter, the quote character or line breaks.
    """

    def __init__(self, path: Path, batch_size: int = BATCH_SIZE):
        self.path = path
        self.batch_size = batch_size
        self._pending: List[List[Optional[str]]] = []
        self._width: Optional[int] = None
        self._handle = open(path, "wb")

    def write_row(self, cells: Sequence[str]) -> None:
        if self._width is None:
            self._width = len(cells)
        elif len(cells) != self._width:
            raise ValueError(
                f"Expected {self._width} cells, got {len(cells)}")
        # Empty cells go out as nulls, which polars writes as empty fields
        self._pending.append([cell if cell != "" else None for cell in cells])
        if len(self._pending) >= self.batch_size:
            self.flush()

    def flush(self) -> None:
        if not self._pending:
            return
        # Positional column names: the header is written as a regular row
        frame = pl.DataFrame(
            self._pending,
            schema=[(f"column_{i}", pl.Utf8) for i in range(self._width)],
            orient="row"
        )
        frame.write_csv(self._handle, include_header=False)
        self._pending = []
        self._handle.flush()

    def close(self) -> None:
        if self._handle.closed:
            return
        try:
            self.flush()
        finally:
            self._handle.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.close()
        else:
            # Leave whatever was already written, drop the rest
            LOGGER.debug("Closing %s after an error", self.path)
            self._pending = []
            self._handle.close()
        return False


def create_csv_sink(directory: Path, collection: str) -> CsvSink:
    path = Path(directory) / f"{collection}.csv"
    return CsvSink(path)
