from typing import List, Set

from .models import DOCUMENT_ID_COLUMN, Document


class SchemaAccumulator:
    """Collects the field names of one collection while its documents stream in.

    The column list is only known once every document has been seen, so it is
    produced by ``finalize()`` after the stream is exhausted.
    """

    def __init__(self):
        self._fields: Set[str] = set()
        self._finalized = False

    def add(self, document: Document) -> None:
        if self._finalized:
            raise RuntimeError("Schema already finalized")
        self._fields.update(document.fields.keys())

    @property
    def field_count(self) -> int:
        return len(self._fields)

    def finalize(self) -> List[str]:
        self._finalized = True
        # Code point order matches UTF-8 byte order
        return [DOCUMENT_ID_COLUMN] + sorted(self._fields)
