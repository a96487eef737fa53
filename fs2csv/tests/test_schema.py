import itertools

import pytest

from fs2csv.models import Document
from fs2csv.schema import SchemaAccumulator


def test_columns_are_union_sorted_regardless_of_order():
    documents = [
        Document("1", {"a": 1}),
        Document("2", {"b": 2}),
        Document("3", {"a": 3, "c": 4}),
    ]
    for ordering in itertools.permutations(documents):
        schema = SchemaAccumulator()
        for document in ordering:
            schema.add(document)
        assert schema.field_count == 3
        assert schema.finalize() == ["__document_id__", "a", "b", "c"]


def test_byte_wise_ordering():
    schema = SchemaAccumulator()
    schema.add(Document("1", {"b": 1, "B": 1, "_x": 1, "ä": 1, "a": 1}))
    assert schema.finalize() == ["__document_id__", "B", "_x", "a", "b", "ä"]


def test_empty():
    assert SchemaAccumulator().finalize() == ["__document_id__"]


def test_single_use():
    schema = SchemaAccumulator()
    schema.finalize()
    with pytest.raises(RuntimeError):
        schema.add(Document("1", {"a": 1}))
