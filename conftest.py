import pytest

from fs2csv.models import Document


@pytest.fixture
def people():
    return [
        Document("d1", {"name": "Alice"}),
        Document("d2", {"name": "Bob", "age": 30}),
    ]
