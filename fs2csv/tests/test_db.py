import os
from datetime import timezone

from google.api_core.datetime_helpers import DatetimeWithNanoseconds
from google.auth.credentials import AnonymousCredentials
from google.cloud import firestore

import fs2csv.db
from fs2csv.db import FirestoreStore, convert_value, create_client
from fs2csv.models import Document, GeoPoint, Reference, Timestamp


def test_convert_value(mocker):
    reference = mocker.MagicMock(spec=firestore.DocumentReference)
    reference._document_path = "projects/p/databases/(default)/documents/users/alice"
    when = DatetimeWithNanoseconds(
        1970, 1, 1, 0, 0, 1, nanosecond=5, tzinfo=timezone.utc)
    value = {
        "when": when,
        "where": firestore.GeoPoint(1.5, -2.5),
        "who": reference,
        "list": [when, {"n": 1}],
        "plain": "text",
    }
    assert convert_value(value) == {
        "when": Timestamp(1, 5),
        "where": GeoPoint(1.5, -2.5),
        "who": Reference("projects/p/databases/(default)/documents/users/alice"),
        "list": [Timestamp(1, 5), {"n": 1}],
        "plain": "text",
    }
    assert convert_value(None) is None
    assert convert_value(b"\x00") == b"\x00"


def test_list_collection_names(mocker):
    client = mocker.MagicMock()
    first, second = mocker.MagicMock(), mocker.MagicMock()
    first.id, second.id = "users", "orders"
    client.collections.return_value = iter([first, second])
    assert FirestoreStore(client).list_collection_names() == ["users", "orders"]


def _snapshot(mocker, id_, data):
    snapshot = mocker.MagicMock()
    snapshot.id = id_
    snapshot.to_dict.return_value = data
    return snapshot


def test_stream_documents(mocker):
    client = mocker.MagicMock()
    query = client.collection.return_value
    query.stream.return_value = iter([
        _snapshot(mocker, "a", {"n": 1}), _snapshot(mocker, "b", None)])
    documents = list(FirestoreStore(client).stream_documents("things"))
    assert documents == [Document("a", {"n": 1}), Document("b", {})]
    client.collection.assert_called_once_with("things")
    assert query.limit.called is False


def test_stream_documents_with_limit(mocker):
    client = mocker.MagicMock()
    limited = client.collection.return_value.limit.return_value
    limited.stream.return_value = iter([_snapshot(mocker, "a", {})])
    documents = list(FirestoreStore(client).stream_documents("things", 10))
    client.collection.return_value.limit.assert_called_once_with(10)
    assert [x.id for x in documents] == ["a"]


def test_stream_documents_is_lazy(mocker):
    client = mocker.MagicMock()
    FirestoreStore(client).stream_documents("things")
    assert client.collection.called is False


def test_create_client(mocker, monkeypatch):
    monkeypatch.delenv("GOOGLE_APPLICATION_CREDENTIALS", raising=False)
    mocker.patch("fs2csv.db.firestore.Client")
    create_client("proj", "other", keyfile="key.json")
    fs2csv.db.firestore.Client.assert_called_once_with(project="proj", database="other")
    assert os.environ["GOOGLE_APPLICATION_CREDENTIALS"] == "key.json"


def test_convert_real_document_reference():
    client = firestore.Client(project="proj", credentials=AnonymousCredentials())
    reference = client.document("users", "alice")
    assert convert_value(reference) == Reference(
        "projects/proj/databases/(default)/documents/users/alice")
