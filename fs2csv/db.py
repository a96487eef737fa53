import os
import logging
from datetime import datetime
from typing import Iterator, List, Optional

from google.cloud import firestore

from .models import Document, DocumentValue, GeoPoint, Reference, Timestamp

LOGGER = logging.getLogger(__name__)

DEFAULT_DATABASE = "(default)"


def create_client(project: str, database: str = DEFAULT_DATABASE, keyfile: Optional[str] = None):
    if keyfile:
        os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = keyfile
    return firestore.Client(project=project, database=database)


def convert_value(value) -> DocumentValue:
    """Map a value returned by the Firestore client onto the document value model."""
    # DatetimeWithNanoseconds is a datetime subclass
    if isinstance(value, datetime):
        return Timestamp.from_datetime(value)
    if isinstance(value, firestore.GeoPoint):
        return GeoPoint(value.latitude, value.longitude)
    if isinstance(value, firestore.DocumentReference):
        # Fully-qualified: projects/{project}/databases/{database}/documents/{path}.
        # _document_path is private API of BaseDocumentReference in
        # google-cloud-firestore 2.x; the public .path is collection-relative.
        return Reference(value._document_path)
    if isinstance(value, list):
        return [convert_value(x) for x in value]
    if isinstance(value, dict):
        return {key: convert_value(item) for key, item in value.items()}
    return value


class FirestoreStore:
    def __init__(self, client):
        self.client = client

    def list_collection_names(self) -> List[str]:
        return [collection.id for collection in self.client.collections()]

    def stream_documents(self, name: str, limit: int = 0) -> Iterator[Document]:
        query = self.client.collection(name)
        if limit > 0:
            query = query.limit(limit)
        for snapshot in query.stream():
            data = snapshot.to_dict() or {}
            yield Document(
                snapshot.id,
                {key: convert_value(value) for key, value in data.items()}
            )
