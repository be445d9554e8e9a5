"""Object store backends."""

from pubhost.storage.base import ObjectStore, PutResult, StoredBlob
from pubhost.storage.blob_client import BlobStoreClient
from pubhost.storage.memory import InMemoryObjectStore

__all__ = [
    "ObjectStore",
    "PutResult",
    "StoredBlob",
    "BlobStoreClient",
    "InMemoryObjectStore",
]
