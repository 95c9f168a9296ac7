from seat_booking.storage.blob_store import (
    BlobStore,
    BlobStoreError,
    FileBlobStore,
    InMemoryBlobStore,
)
from seat_booking.storage.codec import CSV_HEADERS, decode, deserialize, serialize

__all__ = [
    "BlobStore", "BlobStoreError", "FileBlobStore", "InMemoryBlobStore",
    "CSV_HEADERS", "decode", "deserialize", "serialize",
]
