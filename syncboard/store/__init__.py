"""
Persistence for the record collection.
"""

from .backends import InMemoryBackend, JsonFileBackend, KeyValueBackend
from .record_store import RecordStore, decode_collection, encode_collection

__all__ = [
    "KeyValueBackend",
    "InMemoryBackend",
    "JsonFileBackend",
    "RecordStore",
    "encode_collection",
    "decode_collection",
]
