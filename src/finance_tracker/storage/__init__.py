"""
Storage Package

Implementations of the persistence collaborator and bulk backup documents.
"""

from .backup import BackupSnapshot, build_document, parse_document, read_backup, write_backup
from .json_store import JsonFileStore
from .memory_store import InMemoryStore

__all__ = [
    "BackupSnapshot",
    "InMemoryStore",
    "JsonFileStore",
    "build_document",
    "parse_document",
    "read_backup",
    "write_backup",
]
