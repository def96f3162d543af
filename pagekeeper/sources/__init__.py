from pagekeeper.sources.base import Source
from pagekeeper.sources.memory import MemorySource
from pagekeeper.sources.mongo import MongoSource
from pagekeeper.sources.connection import (
    connect,
    disconnect,
    register_database,
    get_database,
    get_collection,
)

__all__ = [
    "Source",
    "MemorySource",
    "MongoSource",
    "connect",
    "disconnect",
    "register_database",
    "get_database",
    "get_collection",
]
