from pagekeeper.core import (
    CursorPagination,
    LimitOffsetPagination,
    PaginationBase,
    CursorToken,
    Direction,
    OrderingSpec,
    encode_cursor,
    decode_cursor,
)
from pagekeeper.sources import (
    Source,
    MemorySource,
    MongoSource,
    connect,
    disconnect,
    get_database,
)
from pagekeeper.fields import PyObjectId
from pagekeeper.lifecycle import (
    enable_tracing,
    disable_tracing,
    QueryEvent,
    add_listener,
)
from pagekeeper.utils import (
    PagekeeperError,
    ConfigurationError,
    FieldNotFound,
    FieldValueMissing,
    PositionCollision,
    NotConnected,
    Paginated,
)

__all__ = [
    # Core
    "CursorPagination",
    "LimitOffsetPagination",
    "PaginationBase",
    "CursorToken",
    "Direction",
    "OrderingSpec",
    "encode_cursor",
    "decode_cursor",
    # Sources
    "Source",
    "MemorySource",
    "MongoSource",
    "connect",
    "disconnect",
    "get_database",
    # Fields
    "PyObjectId",
    # Lifecycle
    "enable_tracing",
    "disable_tracing",
    "QueryEvent",
    "add_listener",
    # Utils
    "PagekeeperError",
    "ConfigurationError",
    "FieldNotFound",
    "FieldValueMissing",
    "PositionCollision",
    "NotConnected",
    "Paginated",
]
