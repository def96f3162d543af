class PagekeeperError(Exception):
    """Base exception for all Pagekeeper errors."""


class ConfigurationError(PagekeeperError):
    """Raised when a paginator is created with invalid settings."""


class FieldNotFound(PagekeeperError):
    """Raised when the ordering or filter field does not exist on the record type."""


class FieldValueMissing(PagekeeperError):
    """Raised when a fetched record has no value for the ordering field."""


class PositionCollision(PagekeeperError):
    """Raised when a boundary position is shared by every row being scanned.

    Keyset navigation cannot move past a value that is not unique among the
    visible rows without a secondary ordering field.
    """


class MalformedCursor(PagekeeperError):
    """Raised by the strict cursor parser when a token cannot be decoded."""


class NotConnected(PagekeeperError):
    """Raised when attempting to use a database that is not connected."""
