"""Settings resolution utilities for paginated record types."""

from __future__ import annotations

DEFAULT_ORDERING = "id"
DEFAULT_PAGE_SIZE = 10
DEFAULT_MAX_PAGE_SIZE = 25


def _pluralize(name: str) -> str:
    """Naive pluralization for collection names.

    Args:
        name: Singular class name

    Returns:
        Pluralized collection name
    """
    lower = name.lower()
    if lower.endswith("s"):
        return lower + "es"
    if lower.endswith("y") and not lower.endswith(("ay", "ey", "iy", "oy", "uy")):
        return lower[:-1] + "ies"
    return lower + "s"


class SettingsResolver:
    """Resolves pagination and storage settings from an inner Settings class."""

    @staticmethod
    def get_collection_name(cls: type) -> str:
        """Get collection name from Settings or auto-pluralize.

        Args:
            cls: Record class

        Returns:
            Collection name
        """
        settings = getattr(cls, "Settings", None)
        if settings and hasattr(settings, "collection"):
            return settings.collection
        return _pluralize(cls.__name__)

    @staticmethod
    def get_connection_alias(cls: type) -> str:
        """Get connection alias from Settings or default.

        Args:
            cls: Record class

        Returns:
            Connection alias name
        """
        settings = getattr(cls, "Settings", None)
        if settings and hasattr(settings, "connection_alias"):
            return settings.connection_alias
        return "default"

    @staticmethod
    def get_ordering(cls: type) -> str:
        """Get the ordering spec (e.g. ``"-created"``) from Settings.

        Args:
            cls: Record class

        Returns:
            Ordering spec string
        """
        settings = getattr(cls, "Settings", None)
        if settings and hasattr(settings, "ordering"):
            return settings.ordering
        return DEFAULT_ORDERING

    @staticmethod
    def get_page_size(cls: type) -> int:
        settings = getattr(cls, "Settings", None)
        if settings and hasattr(settings, "page_size"):
            return int(settings.page_size)
        return DEFAULT_PAGE_SIZE

    @staticmethod
    def get_max_page_size(cls: type) -> int:
        settings = getattr(cls, "Settings", None)
        if settings and hasattr(settings, "max_page_size"):
            return int(settings.max_page_size)
        return DEFAULT_MAX_PAGE_SIZE
