from __future__ import annotations

import logging

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import ConfigurationError as MongoConfigurationError

from pagekeeper.utils.exceptions import ConfigurationError, NotConnected
from pagekeeper.utils.settings import SettingsResolver

logger = logging.getLogger(__name__)

_clients: dict[str, AsyncMongoClient] = {}
_databases: dict[str, AsyncDatabase] = {}


async def connect(uri: str, *, alias: str = "default") -> AsyncDatabase:
    """Open a client for ``uri`` and register its default database.

    Args:
        uri: MongoDB connection URI, including the database name
        alias: Name under which sources look the database up

    Returns:
        The registered AsyncDatabase

    Raises:
        ConfigurationError: If the URI names no database
    """
    logger.info("Connecting to MongoDB with alias '%s'", alias)
    client = AsyncMongoClient(uri)
    try:
        db = client.get_default_database()
    except MongoConfigurationError as e:
        await client.close()
        raise ConfigurationError(
            f"MongoDB URI must include a database name (mongodb://host:port/database): {e}"
        ) from e

    _clients[alias] = client
    register_database(db, alias=alias)
    logger.info("Connected to database '%s' with alias '%s'", db.name, alias)
    return db


def register_database(db: AsyncDatabase, *, alias: str = "default") -> None:
    """Register an already opened database under ``alias``."""
    _databases[alias] = db


async def disconnect(alias: str = "default") -> None:
    """Forget the database registered under ``alias`` and close its client."""
    _databases.pop(alias, None)
    client = _clients.pop(alias, None)
    if client is not None:
        await client.close()
        logger.info("Disconnected from MongoDB (alias: '%s')", alias)


def get_database(alias: str = "default") -> AsyncDatabase:
    """Return the database registered under ``alias``.

    Raises:
        NotConnected: If nothing is registered for the alias
    """
    try:
        return _databases[alias]
    except KeyError:
        raise NotConnected(
            f"No connection registered for alias '{alias}'. Call connect() first."
        )


def get_collection(model: type, alias: str | None = None) -> AsyncCollection:
    """Resolve the collection a model is stored in from its Settings."""
    db = get_database(alias or SettingsResolver.get_connection_alias(model))
    return db[SettingsResolver.get_collection_name(model)]
