"""
MongoDB integration.

This module owns the connection to the document store.  A
``DocumentStore`` holds the client and the three collection handles the
services work with (``rooms``, ``bookings`` and ``reviews``).  One store
is built at application start and passed to every service; nothing
here keeps module-level collection globals.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.errors import PyMongoError

from .config import settings
from .exceptions import StoreFailure


logger = logging.getLogger(__name__)

ROOMS = "rooms"
BOOKINGS = "bookings"
REVIEWS = "reviews"


class DocumentStore:
    """Collection-scoped access to the hotel database.

    Parameters
    ----------
    database : pymongo.database.Database
        Database exposing ``rooms``, ``bookings`` and ``reviews``.  Any
        object with the same ``__getitem__`` and ``command`` interface is
        accepted, which is how tests plug in an in-memory database.
    client : Optional[MongoClient]
        The owning client, closed by ``close``.
    """

    def __init__(self, database: Any, client: Optional[MongoClient] = None) -> None:
        self.database = database
        self.client = client
        self.rooms = database[ROOMS]
        self.bookings = database[BOOKINGS]
        self.reviews = database[REVIEWS]

    @classmethod
    def from_settings(cls) -> "DocumentStore":
        """Build a store connected to ``settings.mongodb_uri``.

        ``MongoClient`` connects lazily, so this does not fail when the
        server is unreachable; see ``ping``.
        """
        client = MongoClient(
            settings.mongodb_uri,
            serverSelectionTimeoutMS=settings.mongo_timeout_ms,
            tz_aware=True,
        )
        return cls(client[settings.db_name], client=client)

    def ping(self) -> bool:
        """Return ``True`` if the server answers a ``ping`` command."""
        try:
            self.database.command("ping")
        except PyMongoError as e:
            logger.error("MongoDB ping failed: %s", e)
            return False
        logger.info("Connected to MongoDB database %s", getattr(self.database, "name", "?"))
        return True

    def ensure_indexes(self) -> None:
        """Create the indexes backing the owner and room lookups."""
        self.bookings.create_index([("userEmail", ASCENDING)])
        self.bookings.create_index([("roomId", ASCENDING)])
        self.reviews.create_index([("roomId", ASCENDING)])
        self.reviews.create_index([("bookingId", ASCENDING)])
        self.reviews.create_index([("date", DESCENDING)])

    def init(self) -> None:
        """Startup hook: check connectivity and ensure indexes.

        A failure is logged rather than raised so that the API still
        starts; requests touching the store then report a store failure.
        """
        if not self.ping():
            return
        try:
            self.ensure_indexes()
        except PyMongoError as e:
            logger.error("Failed to create indexes: %s", e)

    def close(self) -> None:
        if self.client is not None:
            self.client.close()


@contextmanager
def store_errors(message: str) -> Iterator[None]:
    """Translate driver errors raised inside the block into ``StoreFailure``.

    ``message`` is the client-facing summary; the driver's own message is
    surfaced in the ``error`` field.
    """
    try:
        yield
    except PyMongoError as e:
        logger.error("%s: %s", message, e)
        raise StoreFailure(message, error=str(e)) from e
