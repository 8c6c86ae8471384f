"""
Application database handle.

Wraps the ArangoDB connection and exposes one operations object per
collection. Bundlr reads transaction data only; it does not own the schema.
"""

from __future__ import annotations

import logging

from bundlr.persistence.arango_client import DatabaseLike, create_arango_client
from bundlr.persistence.database.transaction_items_aql import TransactionItemsOperations

logger = logging.getLogger(__name__)


class Database:
    """
    Application database.

    Single source of truth for database operations across all services.
    """

    def __init__(self, db: DatabaseLike) -> None:
        self.db = db
        self.transaction_items = TransactionItemsOperations(db)

    @classmethod
    def connect(
        cls,
        hosts: str,
        username: str,
        password: str,
        db_name: str,
    ) -> Database:
        """Open a connection using python-arango and wrap it."""
        logger.info("[Database] Connecting to ArangoDB at %s (db=%s)", hosts, db_name)
        return cls(create_arango_client(hosts=hosts, username=username, password=password, db_name=db_name))
