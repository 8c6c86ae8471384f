"""Transaction item operations for ArangoDB.

One document per service line, written by the booking sync (not by Bundlr):

    {client_id, visit_date: "YYYY-MM-DD[THH:MM...]", service_name, price, status, location_id}

Bundlr only reads this collection, one fixed-size page at a time.
"""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Any, cast

from bundlr.persistence.arango_client import DatabaseLike

if TYPE_CHECKING:
    from arango.cursor import Cursor


class TransactionItemsOperations:
    """Operations for the transaction_items collection."""

    def __init__(self, db: DatabaseLike) -> None:
        self.db = db

    def fetch_page(
        self,
        date_from: date,
        date_to: date,
        location_id: str | None = None,
        exclude_status: str = "cancelled",
        offset: int = 0,
        limit: int = 1000,
    ) -> list[dict[str, Any]]:
        """Fetch one page of service lines in an inclusive date range.

        Pages are ordered by _key so consecutive offsets never overlap or skip
        rows while the range is unchanged.

        Args:
            date_from: First visit date (inclusive)
            date_to: Last visit date (inclusive)
            location_id: Only rows for this location (None for all)
            exclude_status: Rows with this status are left out
            offset: Number of matching rows to skip
            limit: Page size

        Returns:
            List of {client_id, visit_date, service_name, price} dicts;
            fewer than `limit` only on the last page
        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
                FOR doc IN transaction_items
                    LET day = SUBSTRING(doc.visit_date, 0, 10)
                    FILTER day >= @date_from AND day <= @date_to
                    FILTER doc.status != @exclude_status
                    FILTER @location_id == null OR doc.location_id == @location_id
                    SORT doc._key
                    LIMIT @offset, @limit
                    RETURN {
                        client_id: doc.client_id,
                        visit_date: doc.visit_date,
                        service_name: doc.service_name,
                        price: doc.price
                    }
                """,
                bind_vars={
                    "date_from": date_from,
                    "date_to": date_to,
                    "location_id": location_id,
                    "exclude_status": exclude_status,
                    "offset": offset,
                    "limit": limit,
                },
            ),
        )
        return list(cursor)
