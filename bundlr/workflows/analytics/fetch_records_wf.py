"""Workflow for paging raw service records out of the transaction store."""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Protocol

from bundlr.helpers.dto.visits_dto import RawServiceRecord
from bundlr.helpers.exceptions import FetchError

logger = logging.getLogger(__name__)

PAGE_SIZE = 1000
EXCLUDED_STATUS = "cancelled"


class TransactionStore(Protocol):
    """Anything that can return one page of transaction rows."""

    def fetch_page(
        self,
        date_from: date,
        date_to: date,
        location_id: str | None = None,
        exclude_status: str = EXCLUDED_STATUS,
        offset: int = 0,
        limit: int = PAGE_SIZE,
    ) -> list[dict[str, Any]]: ...


def fetch_all_records(
    store: TransactionStore,
    date_from: date,
    date_to: date,
    location_id: str | None = None,
    page_size: int = PAGE_SIZE,
) -> list[RawServiceRecord]:
    """Fetch every non-cancelled record in [date_from, date_to].

    Pages are requested one after another until a page comes back shorter
    than page_size. Any page failure aborts the whole fetch; no partial
    result is returned.

    Args:
        store: Transaction store (TransactionItemsOperations in production)
        date_from: First visit date (inclusive)
        date_to: Last visit date (inclusive)
        location_id: Optional location filter
        page_size: Rows per request

    Returns:
        All records in the range, converted with RawServiceRecord.from_row

    Raises:
        ValueError: If date_from is after date_to or page_size < 1
        FetchError: If any page request fails
    """
    if date_from > date_to:
        raise ValueError(f"date_from {date_from} is after date_to {date_to}")
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")

    records: list[RawServiceRecord] = []
    offset = 0

    while True:
        try:
            rows = store.fetch_page(
                date_from,
                date_to,
                location_id=location_id,
                exclude_status=EXCLUDED_STATUS,
                offset=offset,
                limit=page_size,
            )
        except FetchError:
            raise
        except Exception as e:
            raise FetchError(f"Failed to fetch transaction page at offset {offset}: {e}", offset=offset) from e

        logger.debug(f"[fetch_records] Page at offset {offset}: {len(rows)} rows")
        records.extend(RawServiceRecord.from_row(row) for row in rows)

        if len(rows) < page_size:
            break
        offset += page_size

    logger.info(f"[fetch_records] Fetched {len(records)} records for {date_from}..{date_to}")
    return records
