"""
Visit domain DTOs.

Raw transaction rows as they enter the engine, and the per-client, per-day
visits they are grouped into.

Rules:
- Import only stdlib and typing (no bundlr.* imports)
- Pure data structures only (no I/O, no DB access)
- Row coercion lives on RawServiceRecord.from_row so that loosely typed store
  rows are validated exactly once, at the ingestion boundary
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any


def _clean_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_price(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        price = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(price):
        return None
    return price


def _coerce_date(value: Any) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            # Accept both "2024-03-01" and "2024-03-01T10:30:00"
            return date.fromisoformat(value.strip()[:10])
        except ValueError:
            return None
    return None


@dataclass(frozen=True)
class RawServiceRecord:
    """One service line from the transaction store.

    client_id and service_name are optional: records missing either are
    skipped during aggregation rather than rejected here.
    """

    client_id: str | None
    visit_date: date
    service_name: str | None
    price: float | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> RawServiceRecord:
        """Build a record from a store row, never raising.

        Blank strings become None and unparseable prices become None. A row
        whose date cannot be parsed is kept but made unusable by dropping its
        client_id, so it is skipped downstream like any other malformed row.
        """
        visit_date = _coerce_date(row.get("visit_date"))
        client_id = _clean_str(row.get("client_id"))
        if visit_date is None:
            client_id = None
            visit_date = date.min
        return cls(
            client_id=client_id,
            visit_date=visit_date,
            service_name=_clean_str(row.get("service_name")),
            price=_coerce_price(row.get("price")),
        )


@dataclass(frozen=True, order=True)
class VisitKey:
    """Composite visit identity: one client on one calendar date."""

    client_id: str
    visit_date: date


@dataclass(frozen=True)
class LineItem:
    """Single priced service within a visit (duplicates allowed)."""

    service_name: str
    price: float


@dataclass
class Visit:
    """All services performed for one client on one date.

    services holds distinct names (drives pairing and multi-service checks);
    line_items keeps every row so repeated services still add to the ticket.
    """

    key: VisitKey
    services: set[str] = field(default_factory=set)
    line_items: list[LineItem] = field(default_factory=list)

    @property
    def is_multi_service(self) -> bool:
        return len(self.services) >= 2

    @property
    def ticket_total(self) -> float:
        return sum(item.price for item in self.line_items)
