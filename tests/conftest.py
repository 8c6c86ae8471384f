"""
Pytest fixtures and configuration for the test suite.

Strategy:
- Pure components are tested with real DTOs and the default classifier
- The transaction store is an in-memory fake that pages like the real one
- ArangoDB itself is always a MagicMock (no server needed)
"""

from __future__ import annotations

import sys
from datetime import date
from pathlib import Path
from typing import Any

import pytest

# Add project root to path so tests can import bundlr package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from bundlr.components.analytics.visit_aggregation_comp import aggregate_visits  # noqa: E402
from bundlr.components.classification.category_classifier_comp import KeywordCategoryClassifier  # noqa: E402
from bundlr.helpers.dto.visits_dto import RawServiceRecord, Visit, VisitKey  # noqa: E402

DAY = date(2024, 3, 1)


class FakeTransactionStore:
    """In-memory transaction store with the same paging contract as TransactionItemsOperations.

    Records every fetch_page call in `calls`. `fail_at_offset` makes the page
    at that offset raise `error` instead of returning rows.
    """

    def __init__(
        self,
        rows: list[dict[str, Any]] | None = None,
        fail_at_offset: int | None = None,
        error: Exception | None = None,
    ) -> None:
        self.rows = list(rows or [])
        self.fail_at_offset = fail_at_offset
        self.error = error or ConnectionError("store unreachable")
        self.calls: list[dict[str, Any]] = []

    def fetch_page(
        self,
        date_from: date,
        date_to: date,
        location_id: str | None = None,
        exclude_status: str = "cancelled",
        offset: int = 0,
        limit: int = 1000,
    ) -> list[dict[str, Any]]:
        self.calls.append(
            {
                "date_from": date_from,
                "date_to": date_to,
                "location_id": location_id,
                "exclude_status": exclude_status,
                "offset": offset,
                "limit": limit,
            }
        )
        if self.fail_at_offset is not None and offset == self.fail_at_offset:
            raise self.error
        return self.rows[offset : offset + limit]


def make_row(
    client_id: str | None = "c1",
    service_name: str | None = "Haircut",
    price: Any = 50.0,
    visit_date: Any = "2024-03-01",
) -> dict[str, Any]:
    """Build a store row as TransactionItemsOperations returns it."""
    return {"client_id": client_id, "visit_date": visit_date, "service_name": service_name, "price": price}


def make_record(
    client_id: str | None = "c1",
    service_name: str | None = "Haircut",
    price: float | None = 50.0,
    visit_date: date = DAY,
) -> RawServiceRecord:
    return RawServiceRecord(client_id=client_id, visit_date=visit_date, service_name=service_name, price=price)


def make_visits(*visits: list[tuple[str, float]]) -> dict[VisitKey, Visit]:
    """Build a visit map from lists of (service_name, price), one client per visit."""
    records = [
        make_record(client_id=f"client-{i}", service_name=name, price=price)
        for i, services in enumerate(visits)
        for name, price in services
    ]
    return aggregate_visits(records)


@pytest.fixture
def classifier() -> KeywordCategoryClassifier:
    """Default keyword classifier."""
    return KeywordCategoryClassifier()


@pytest.fixture
def fake_store() -> FakeTransactionStore:
    """Empty in-memory store; tests fill `rows` as needed."""
    return FakeTransactionStore()
