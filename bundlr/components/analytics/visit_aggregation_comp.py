"""
Visit aggregation - groups raw service records into per-client, per-day visits.

PURE LEAF-DOMAIN - operates on in-memory records only, no persistence access.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from bundlr.components.classification.category_classifier_comp import ServiceClassifier
from bundlr.helpers.dto.visits_dto import LineItem, RawServiceRecord, Visit, VisitKey


def aggregate_visits(records: Iterable[RawServiceRecord]) -> dict[VisitKey, Visit]:
    """
    Group records by (client_id, visit_date).

    Records missing a client or service name are skipped. Every kept record
    adds its service to the visit's distinct set and appends a line item;
    a missing price counts as 0.

    Args:
        records: Raw records in any order

    Returns:
        Mapping of visit key to Visit
    """
    visits: dict[VisitKey, Visit] = {}
    skipped = 0

    for record in records:
        if not record.client_id or not record.service_name:
            skipped += 1
            continue

        key = VisitKey(client_id=record.client_id, visit_date=record.visit_date)
        visit = visits.get(key)
        if visit is None:
            visit = Visit(key=key)
            visits[key] = visit

        visit.services.add(record.service_name)
        visit.line_items.append(
            LineItem(
                service_name=record.service_name,
                price=record.price if record.price is not None else 0.0,
            )
        )

    if skipped:
        logging.debug(f"[analytics] Skipped {skipped} records without client or service name")
    logging.debug(f"[analytics] Aggregated {len(visits)} visits")
    return visits


def visit_categories(visit: Visit, classifier: ServiceClassifier) -> set[str]:
    """Distinct categories touched by a visit's services."""
    return {classifier.classify(name) for name in visit.services}
