"""
Standalone rate and revenue lift computation per service category.

PURE LEAF-DOMAIN - in-memory computation only.

Every category a visit touches is credited with that visit: as "grouped" when
the visit has 2+ distinct services (even if the others are in different
categories), as "standalone" otherwise. The visit's full ticket goes into the
matching solo/grouped sample for each of those categories.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Mapping
from dataclasses import dataclass, field

from bundlr.components.analytics.visit_aggregation_comp import visit_categories
from bundlr.components.classification.category_classifier_comp import ServiceClassifier
from bundlr.helpers.dto.analytics_dto import RevenueLift, StandaloneRate
from bundlr.helpers.dto.visits_dto import Visit, VisitKey

MIN_BOOKINGS = 3
MIN_TICKET_SAMPLES = 2


@dataclass
class CategoryTally:
    """Per-category counters accumulated over all visits."""

    standalone: int = 0
    grouped: int = 0
    solo_tickets: list[float] = field(default_factory=list)
    grouped_tickets: list[float] = field(default_factory=list)

    @property
    def total_bookings(self) -> int:
        return self.standalone + self.grouped


def tally_categories(
    visits: Mapping[VisitKey, Visit],
    classifier: ServiceClassifier,
) -> dict[str, CategoryTally]:
    """Accumulate standalone/grouped counts and ticket samples per category."""
    tallies: dict[str, CategoryTally] = defaultdict(CategoryTally)

    for visit in visits.values():
        is_multi = len(visit.services) > 1
        ticket = visit.ticket_total
        for category in visit_categories(visit, classifier):
            tally = tallies[category]
            if is_multi:
                tally.grouped += 1
                tally.grouped_tickets.append(ticket)
            else:
                tally.standalone += 1
                tally.solo_tickets.append(ticket)

    return dict(tallies)


def compute_standalone_rates(
    tallies: Mapping[str, CategoryTally],
    min_bookings: int = MIN_BOOKINGS,
) -> list[StandaloneRate]:
    """
    Standalone vs grouped booking rate per category.

    Args:
        tallies: Output of tally_categories
        min_bookings: Categories with fewer total bookings are dropped

    Returns:
        StandaloneRate list sorted by standalone_rate desc
    """
    logging.info("[analytics] Computing standalone rates")

    rates: list[StandaloneRate] = []
    for category, tally in tallies.items():
        total = tally.total_bookings
        if total < min_bookings:
            continue
        if total > 0:
            standalone_rate = tally.standalone / total * 100
            grouped_rate = 100 - standalone_rate
        else:
            standalone_rate = grouped_rate = 0.0
        rates.append(
            StandaloneRate(
                category=category,
                total_bookings=total,
                standalone_count=tally.standalone,
                standalone_rate=standalone_rate,
                grouped_count=tally.grouped,
                grouped_rate=grouped_rate,
            )
        )

    return sorted(rates, key=lambda r: (-r.standalone_rate, r.category))


def _mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def compute_revenue_lift(
    tallies: Mapping[str, CategoryTally],
    min_samples: int = MIN_TICKET_SAMPLES,
) -> list[RevenueLift]:
    """
    Average ticket lift from booking a category alongside other services.

    Args:
        tallies: Output of tally_categories
        min_samples: Both solo and grouped samples need at least this many tickets

    Returns:
        RevenueLift list sorted by lift_dollars desc
    """
    logging.info("[analytics] Computing revenue lift")

    lifts: list[RevenueLift] = []
    for category, tally in tallies.items():
        if len(tally.solo_tickets) < min_samples or len(tally.grouped_tickets) < min_samples:
            continue
        avg_solo = _mean(tally.solo_tickets)
        avg_grouped = _mean(tally.grouped_tickets)
        lift_dollars = avg_grouped - avg_solo
        lifts.append(
            RevenueLift(
                category=category,
                avg_ticket_solo=avg_solo,
                avg_ticket_grouped=avg_grouped,
                lift_dollars=lift_dollars,
                lift_pct=lift_dollars / avg_solo * 100 if avg_solo != 0 else 0.0,
            )
        )

    return sorted(lifts, key=lambda r: (-r.lift_dollars, r.category))
