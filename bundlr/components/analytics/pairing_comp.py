"""
Pairing analysis - service and category co-occurrence counts within visits.

PURE LEAF-DOMAIN - These functions operate on in-memory data only:
- Take a visit map (from visit_aggregation_comp) and a classifier
- Perform ONLY counting and ranking
- Do NOT import bundlr.persistence, bundlr.services, bundlr.workflows, or bundlr.interfaces

Only multi-service visits (2+ distinct services) take part. Pair keys are
always built from sorted names, so (A, B) and (B, A) can never both appear.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from itertools import combinations

from bundlr.components.analytics.visit_aggregation_comp import visit_categories
from bundlr.components.classification.category_classifier_comp import ServiceClassifier
from bundlr.helpers.dto.analytics_dto import CategoryPairing, ServicePairing
from bundlr.helpers.dto.visits_dto import Visit, VisitKey

DEFAULT_TOP_PAIRINGS = 10


def canonical_pairs(names: Iterable[str]) -> list[tuple[str, str]]:
    """All (a, b) pairs with a < b from a collection of distinct names.

    k names yield exactly k*(k-1)/2 pairs.
    """
    return list(combinations(sorted(set(names)), 2))


def multi_service_visits(visits: Mapping[VisitKey, Visit]) -> list[Visit]:
    return [visit for visit in visits.values() if visit.is_multi_service]


def _pct(count: int, total: int) -> float:
    return count / total * 100 if total else 0.0


def _ranked(counter: Counter[tuple[str, str]]) -> list[tuple[tuple[str, str], int]]:
    # count desc, then pair asc so equal counts come out in a stable order
    return sorted(counter.items(), key=lambda item: (-item[1], item[0]))


def compute_service_pairings(
    visits: Mapping[VisitKey, Visit],
    limit: int | None = DEFAULT_TOP_PAIRINGS,
) -> list[ServicePairing]:
    """
    Rank the most common service pairs across multi-service visits.

    Args:
        visits: Visit map for one query
        limit: Max pairings to return (None for all)

    Returns:
        ServicePairing list sorted by count desc
    """
    multi = multi_service_visits(visits)
    logging.info(f"[analytics] Computing service pairings over {len(multi)} multi-service visits")

    counter: Counter[tuple[str, str]] = Counter()
    for visit in multi:
        counter.update(canonical_pairs(visit.services))

    ranked = _ranked(counter)
    if limit is not None:
        ranked = ranked[:limit]

    return [
        ServicePairing(
            service_a=a,
            service_b=b,
            count=count,
            pct_of_multi_visits=_pct(count, len(multi)),
        )
        for (a, b), count in ranked
    ]


def compute_category_pairings(
    visits: Mapping[VisitKey, Visit],
    classifier: ServiceClassifier,
) -> list[CategoryPairing]:
    """
    Count category pairs across multi-service visits (all pairs, no cap).

    A visit with several services in one category contributes no pair for it;
    the percentage denominator is still every multi-service visit.

    Args:
        visits: Visit map for one query
        classifier: Service name → category mapping

    Returns:
        CategoryPairing list sorted by count desc
    """
    multi = multi_service_visits(visits)
    logging.info("[analytics] Computing category pairings")

    counter: Counter[tuple[str, str]] = Counter()
    for visit in multi:
        counter.update(canonical_pairs(visit_categories(visit, classifier)))

    return [
        CategoryPairing(
            category_a=a,
            category_b=b,
            count=count,
            pct_of_multi_visits=_pct(count, len(multi)),
        )
        for (a, b), count in _ranked(counter)
    ]
