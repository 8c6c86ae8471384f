"""
Service category classification component.

Maps free-text service names (as typed into the booking system) to a small
canonical set of categories used by the pairing analytics.

Canonical categories:
- Consultation, Extensions, Blonding, Color, Haircut, Styling, Treatment, Extras
- Other (fallback for anything unrecognised)

Rules are checked in order and the first rule with a matching keyword wins,
so a name like "Blonding + Haircut" lands in Blonding. Callers that need a
different priority pass their own rule list.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Protocol, runtime_checkable

FALLBACK_CATEGORY = "Other"

# (category, keywords) - order matters, first match wins
DEFAULT_CATEGORY_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Consultation", ("consult",)),
    ("Extensions", ("extension", "tape-in", "tape in", "k-tip", "i-tip", "weft", "install")),
    ("Blonding", ("blond", "balayage", "highlight", "babylight", "foilayage", "lightener")),
    ("Color", ("color", "colour", "gloss", "toner", "root touch", "vivid", "glaze")),
    ("Haircut", ("haircut", "cut", "trim", "bang", "fringe")),
    ("Styling", ("blowout", "blow dry", "blow-dry", "style", "updo", "braid", "curl")),
    ("Treatment", ("treatment", "olaplex", "keratin", "mask", "k18", "scalp")),
    ("Extras", ("add-on", "add on", "extra", "upgrade")),
)


@runtime_checkable
class ServiceClassifier(Protocol):
    """Pure, deterministic, total mapping from service name to category."""

    def classify(self, service_name: str) -> str: ...


class KeywordCategoryClassifier:
    """Case-insensitive substring matcher over ordered keyword rules."""

    def __init__(
        self,
        rules: Sequence[tuple[str, Iterable[str]]] = DEFAULT_CATEGORY_RULES,
        fallback: str = FALLBACK_CATEGORY,
    ) -> None:
        self._rules = tuple((category, tuple(kw.lower() for kw in keywords)) for category, keywords in rules)
        self.fallback = fallback

    @classmethod
    def from_config(cls, rules: Mapping[str, Iterable[str]] | None) -> KeywordCategoryClassifier:
        """Build from a YAML-style {category: [keywords]} mapping (insertion order = priority)."""
        if not rules:
            return cls()
        return cls(rules=[(str(category), [str(kw) for kw in keywords]) for category, keywords in rules.items()])

    @property
    def categories(self) -> list[str]:
        return [category for category, _ in self._rules]

    def classify(self, service_name: str) -> str:
        name = (service_name or "").lower()
        if not name:
            return self.fallback
        for category, keywords in self._rules:
            if any(kw in name for kw in keywords):
                return category
        return self.fallback


class CachingClassifier:
    """Memoizing wrapper around another classifier.

    The cache dict is owned by the caller and passed in explicitly; nothing is
    cached at module level, so two computations never share entries unless the
    caller hands them the same dict.
    """

    def __init__(self, inner: ServiceClassifier, cache: dict[str, str] | None = None) -> None:
        self._inner = inner
        self.cache: dict[str, str] = cache if cache is not None else {}

    def classify(self, service_name: str) -> str:
        category = self.cache.get(service_name)
        if category is None:
            category = self._inner.classify(service_name)
            self.cache[service_name] = category
        return category
