"""Tests for category_classifier_comp.py."""

from __future__ import annotations

import pytest

from bundlr.components.classification.category_classifier_comp import (
    FALLBACK_CATEGORY,
    CachingClassifier,
    KeywordCategoryClassifier,
    ServiceClassifier,
)


class TestKeywordCategoryClassifier:
    """Tests for the default keyword rules."""

    @pytest.mark.parametrize(
        ("service_name", "expected"),
        [
            ("Women's Haircut", "Haircut"),
            ("Full Balayage", "Blonding"),
            ("Partial Highlight", "Blonding"),
            ("Root Touch-Up", "Color"),
            ("Gloss", "Color"),
            ("Tape-In Extensions", "Extensions"),
            ("New Client Consultation", "Consultation"),
            ("Blowout", "Styling"),
            ("Olaplex Treatment", "Treatment"),
            ("Deep Conditioning Add-On", "Extras"),
        ],
    )
    def test_default_rules(self, classifier, service_name, expected):
        assert classifier.classify(service_name) == expected

    def test_match_is_case_insensitive(self, classifier):
        assert classifier.classify("BALAYAGE") == classifier.classify("balayage") == "Blonding"

    def test_unknown_service_falls_back(self, classifier):
        assert classifier.classify("Gift Card") == FALLBACK_CATEGORY

    def test_empty_name_falls_back(self, classifier):
        assert classifier.classify("") == FALLBACK_CATEGORY

    def test_first_matching_rule_wins(self, classifier):
        """Blonding is listed before Haircut, so a combined name is Blonding."""
        assert classifier.classify("Balayage + Haircut") == "Blonding"

    def test_satisfies_protocol(self, classifier):
        assert isinstance(classifier, ServiceClassifier)


class TestFromConfig:
    """Tests for KeywordCategoryClassifier.from_config()."""

    def test_empty_mapping_uses_defaults(self):
        assert KeywordCategoryClassifier.from_config({}).categories == KeywordCategoryClassifier().categories

    def test_none_uses_defaults(self):
        assert KeywordCategoryClassifier.from_config(None).classify("Haircut") == "Haircut"

    def test_mapping_order_is_priority(self):
        clf = KeywordCategoryClassifier.from_config({"Men": ["men's", "beard"], "Haircut": ["cut"]})

        assert clf.categories == ["Men", "Haircut"]
        assert clf.classify("Men's Cut") == "Men"
        assert clf.classify("Kids Cut") == "Haircut"
        assert clf.classify("Balayage") == FALLBACK_CATEGORY


class TestCachingClassifier:
    """Tests for CachingClassifier."""

    def test_inner_called_once_per_name(self):
        calls: list[str] = []

        class CountingClassifier:
            def classify(self, service_name: str) -> str:
                calls.append(service_name)
                return "Color"

        cached = CachingClassifier(CountingClassifier())
        for _ in range(3):
            assert cached.classify("Gloss") == "Color"

        assert calls == ["Gloss"]
        assert cached.cache == {"Gloss": "Color"}

    def test_caches_are_not_shared_between_instances(self, classifier):
        first = CachingClassifier(classifier)
        second = CachingClassifier(classifier)

        first.classify("Haircut")

        assert second.cache == {}

    def test_uses_caller_owned_dict(self, classifier):
        cache: dict[str, str] = {}
        CachingClassifier(classifier, cache).classify("Blowout")
        assert cache == {"Blowout": "Styling"}
