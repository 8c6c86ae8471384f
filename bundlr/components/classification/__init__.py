"""
Classification package.
"""

from .category_classifier_comp import (
    DEFAULT_CATEGORY_RULES,
    FALLBACK_CATEGORY,
    CachingClassifier,
    KeywordCategoryClassifier,
    ServiceClassifier,
)

__all__ = [
    "DEFAULT_CATEGORY_RULES",
    "FALLBACK_CATEGORY",
    "CachingClassifier",
    "KeywordCategoryClassifier",
    "ServiceClassifier",
]
