"""
Domain models and value objects.

Contains fundamental domain entities: Category, CategoryValue, RangeRule, tables.
"""

from almanac.core.domain.category import (
    DEFAULT_CHAIN,
    MAGNITUDE_MAX,
    MAGNITUDE_MIN,
    Category,
    CategoryChain,
    CategoryValue,
)
from almanac.core.domain.range_rule import RangeRule
from almanac.core.domain.table import ConversionTables, RuleTable

__all__ = [
    # Category module
    "MAGNITUDE_MIN",
    "MAGNITUDE_MAX",
    "Category",
    "CategoryChain",
    "CategoryValue",
    "DEFAULT_CHAIN",
    # Range rule
    "RangeRule",
    # Tables
    "RuleTable",
    "ConversionTables",
]
