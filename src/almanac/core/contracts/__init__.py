"""
Contract Validation Module

JSON Schema контракт для JSON-представления альманаха.
"""

from .validators import ALMANAC_SCHEMA, AlmanacValidator, SchemaLoader, validate_almanac

__all__ = [
    "ALMANAC_SCHEMA",
    "SchemaLoader",
    "AlmanacValidator",
    "validate_almanac",
]
