"""
Producer — источники альманаха (текст, JSON).

Отдаёт ядру уже разобранные семена и структуру таблиц.
"""

from .parser import (
    AlmanacDocument,
    almanac_from_dict,
    almanac_to_dict,
    load_almanac,
    load_almanac_json,
    parse_almanac,
)

__all__ = [
    "AlmanacDocument",
    "parse_almanac",
    "load_almanac",
    "almanac_from_dict",
    "almanac_to_dict",
    "load_almanac_json",
]
