"""
Engine — разрешение значений через цепочку таблиц.

- ConversionEngine: hop назад/вперёд, chain walk, семена
- EngineConfig: политика отсутствующих таблиц и strict-проверки
- intervals: разрешение целых диапазонов с слиянием
"""

from .config import EngineConfig, MissingTablePolicy
from .conversion import ConversionEngine
from .intervals import ValueRange, apply_table_forward, merge_ranges, seed_ranges

__all__ = [
    "ConversionEngine",
    "EngineConfig",
    "MissingTablePolicy",
    "ValueRange",
    "apply_table_forward",
    "merge_ranges",
    "seed_ranges",
]
