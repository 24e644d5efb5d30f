"""
Almanac — piecewise-linear remapping between chained categories.

Пакет разрешает значение категории (seed, soil, ..., location) через цепочку
таблиц Range Rule в обе стороны: назад (location → seed) и вперёд.
"""

__version__ = "0.1.0"
