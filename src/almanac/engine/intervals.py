"""
Intervals — разрешение целых диапазонов магнитуд

Вместо поэлементного обхода каждый полуоткрытый диапазон [start, end)
режется по окнам правил таблицы в порядке списка (первое совпадение
выигрывает, как и для одиночных значений). Непокрытые куски проходят
с identity. После каждого шага соседние и пересекающиеся диапазоны
сливаются.
"""

from typing import Iterable, List, Sequence

from pydantic import BaseModel, Field

from almanac.core.domain.category import MAGNITUDE_MAX, MAGNITUDE_MIN
from almanac.core.domain.table import RuleTable


class ValueRange(BaseModel):
    """Полуоткрытый диапазон магнитуд [start, start + length)."""

    start: int = Field(..., ge=MAGNITUDE_MIN, le=MAGNITUDE_MAX)
    length: int = Field(..., ge=0, le=MAGNITUDE_MAX)

    model_config = {"frozen": True}

    @classmethod
    def from_bounds(cls, start: int, end: int) -> "ValueRange":
        return cls(start=start, length=max(end - start, 0))

    @property
    def end(self) -> int:
        return self.start + self.length

    @property
    def is_empty(self) -> bool:
        return self.length == 0

    def __contains__(self, magnitude: int) -> bool:
        return self.start <= magnitude < self.end


def seed_ranges(seeds: Sequence[int]) -> List[ValueRange]:
    """
    Пары (start, length) из плоского списка семян.

    Raises:
        ValueError: При нечётной длине списка
    """
    if len(seeds) % 2:
        raise ValueError(f"Seed ranges need an even number of values, got {len(seeds)}")
    return [ValueRange(start=seeds[i], length=seeds[i + 1]) for i in range(0, len(seeds), 2)]


def merge_ranges(ranges: Iterable[ValueRange]) -> List[ValueRange]:
    """Сортировка и слияние пересекающихся/смежных диапазонов; пустые отбрасываются."""
    merged: List[ValueRange] = []
    for current in sorted((r for r in ranges if not r.is_empty), key=lambda r: r.start):
        if merged and current.start <= merged[-1].end:
            last = merged[-1]
            merged[-1] = ValueRange.from_bounds(last.start, max(last.end, current.end))
        else:
            merged.append(current)
    return merged


def apply_table_forward(ranges: Iterable[ValueRange], table: RuleTable) -> List[ValueRange]:
    """
    Отображение диапазонов источника в диапазоны назначения.

    Args:
        ranges: Диапазоны в категории table.source
        table: Таблица перехода

    Returns:
        Слитые диапазоны в категории table.destination
    """
    pending = [r for r in ranges if not r.is_empty]
    mapped: List[ValueRange] = []

    for rule in table.rules:
        if rule.length == 0:
            continue
        remaining: List[ValueRange] = []
        for piece in pending:
            lo = max(piece.start, rule.src_start)
            hi = min(piece.end, rule.src_end)
            if lo >= hi:
                remaining.append(piece)
                continue
            mapped.append(ValueRange.from_bounds(rule.to_destination(lo), rule.to_destination(hi)))
            if piece.start < lo:
                remaining.append(ValueRange.from_bounds(piece.start, lo))
            if hi < piece.end:
                remaining.append(ValueRange.from_bounds(hi, piece.end))
        pending = remaining

    # Непокрытые куски проходят с identity
    return merge_ranges(mapped + pending)
