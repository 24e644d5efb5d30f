"""
Table — таблицы Range Rule между соседними категориями

RuleTable: все правила одного перехода (source → destination) в порядке
поставщика. Порядок значим: при пересечении окон срабатывает первое.

ConversionTables: read-only структура, индексированная напрямую по категории
назначения. Поиск таблицы — O(1); вторая таблица для той же категории
назначения отклоняется при построении. Источник в ключе может повторяться
(поставщик вправе связать категории с пропуском); неоднозначность проверяется
только при обходе вперёд.
"""

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from pydantic import BaseModel, Field

from almanac.core.domain.category import Category, CategoryChain
from almanac.core.domain.range_rule import RangeRule
from almanac.core.errors import ChainLinkError, DuplicateTableError, OverlappingRulesError


# =============================================================================
# RULE TABLE
# =============================================================================


class RuleTable(BaseModel):
    """
    Таблица одного перехода source → destination.

    Immutable модель (frozen=True). Правила не обязаны быть отсортированы
    или непересекающимися.
    """

    source: Category = Field(..., description="Категория источника")
    destination: Category = Field(..., description="Категория назначения")
    rules: Tuple[RangeRule, ...] = Field(default=(), description="Правила в порядке поставщика")

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"{self.source.value}-to-{self.destination.value} ({len(self.rules)} rules)"

    def first_destination_match(self, magnitude: int) -> Optional[RangeRule]:
        """Первое правило, чьё окно назначения содержит магнитуду."""
        for rule in self.rules:
            if rule.contains_destination(magnitude):
                return rule
        return None

    def first_source_match(self, magnitude: int) -> Optional[RangeRule]:
        """Первое правило, чьё окно источника содержит магнитуду."""
        for rule in self.rules:
            if rule.contains_source(magnitude):
                return rule
        return None

    def destination_overlaps(self) -> List[Tuple[int, int]]:
        """Пары индексов правил с пересекающимися окнами назначения."""
        return [
            (i, j)
            for i, left in enumerate(self.rules)
            for j in range(i + 1, len(self.rules))
            if left.overlaps_destination(self.rules[j])
        ]

    def source_overlaps(self) -> List[Tuple[int, int]]:
        """Пары индексов правил с пересекающимися окнами источника."""
        return [
            (i, j)
            for i, left in enumerate(self.rules)
            for j in range(i + 1, len(self.rules))
            if left.overlaps_source(self.rules[j])
        ]


# =============================================================================
# CONVERSION TABLES
# =============================================================================


class ConversionTables:
    """
    Структура таблиц, индексированная по категории назначения.

    Строится один раз поставщиком, далее только читается: конкурентные
    читатели не требуют блокировок.
    """

    def __init__(self, tables: Iterable[RuleTable] = ()):
        """
        Args:
            tables: Таблицы переходов

        Raises:
            DuplicateTableError: Если две таблицы имеют одну категорию назначения
        """
        by_destination: Dict[Category, RuleTable] = {}
        # Источник в ключе не уникален: поставщик может связать категории с пропуском
        by_source: Dict[Category, List[RuleTable]] = {}

        for table in tables:
            if table.destination in by_destination:
                raise DuplicateTableError(
                    f"Duplicate table for destination {table.destination.value!r}: "
                    f"{by_destination[table.destination]} and {table}"
                )
            by_destination[table.destination] = table
            by_source.setdefault(table.source, []).append(table)

        self._by_destination = by_destination
        self._by_source = by_source

    @classmethod
    def from_triples(
        cls, tables: Dict[Tuple[Category, Category], Iterable[Iterable[int]]]
    ) -> "ConversionTables":
        """
        Построение из отображения (source, destination) → тройки.

        Удобно для тестов и для поставщиков, отдающих «сырые» тройки.
        """
        return cls(
            RuleTable(
                source=source,
                destination=destination,
                rules=tuple(RangeRule.from_triple(tuple(t)) for t in triples),
            )
            for (source, destination), triples in tables.items()
        )

    def __len__(self) -> int:
        return len(self._by_destination)

    def __iter__(self) -> Iterator[RuleTable]:
        return iter(self._by_destination.values())

    def __contains__(self, destination: object) -> bool:
        return destination in self._by_destination

    def __repr__(self) -> str:
        return f"ConversionTables([{', '.join(str(t) for t in self)}])"

    def tables(self) -> Tuple[RuleTable, ...]:
        return tuple(self._by_destination.values())

    def find_table(self, destination: Category) -> Optional[Tuple[RangeRule, ...]]:
        """
        Правила таблицы, у которой категория назначения = destination.

        Returns:
            Кортеж правил или None, если таблицы нет
        """
        table = self._by_destination.get(destination)
        return table.rules if table is not None else None

    def get_table(self, destination: Category) -> Optional[RuleTable]:
        return self._by_destination.get(destination)

    def find_table_from(
        self, source: Category, destination: Optional[Category] = None
    ) -> Optional[RuleTable]:
        """
        Таблица, у которой категория источника = source (обход вперёд).

        Args:
            source: Категория источника
            destination: Если задана, учитываются только таблицы source → destination

        Returns:
            Таблица или None, если подходящей нет

        Raises:
            DuplicateTableError: Подходящих таблиц больше одной
        """
        candidates = [
            table
            for table in self._by_source.get(source, ())
            if destination is None or table.destination == destination
        ]
        if len(candidates) > 1:
            raise DuplicateTableError(
                f"Ambiguous tables for source {source.value!r}: "
                f"{', '.join(str(t) for t in candidates)}"
            )
        return candidates[0] if candidates else None

    # -------------------------------------------------------------------------
    # Валидация
    # -------------------------------------------------------------------------

    def validate_against(self, chain: CategoryChain) -> None:
        """
        Проверка, что источник каждой таблицы — предшественник её назначения.

        Raises:
            ChainLinkError: Для первой несогласованной таблицы
        """
        for table in self:
            if table.destination not in chain or table.source not in chain:
                raise ChainLinkError(f"Table {table} uses categories outside {chain!r}")
            if chain.distance(table.source, table.destination) != 1:
                raise ChainLinkError(
                    f"Table {table} does not link adjacent categories of {chain!r}"
                )

    def validate_no_overlaps(self) -> None:
        """
        Проверка отсутствия пересечений окон внутри каждой таблицы.

        Raises:
            OverlappingRulesError: Для первой таблицы с пересечениями
        """
        for table in self:
            overlaps = table.destination_overlaps() or table.source_overlaps()
            if overlaps:
                i, j = overlaps[0]
                raise OverlappingRulesError(
                    f"Table {table}: rules #{i} {table.rules[i].as_triple()} and "
                    f"#{j} {table.rules[j].as_triple()} overlap"
                )
