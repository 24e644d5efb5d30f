"""Conversion Engine — разрешение значений через цепочку таблиц

Атомарная операция — hop: одно применение таблицы, перемещающее значение
на одну категорию по цепочке.

Обход назад (resolve_hop): значение категории C разрешается таблицей, у
которой C — категория назначения; первое правило, чьё окно назначения
содержит магнитуду, даёт магнитуду источника. Нет совпадения → identity.

Обход вперёд (resolve_forward_hop) симметричен: таблица ищется по
категории источника.

Chain walk — повторение hop ровно distance(start, target) раз.

Отсутствие таблицы:
- FALLBACK: warning в лог, sentinel с магнитудой 0 (в первой категории
  цепочки при обходе назад, в последней при обходе вперёд)
- RAISE: MissingTableError
"""

import logging
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from almanac.core.domain.category import DEFAULT_CHAIN, Category, CategoryChain, CategoryValue
from almanac.core.domain.range_rule import RangeRule
from almanac.core.domain.table import ConversionTables, RuleTable
from almanac.core.errors import MissingTableError
from almanac.engine.config import EngineConfig, MissingTablePolicy
from almanac.engine.intervals import ValueRange, apply_table_forward, merge_ranges

logger = logging.getLogger(__name__)


class ConversionEngine:
    """Движок конверсии поверх read-only структуры таблиц.

    Внутреннего изменяемого состояния нет: один экземпляр можно
    использовать из нескольких потоков без блокировок.
    """

    def __init__(
        self,
        tables: ConversionTables,
        chain: CategoryChain = DEFAULT_CHAIN,
        config: Optional[EngineConfig] = None,
    ):
        """
        Args:
            tables: Структура таблиц (не изменяется движком)
            chain: Цепочка категорий (default: восемь категорий)
            config: Конфигурация (default: EngineConfig())

        Raises:
            OverlappingRulesError: reject_overlapping_rules и правила пересекаются
            ChainLinkError: validate_chain_links и таблица не связывает соседей
        """
        self.tables = tables
        self.chain = chain
        self.config = config or EngineConfig()

        if self.config.validate_chain_links:
            tables.validate_against(chain)
        if self.config.reject_overlapping_rules:
            tables.validate_no_overlaps()

        logger.debug("Conversion engine ready: %r over %r", tables, chain)

    # =========================================================================
    # TABLE LOOKUP
    # =========================================================================

    def find_table(
        self, queried: Union[CategoryValue, Category]
    ) -> Optional[Tuple[RangeRule, ...]]:
        """Правила таблицы, чья категория назначения совпадает с queried.

        Сравнивается только категория; магнитуда игнорируется.
        """
        category = queried.category if isinstance(queried, CategoryValue) else queried
        return self.tables.find_table(category)

    # =========================================================================
    # HOP RESOLUTION
    # =========================================================================

    def resolve_hop(self, value: CategoryValue) -> CategoryValue:
        """Разрешение значения на одну категорию назад.

        Args:
            value: Значение категории C (не первой в цепочке)

        Returns:
            Новое значение в категории-предшественнике C

        Raises:
            ChainBoundaryError: value в первой категории цепочки
            MissingTableError: нет таблицы и policy=RAISE
        """
        # Первая категория не имеет предшественника независимо от таблиц
        self.chain.predecessor(value.category)

        rules = self.find_table(value)
        if rules is None:
            return self._missing_table(value, self.chain.first, "predecessor")

        magnitude = value.get_magnitude()
        for rule in rules:
            if rule.contains_destination(magnitude):
                return value.step_back(rule.to_source(magnitude), self.chain)

        return value.step_back(None, self.chain)

    def resolve_forward_hop(self, value: CategoryValue) -> CategoryValue:
        """Разрешение значения на одну категорию вперёд.

        Raises:
            ChainBoundaryError: value в последней категории цепочки
            MissingTableError: нет таблицы и policy=RAISE
        """
        following = self.chain.successor(value.category)

        # Таблица с пропуском категории (source → не-преемник) в обходе вперёд не участвует
        table = self.tables.find_table_from(value.category, following)
        if table is None:
            return self._missing_table(value, self.chain.last, "successor")

        rule = table.first_source_match(value.get_magnitude())
        if rule is None:
            return value.step_forward(None, self.chain)
        return value.step_forward(rule.to_destination(value.get_magnitude()), self.chain)

    def _missing_table(self, value: CategoryValue, sentinel: Category, direction: str) -> CategoryValue:
        if self.config.missing_table_policy == MissingTablePolicy.RAISE:
            raise MissingTableError(
                f"No {direction} table for category {value.category.value!r} (value {value})"
            )

        logger.warning(
            "Unable to find %s table for category %r (value %s); falling back to %s(0)",
            direction,
            value.category.value,
            value,
            sentinel.value,
        )
        return CategoryValue(category=sentinel, magnitude=0)

    # =========================================================================
    # CHAIN WALK
    # =========================================================================

    def trace_back(
        self, value: CategoryValue, target: Optional[Category] = None
    ) -> List[CategoryValue]:
        """Все значения обхода назад от value до target включительно.

        При полных таблицах выполняет ровно distance(target, value.category)
        hop'ов; sentinel отсутствующей таблицы завершает обход досрочно.

        Args:
            value: Начальное значение
            target: Конечная категория (default: первая категория цепочки)

        Raises:
            ValueError: target стоит в цепочке после value.category
        """
        target = self.chain.first if target is None else target
        hops = self.chain.distance(target, value.category)
        if hops < 0:
            raise ValueError(
                f"Cannot walk back from {value.category.value!r} to later category {target.value!r}"
            )

        trail = [value]
        for _ in range(hops):
            # Sentinel отсутствующей таблицы может перескочить target
            if self.chain.distance(target, trail[-1].category) <= 0:
                break
            trail.append(self.resolve_hop(trail[-1]))
        return trail

    def walk_back(self, value: CategoryValue, target: Optional[Category] = None) -> CategoryValue:
        """Результат обхода назад до target (default: первая категория)."""
        return self.trace_back(value, target)[-1]

    def trace_forward(
        self, value: CategoryValue, target: Optional[Category] = None
    ) -> List[CategoryValue]:
        """Все значения обхода вперёд от value до target включительно.

        Raises:
            ValueError: target стоит в цепочке раньше value.category
        """
        target = self.chain.last if target is None else target
        hops = self.chain.distance(value.category, target)
        if hops < 0:
            raise ValueError(
                f"Cannot walk forward from {value.category.value!r} to earlier category {target.value!r}"
            )

        trail = [value]
        for _ in range(hops):
            if self.chain.distance(trail[-1].category, target) <= 0:
                break
            trail.append(self.resolve_forward_hop(trail[-1]))
        return trail

    def walk_forward(self, value: CategoryValue, target: Optional[Category] = None) -> CategoryValue:
        """Результат обхода вперёд до target (default: последняя категория)."""
        return self.trace_forward(value, target)[-1]

    # =========================================================================
    # SEEDS
    # =========================================================================

    def resolve_seed(self, seed: int, target: Optional[Category] = None) -> CategoryValue:
        """Сырое целое → значение первой категории → обход вперёд."""
        return self.walk_forward(CategoryValue(category=self.chain.first, magnitude=seed), target)

    def resolve_seeds(self, seeds: Iterable[int]) -> List[CategoryValue]:
        return [self.resolve_seed(seed) for seed in seeds]

    def lowest_terminal(self, seeds: Iterable[int]) -> Optional[CategoryValue]:
        """Наименьшее значение последней категории среди семян (None для пустого списка)."""
        resolved = self.resolve_seeds(seeds)
        if not resolved:
            return None
        return min(resolved, key=lambda v: v.magnitude)

    # =========================================================================
    # RANGES
    # =========================================================================

    def resolve_ranges_forward(
        self, ranges: Sequence[ValueRange], start: Optional[Category] = None
    ) -> List[ValueRange]:
        """Диапазоны категории start → слитые диапазоны последней категории.

        Отсутствующая таблица обрабатывается по missing_table_policy:
        в режиме FALLBACK получается единственный диапазон sentinel [0, 1).
        Пустой вход даёт пустой результат.
        """
        category = self.chain.first if start is None else start
        current = merge_ranges(ranges)

        while category != self.chain.last:
            # Пустой вход не порождает sentinel
            if not current:
                return current

            following = self.chain.successor(category)
            table: Optional[RuleTable] = self.tables.find_table_from(category, following)
            if table is None:
                sentinel = self._missing_table(
                    CategoryValue(category=category, magnitude=current[0].start),
                    self.chain.last,
                    "successor",
                )
                return [ValueRange(start=sentinel.magnitude, length=1)]

            current = apply_table_forward(current, table)
            logger.debug("Resolved %s -> %s: %d ranges", category.value, following.value, len(current))
            category = following

        return current

    def lowest_terminal_for_ranges(self, ranges: Sequence[ValueRange]) -> Optional[int]:
        """Наименьшая магнитуда последней категории, достижимая из диапазонов."""
        resolved = self.resolve_ranges_forward(ranges)
        if not resolved:
            return None
        return resolved[0].start
