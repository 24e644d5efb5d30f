"""
Category — категории цепочки и значения, помеченные категорией

Цепочка категорий фиксирована и линейна:
seed → soil → fertilizer → water → light → temperature → humidity → location

Порядок не зашит в CategoryValue: он передаётся явно через CategoryChain,
поэтому тесты могут подставлять укороченную синтетическую цепочку.

Immutable Pydantic модель: конверсия создаёт новый экземпляр.
"""

from enum import Enum
from typing import Final, Iterable, Iterator, Optional, Tuple

from pydantic import BaseModel, Field

from almanac.core.errors import ChainBoundaryError


# =============================================================================
# CONSTANTS
# =============================================================================
# Магнитуда: знаковое 64-битное целое
MAGNITUDE_MIN: Final[int] = -(2**63)
MAGNITUDE_MAX: Final[int] = 2**63 - 1


# =============================================================================
# ENUMS
# =============================================================================


class Category(str, Enum):
    """Категория (стадия) цепочки конверсии.

    Значения совпадают с именами в заголовках секций альманаха
    (например, 'seed-to-soil map:').
    """

    SEED = "seed"
    SOIL = "soil"
    FERTILIZER = "fertilizer"
    WATER = "water"
    LIGHT = "light"
    TEMPERATURE = "temperature"
    HUMIDITY = "humidity"
    LOCATION = "location"


# =============================================================================
# CHAIN
# =============================================================================


class CategoryChain:
    """
    Упорядоченная цепочка категорий.

    Неизменяемая последовательность уникальных категорий длиной >= 2.
    Определяет предшественника/преемника каждой категории.
    """

    __slots__ = ("_categories", "_positions")

    def __init__(self, categories: Iterable[Category]):
        """
        Args:
            categories: Категории в порядке цепочки (от первой к последней)

        Raises:
            ValueError: Если категорий меньше двух или есть повторы
        """
        ordered = tuple(Category(c) for c in categories)
        if len(ordered) < 2:
            raise ValueError(f"Category chain needs at least 2 categories, got {len(ordered)}")

        positions = {category: idx for idx, category in enumerate(ordered)}
        if len(positions) != len(ordered):
            raise ValueError(f"Category chain contains duplicates: {[c.value for c in ordered]}")

        self._categories: Tuple[Category, ...] = ordered
        self._positions = positions

    @property
    def categories(self) -> Tuple[Category, ...]:
        return self._categories

    @property
    def first(self) -> Category:
        return self._categories[0]

    @property
    def last(self) -> Category:
        return self._categories[-1]

    def __len__(self) -> int:
        return len(self._categories)

    def __iter__(self) -> Iterator[Category]:
        return iter(self._categories)

    def __contains__(self, category: object) -> bool:
        return category in self._positions

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategoryChain):
            return NotImplemented
        return self._categories == other._categories

    def __hash__(self) -> int:
        return hash(self._categories)

    def __repr__(self) -> str:
        return f"CategoryChain({' -> '.join(c.value for c in self._categories)})"

    def index(self, category: Category) -> int:
        """
        Позиция категории в цепочке.

        Raises:
            ChainBoundaryError: Если категория не входит в цепочку
        """
        try:
            return self._positions[category]
        except KeyError:
            raise ChainBoundaryError(f"Category {category!r} is not part of {self!r}") from None

    def predecessor(self, category: Category) -> Category:
        """
        Предыдущая категория цепочки.

        Raises:
            ChainBoundaryError: Для первой категории (предшественника нет)
        """
        idx = self.index(category)
        if idx == 0:
            raise ChainBoundaryError(
                f"Cannot step back from {category.value!r}: it is the first category of the chain"
            )
        return self._categories[idx - 1]

    def successor(self, category: Category) -> Category:
        """
        Следующая категория цепочки.

        Raises:
            ChainBoundaryError: Для последней категории
        """
        idx = self.index(category)
        if idx == len(self._categories) - 1:
            raise ChainBoundaryError(
                f"Cannot step forward from {category.value!r}: it is the last category of the chain"
            )
        return self._categories[idx + 1]

    def distance(self, start: Category, end: Category) -> int:
        """Число шагов от start до end (отрицательное, если end раньше start)."""
        return self.index(end) - self.index(start)


# Эталонная цепочка из восьми категорий
DEFAULT_CHAIN: Final[CategoryChain] = CategoryChain(Category)


# =============================================================================
# CATEGORY VALUE
# =============================================================================


class CategoryValue(BaseModel):
    """
    Целочисленная магнитуда, помеченная категорией.

    Immutable модель (frozen=True). Категория — единственный дискриминант:
    никакого дополнительного состояния у категорий нет.
    """

    category: Category = Field(..., description="Категория значения")
    magnitude: int = Field(
        ..., ge=MAGNITUDE_MIN, le=MAGNITUDE_MAX, description="Магнитуда (int64)"
    )

    model_config = {"frozen": True}

    def __str__(self) -> str:
        return f"{self.category.value}({self.magnitude})"

    def get_magnitude(self) -> int:
        """Магнитуда независимо от категории (тотальная функция)."""
        return self.magnitude

    def same_category(self, other: "CategoryValue | Category") -> bool:
        """Сравнение только по категории, магнитуда игнорируется."""
        if isinstance(other, CategoryValue):
            return self.category == other.category
        return self.category == other

    def step_back(
        self,
        new_magnitude: Optional[int] = None,
        chain: CategoryChain = DEFAULT_CHAIN,
    ) -> "CategoryValue":
        """
        Новое значение в предыдущей категории цепочки.

        Args:
            new_magnitude: Магнитуда результата; None → та же магнитуда (identity)
            chain: Цепочка категорий

        Returns:
            Новый CategoryValue на одну категорию раньше

        Raises:
            ChainBoundaryError: Если категория первая в цепочке
        """
        previous = chain.predecessor(self.category)
        return CategoryValue(
            category=previous,
            magnitude=self.magnitude if new_magnitude is None else new_magnitude,
        )

    def step_forward(
        self,
        new_magnitude: Optional[int] = None,
        chain: CategoryChain = DEFAULT_CHAIN,
    ) -> "CategoryValue":
        """
        Новое значение в следующей категории цепочки.

        Raises:
            ChainBoundaryError: Если категория последняя в цепочке
        """
        following = chain.successor(self.category)
        return CategoryValue(
            category=following,
            magnitude=self.magnitude if new_magnitude is None else new_magnitude,
        )
