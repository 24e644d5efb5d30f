"""
RangeRule — правило смещения для одного непрерывного окна

Контракт: любая магнитуда s источника с src_start <= s < src_start + length
отображается в dest_start + (s - src_start) назначения.

Обратное направление (назначение → источник) симметрично:
d ∈ [dest_start, dest_start + length) → src_start + (d - dest_start)
"""

from typing import Sequence

from pydantic import BaseModel, Field

from almanac.core.domain.category import MAGNITUDE_MAX, MAGNITUDE_MIN


class RangeRule(BaseModel):
    """
    Тройка (dest_start, src_start, length).

    Immutable модель (frozen=True). Пустое окно (length=0) допустимо
    и никогда не срабатывает.
    """

    dest_start: int = Field(..., ge=MAGNITUDE_MIN, le=MAGNITUDE_MAX, description="Начало окна назначения")
    src_start: int = Field(..., ge=MAGNITUDE_MIN, le=MAGNITUDE_MAX, description="Начало окна источника")
    length: int = Field(..., ge=0, le=MAGNITUDE_MAX, description="Длина окна")

    model_config = {"frozen": True}

    @classmethod
    def from_triple(cls, triple: Sequence[int]) -> "RangeRule":
        """
        Построение из тройки (dest_start, src_start, length).

        Raises:
            ValueError: Если элементов не три
        """
        if len(triple) != 3:
            raise ValueError(f"Range rule needs exactly 3 integers, got {len(triple)}: {list(triple)}")
        dest_start, src_start, length = triple
        return cls(dest_start=dest_start, src_start=src_start, length=length)

    def as_triple(self) -> tuple[int, int, int]:
        return (self.dest_start, self.src_start, self.length)

    @property
    def dest_end(self) -> int:
        """Конец окна назначения (исключительно)."""
        return self.dest_start + self.length

    @property
    def src_end(self) -> int:
        """Конец окна источника (исключительно)."""
        return self.src_start + self.length

    @property
    def offset(self) -> int:
        """Смещение источник → назначение."""
        return self.dest_start - self.src_start

    # -------------------------------------------------------------------------
    # Назначение → источник (обход цепочки назад)
    # -------------------------------------------------------------------------

    def contains_destination(self, magnitude: int) -> bool:
        return self.dest_start <= magnitude < self.dest_end

    def to_source(self, magnitude: int) -> int:
        """Магнитуда источника для магнитуды назначения (без проверки окна)."""
        return self.src_start + (magnitude - self.dest_start)

    # -------------------------------------------------------------------------
    # Источник → назначение (обход цепочки вперёд)
    # -------------------------------------------------------------------------

    def contains_source(self, magnitude: int) -> bool:
        return self.src_start <= magnitude < self.src_end

    def to_destination(self, magnitude: int) -> int:
        """Магнитуда назначения для магнитуды источника (без проверки окна)."""
        return self.dest_start + (magnitude - self.src_start)

    # -------------------------------------------------------------------------
    # Пересечения окон
    # -------------------------------------------------------------------------

    def overlaps_destination(self, other: "RangeRule") -> bool:
        if self.length == 0 or other.length == 0:
            return False
        return self.dest_start < other.dest_end and other.dest_start < self.dest_end

    def overlaps_source(self, other: "RangeRule") -> bool:
        if self.length == 0 or other.length == 0:
            return False
        return self.src_start < other.src_end and other.src_start < self.src_end
