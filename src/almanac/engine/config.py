"""Конфигурация ConversionEngine."""

from dataclasses import dataclass
from enum import Enum


class MissingTablePolicy(str, Enum):
    """Поведение при отсутствии таблицы для категории.

    FALLBACK — диагностика в лог и sentinel-значение с магнитудой 0
    RAISE — MissingTableError
    """

    FALLBACK = "FALLBACK"
    RAISE = "RAISE"


@dataclass(frozen=True)
class EngineConfig:
    """Конфигурация движка конверсии.

    По умолчанию движок разрешающий: пересекающиеся правила допустимы
    (срабатывает первое по списку), отсутствие таблицы не фатально.
    """

    missing_table_policy: MissingTablePolicy = MissingTablePolicy.FALLBACK

    # Strict-режимы проверяются один раз при создании движка
    reject_overlapping_rules: bool = False
    validate_chain_links: bool = False
