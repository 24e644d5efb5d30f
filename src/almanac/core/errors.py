"""
Errors — иерархия исключений almanac.

Две категории отказов при разрешении:
- ChainBoundaryError — фатальное нарушение предусловия (нет предшественника)
- MissingTableError — отсутствует таблица (только в strict режиме)

Остальные исключения возникают при построении структуры таблиц.
"""

from typing import Optional


class AlmanacError(Exception):
    """Базовое исключение пакета."""


class ChainBoundaryError(AlmanacError, ValueError):
    """Шаг за пределы цепочки категорий (назад от первой, вперёд от последней)."""


class DuplicateTableError(AlmanacError, ValueError):
    """Две таблицы претендуют на одну категорию."""


class MissingTableError(AlmanacError, LookupError):
    """Для категории нет таблицы конверсии."""


class OverlappingRulesError(AlmanacError, ValueError):
    """Окна Range Rule внутри одной таблицы пересекаются."""


class ChainLinkError(AlmanacError, ValueError):
    """Источник таблицы не является предшественником её назначения в цепочке."""


class AlmanacParseError(AlmanacError, ValueError):
    """Ошибка разбора текстового альманаха."""

    def __init__(self, message: str, line_no: Optional[int] = None):
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)
