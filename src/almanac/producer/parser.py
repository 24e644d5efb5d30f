"""
Parser — построчный разбор текстового альманаха

Формат:

    seeds: 79 14 55 13

    seed-to-soil map:
    50 98 2
    52 50 48

    soil-to-fertilizer map:
    ...

- строка семян 'seeds:' — ровно одна, до первой секции
- заголовок секции '<source>-to-<destination> map:'
- строка правила: три целых 'dest_start src_start length'
- пустые строки разделяют секции и игнорируются

Категории заголовков разрешаются через Category. Секции с одинаковым
назначением отклоняет ConversionTables.
"""

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from almanac.core.contracts import validate_almanac
from almanac.core.domain.category import Category
from almanac.core.domain.range_rule import RangeRule
from almanac.core.domain.table import ConversionTables, RuleTable
from almanac.core.errors import AlmanacParseError

logger = logging.getLogger(__name__)

SEEDS_PREFIX = "seeds:"
_HEADER_RE = re.compile(r"^(?P<source>[a-z]+)-to-(?P<destination>[a-z]+) map:$")


# =============================================================================
# DOCUMENT
# =============================================================================


@dataclass(frozen=True)
class AlmanacDocument:
    """Разобранный альманах: семена и структура таблиц."""

    seeds: Tuple[int, ...]
    tables: ConversionTables


# =============================================================================
# TEXT
# =============================================================================


def _parse_ints(tokens: List[str], line_no: int) -> List[int]:
    try:
        return [int(token) for token in tokens]
    except ValueError:
        raise AlmanacParseError(f"expected integers, got {' '.join(tokens)!r}", line_no) from None


def _parse_category(name: str, line_no: int) -> Category:
    try:
        return Category(name)
    except ValueError:
        raise AlmanacParseError(f"unknown category {name!r}", line_no) from None


def parse_almanac(text: str) -> AlmanacDocument:
    """
    Разбор текста альманаха.

    Args:
        text: Содержимое альманаха

    Returns:
        AlmanacDocument с семенами и таблицами

    Raises:
        AlmanacParseError: Нарушение грамматики (с номером строки)
        DuplicateTableError: Две секции для одной категории
    """
    seeds: Optional[List[int]] = None
    sections: List[Tuple[Category, Category, List[RangeRule]]] = []

    for line_no, raw_line in enumerate(text.splitlines(), start=1):
        line = raw_line.strip()
        if not line:
            continue

        if line.startswith(SEEDS_PREFIX):
            if seeds is not None:
                raise AlmanacParseError("duplicate seeds line", line_no)
            if sections:
                raise AlmanacParseError("seeds line must precede map sections", line_no)
            seeds = _parse_ints(line[len(SEEDS_PREFIX):].split(), line_no)
            continue

        header = _HEADER_RE.match(line)
        if header is not None:
            source = _parse_category(header.group("source"), line_no)
            destination = _parse_category(header.group("destination"), line_no)
            sections.append((source, destination, []))
            continue

        if not sections:
            raise AlmanacParseError(f"rule outside of a map section: {line!r}", line_no)

        values = _parse_ints(line.split(), line_no)
        if len(values) != 3:
            raise AlmanacParseError(f"expected 3 integers per rule, got {len(values)}", line_no)
        try:
            sections[-1][2].append(RangeRule.from_triple(values))
        except ValueError as e:
            raise AlmanacParseError(f"invalid rule {values}: {e}", line_no) from e

    if seeds is None:
        raise AlmanacParseError("missing seeds line")

    tables = ConversionTables(
        RuleTable(source=source, destination=destination, rules=tuple(rules))
        for source, destination, rules in sections
    )
    logger.debug("Parsed almanac: %d seeds, %d tables", len(seeds), len(tables))
    return AlmanacDocument(seeds=tuple(seeds), tables=tables)


def load_almanac(path: Union[str, Path]) -> AlmanacDocument:
    """
    Чтение и разбор файла альманаха (UTF-8).

    Raises:
        FileNotFoundError: Файла нет
        AlmanacParseError: Нарушение грамматики
    """
    path = Path(path)
    logger.debug("Loading almanac from %s", path)
    return parse_almanac(path.read_text(encoding="utf-8"))


# =============================================================================
# JSON
# =============================================================================


def almanac_from_dict(data: Dict[str, Any]) -> AlmanacDocument:
    """
    Построение альманаха из JSON-представления.

    Данные проверяются контрактом 'almanac' до построения.

    Raises:
        jsonschema.ValidationError: Данные не соответствуют схеме
        DuplicateTableError: Две таблицы для одной категории
    """
    validate_almanac(data)
    tables = ConversionTables(
        RuleTable(
            source=Category(table["source"]),
            destination=Category(table["destination"]),
            rules=tuple(RangeRule.from_triple(rule) for rule in table["rules"]),
        )
        for table in data["tables"]
    )
    return AlmanacDocument(seeds=tuple(data["seeds"]), tables=tables)


def almanac_to_dict(document: AlmanacDocument) -> Dict[str, Any]:
    """JSON-представление альманаха (обратное almanac_from_dict)."""
    return {
        "seeds": list(document.seeds),
        "tables": [
            {
                "source": table.source.value,
                "destination": table.destination.value,
                "rules": [list(rule.as_triple()) for rule in table.rules],
            }
            for table in document.tables
        ],
    }


def load_almanac_json(path: Union[str, Path]) -> AlmanacDocument:
    """Чтение JSON-файла альманаха."""
    with open(path, "r", encoding="utf-8") as f:
        return almanac_from_dict(json.load(f))
