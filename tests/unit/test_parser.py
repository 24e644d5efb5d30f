"""
Тесты для producer: текстовый альманах и JSON-представление

Проверяет:
1. Разбор эталонного альманаха
2. Ошибки грамматики с номером строки
3. Дубликаты секций
4. JSON-представление через контракт
"""

import json
from pathlib import Path

import pytest
from jsonschema import ValidationError

from almanac.core.domain import Category
from almanac.core.errors import AlmanacParseError, DuplicateTableError
from almanac.producer import (
    AlmanacDocument,
    almanac_from_dict,
    almanac_to_dict,
    load_almanac,
    load_almanac_json,
    parse_almanac,
)


class TestParseAlmanac:
    """Тесты для parse_almanac"""

    def test_seeds(self, example_document: AlmanacDocument) -> None:
        assert example_document.seeds == (79, 14, 55, 13)

    def test_tables(self, example_document: AlmanacDocument) -> None:
        tables = example_document.tables
        assert len(tables) == 7
        assert [(t.source, t.destination) for t in tables] == [
            (Category.SEED, Category.SOIL),
            (Category.SOIL, Category.FERTILIZER),
            (Category.FERTILIZER, Category.WATER),
            (Category.WATER, Category.LIGHT),
            (Category.LIGHT, Category.TEMPERATURE),
            (Category.TEMPERATURE, Category.HUMIDITY),
            (Category.HUMIDITY, Category.LOCATION),
        ]

    def test_rules_keep_order(self, example_document: AlmanacDocument) -> None:
        rules = example_document.tables.find_table(Category.WATER)
        assert rules is not None
        assert [r.as_triple() for r in rules] == [(49, 53, 8), (0, 11, 42), (42, 0, 7), (57, 7, 4)]

    def test_whitespace_tolerated(self) -> None:
        doc = parse_almanac("  seeds:  1   2 \n\n seed-to-soil map:  \n 10  0  5 \n\n\n")
        assert doc.seeds == (1, 2)
        assert doc.tables.find_table(Category.SOIL)[0].as_triple() == (10, 0, 5)

    def test_empty_section(self) -> None:
        doc = parse_almanac("seeds: 1\n\nseed-to-soil map:\n")
        assert doc.tables.find_table(Category.SOIL) == ()

    def test_missing_seeds(self) -> None:
        with pytest.raises(AlmanacParseError, match="missing seeds"):
            parse_almanac("seed-to-soil map:\n1 2 3\n")

    def test_duplicate_seeds(self) -> None:
        with pytest.raises(AlmanacParseError) as exc_info:
            parse_almanac("seeds: 1\nseeds: 2\n")
        assert exc_info.value.line_no == 2

    def test_seeds_after_sections(self) -> None:
        with pytest.raises(AlmanacParseError):
            parse_almanac("seed-to-soil map:\n1 2 3\nseeds: 1\n")

    def test_unknown_category(self) -> None:
        with pytest.raises(AlmanacParseError, match="unknown category 'compost'") as exc_info:
            parse_almanac("seeds: 1\n\nseed-to-compost map:\n1 2 3\n")
        assert exc_info.value.line_no == 3

    def test_wrong_arity(self) -> None:
        with pytest.raises(AlmanacParseError, match="expected 3 integers") as exc_info:
            parse_almanac("seeds: 1\n\nseed-to-soil map:\n1 2\n")
        assert exc_info.value.line_no == 4

    def test_non_integer_token(self) -> None:
        with pytest.raises(AlmanacParseError, match="expected integers"):
            parse_almanac("seeds: 1 x\n")

    def test_negative_length(self) -> None:
        with pytest.raises(AlmanacParseError, match="invalid rule"):
            parse_almanac("seeds: 1\n\nseed-to-soil map:\n1 2 -3\n")

    def test_rule_outside_section(self) -> None:
        with pytest.raises(AlmanacParseError, match="outside of a map section"):
            parse_almanac("seeds: 1\n1 2 3\n")

    def test_duplicate_destination_section(self) -> None:
        text = "seeds: 1\n\nseed-to-soil map:\n1 2 3\n\nwater-to-soil map:\n1 2 3\n"
        with pytest.raises(DuplicateTableError):
            parse_almanac(text)

    def test_parse_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            parse_almanac("")

    def test_load_almanac(self, tmp_path: Path, example_text: str) -> None:
        path = tmp_path / "day5.txt"
        path.write_text(example_text, encoding="utf-8")
        doc = load_almanac(path)
        assert doc.seeds == (79, 14, 55, 13)
        assert len(doc.tables) == 7

    def test_load_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_almanac(tmp_path / "missing.txt")


class TestAlmanacJson:
    """Тесты для JSON-представления"""

    def test_to_dict_and_back(self, example_document: AlmanacDocument) -> None:
        data = almanac_to_dict(example_document)
        assert data["seeds"] == [79, 14, 55, 13]
        assert data["tables"][0] == {
            "source": "seed",
            "destination": "soil",
            "rules": [[50, 98, 2], [52, 50, 48]],
        }

        rebuilt = almanac_from_dict(data)
        assert rebuilt.seeds == example_document.seeds
        assert rebuilt.tables.tables() == example_document.tables.tables()

    def test_invalid_payload_rejected(self) -> None:
        with pytest.raises(ValidationError):
            almanac_from_dict({"seeds": [1], "tables": [{"source": "seed", "destination": "soil", "rules": [[1, 2]]}]})

    def test_load_almanac_json(self, tmp_path: Path, example_document: AlmanacDocument) -> None:
        path = tmp_path / "almanac.json"
        path.write_text(json.dumps(almanac_to_dict(example_document)), encoding="utf-8")
        doc = load_almanac_json(path)
        assert doc.seeds == (79, 14, 55, 13)
