"""
Almanac contract — JSON Schema для JSON-представления альманаха

Схема almanac.json (Draft 2020-12) поставляется как package data в
каталоге schema/ рядом с модулем. Контракт проверяет форму данных
(int64-магнитуды, тройки правил, имена категорий); семантику таблиц
(дубликаты назначений) проверяет ConversionTables.
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match


ALMANAC_SCHEMA = "almanac"


class SchemaLoader:
    """Загрузчик и кэш схем из каталога schema/."""

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.is_dir():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")
        self._schemas: Dict[str, Dict[str, Any]] = {}

    @property
    def schema_dir(self) -> Path:
        return self._schema_dir

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Схема по имени файла без расширения.

        Raises:
            FileNotFoundError: Файла схемы нет
            ValueError: Схема не проходит meta-validation
        """
        cached = self._schemas.get(schema_name)
        if cached is not None:
            return cached

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.is_file():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        schema = json.loads(schema_path.read_text(encoding="utf-8"))
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_path.name}: {e.message}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


class AlmanacValidator:
    """Проверка JSON-представления альманаха против контракта almanac.json."""

    def __init__(self, loader: Optional[SchemaLoader] = None):
        schema = (loader or _SCHEMA_LOADER).load_schema(ALMANAC_SCHEMA)
        self._validator = Draft202012Validator(schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            jsonschema.ValidationError: Первое (наиболее релевантное) нарушение
        """
        error = best_match(self._validator.iter_errors(data))
        if error is not None:
            raise error

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self._validator.is_valid(data)


def validate_almanac(data: Dict[str, Any]) -> None:
    """
    Валидация JSON-представления альманаха.

    Raises:
        jsonschema.ValidationError: Данные не соответствуют схеме
    """
    AlmanacValidator().validate(data)
