"""
JSON Schema Contract Validators

Валидация JSON-представления снапшота пула (pool_state.json) библиотекой
jsonschema. Через этот контракт проходит любое внешнее состояние,
из которого восстанавливается пул (LiquidityPool.from_state).
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError

POOL_STATE_SCHEMA = "pool_state"


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов из каталога schema/ пакета.

    Каждая схема читается один раз и проходит meta-validation.
    """

    def __init__(self, schema_dir: Path | None = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name not in self._schemas:
            schema_path = self._schema_dir / f"{schema_name}.json"
            if not schema_path.exists():
                raise FileNotFoundError(f"Schema not found: {schema_path}")

            schema = json.loads(schema_path.read_text(encoding="utf-8"))
            try:
                Draft202012Validator.check_schema(schema)
            except jsonschema.SchemaError as e:
                raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

            self._schemas[schema_name] = schema
        return self._schemas[schema_name]


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# POOL STATE CONTRACT
# =============================================================================


class PoolStateValidator:
    """
    Валидатор контракта pool_state.

    Проверяет структуру и диапазоны raw-полей. Кросс-полевые инварианты
    (min_fee <= max_fee, lp == 0 ⇔ резервы == 0) проверяет PoolSnapshot.
    """

    def __init__(self, loader: SchemaLoader | None = None):
        self.schema = (loader or _SCHEMA_LOADER).load_schema(POOL_STATE_SCHEMA)
        self._validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self._validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self._validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        """Все нарушения контракта, отсортированные по пути поля."""
        return iter(sorted(self._validator.iter_errors(data), key=lambda e: list(e.path)))


def validate_pool_state(data: Dict[str, Any]) -> None:
    """
    Валидация JSON-представления снапшота (PoolSnapshot.model_dump()).

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    PoolStateValidator().validate(data)
