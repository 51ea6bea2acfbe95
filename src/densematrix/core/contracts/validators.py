"""
JSON Schema Contract Validators

Модуль для валидации данных обмена (упакованный массив, сетка строк)
согласно формальным JSON Schema контрактам. Использует библиотеку
jsonschema для проверки структуры и типов.

Схемы (поставляются вместе с пакетом):
- packed_array.json — плоский массив чисел в порядке row-major
- grid.json — массив массивов чисел (пустая сетка допустима)

JSON Schema не умеет проверять прямоугольность и конечность чисел
(Python-списки, в отличие от JSON, могут нести NaN/Inf), поэтому эти
проверки выполняются поверх схемы и бросают матричные исключения.

Matrix.from_grid, Matrix.from_packed_array и фабрики векторов принимают
данные только через эти функции: один набор правил решает, что допустимо.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import jsonschema
from jsonschema import Draft202012Validator

from densematrix.core.domain.errors import MatrixDimensionError, MatrixValueError
from densematrix.core.math.numerical_safeguards import first_invalid_float

logger = logging.getLogger(__name__)


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Схемы лежат в каталоге schema/ рядом с этим модулем (package data).
    """

    def __init__(self, schema_dir: Optional[Path] = None):
        self._schema_dir = schema_dir or Path(__file__).parent / "schema"
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'packed_array')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если файл не является валидной JSON Schema
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Связывает имя схемы с готовым Draft 2020-12 валидатором.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Any) -> None:
        """
        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Any) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Any):
        """Все нарушения схемы, а не только первое."""
        return self.validator.iter_errors(data)


class PackedArrayValidator(ContractValidator):
    """Валидатор для контракта packed_array."""

    def __init__(self):
        super().__init__("packed_array")


class GridValidator(ContractValidator):
    """Валидатор для контракта grid."""

    def __init__(self):
        super().__init__("grid")


# Общие экземпляры для точек входа Matrix
_PACKED_ARRAY_VALIDATOR = PackedArrayValidator()
_GRID_VALIDATOR = GridValidator()


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def _reject_non_finite(values: list) -> None:
    invalid = first_invalid_float(values)
    if invalid is not None:
        logger.debug("rejected non-finite matrix element: %s", invalid)
        raise MatrixValueError(f"Trying to assign invalid number to matrix: {invalid}.")


def validate_packed_array(data: Any, expected_length: Optional[int] = None) -> None:
    """
    Валидация упакованного массива.

    Args:
        data: Данные для валидации (list; кортежи схема не принимает)
        expected_length: Ожидаемая длина (rows * cols), опционально

    Raises:
        jsonschema.ValidationError: Если данные не массив чисел
        MatrixDimensionError: Если длина не равна expected_length
        MatrixValueError: Если массив содержит NaN/Inf
    """
    _PACKED_ARRAY_VALIDATOR.validate(data)

    if expected_length is not None and len(data) != expected_length:
        raise MatrixDimensionError(
            f"Packed array must hold exactly {expected_length} values, got {len(data)}."
        )
    _reject_non_finite(data)


def validate_grid(data: Any) -> None:
    """
    Валидация сетки строк.

    Пустая сетка допустима (матрица 0 × 0), как и сетка из пустых строк.

    Args:
        data: Данные для валидации (list из list)

    Raises:
        jsonschema.ValidationError: Если данные не массив массивов чисел
        MatrixDimensionError: Если строки разной длины
        MatrixValueError: Если сетка содержит NaN/Inf
    """
    _GRID_VALIDATOR.validate(data)

    cols = len(data[0]) if data else 0
    for r, row in enumerate(data):
        if len(row) != cols:
            raise MatrixDimensionError(
                f"The source grid must be rectangular.\n"
                f"Row 0 has {cols} columns and row {r} has {len(row)} columns."
            )
        _reject_non_finite(row)
