"""
Contract Validation Module

Модуль для валидации данных обмена (packed array, grid) по JSON Schema.
"""

from .validators import (
    ContractValidator,
    GridValidator,
    PackedArrayValidator,
    SchemaLoader,
    validate_grid,
    validate_packed_array,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "PackedArrayValidator",
    "GridValidator",
    # Functions
    "validate_packed_array",
    "validate_grid",
]
