"""
Domain models and value objects.

Contains the Matrix value type and its exception family.
"""

from densematrix.core.domain.errors import (
    MatrixDimensionError,
    MatrixException,
    MatrixIndexError,
    MatrixParameterError,
    MatrixValueError,
)
from densematrix.core.domain.matrix import (
    DEFAULT_EQUALITY_PRECISION,
    Matrix,
)

__all__ = [
    "DEFAULT_EQUALITY_PRECISION",
    "Matrix",
    "MatrixException",
    "MatrixDimensionError",
    "MatrixIndexError",
    "MatrixParameterError",
    "MatrixValueError",
]
