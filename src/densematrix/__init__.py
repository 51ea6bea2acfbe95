"""
densematrix — плотные 2-D матрицы double с явной сигнализацией ошибок.

Matrix (value-тип) и MatrixMath (операции без мутации входов) для
небольших численных задач, где корректность важнее производительности.
"""

# core.math импортируется раньше core.domain: matrix_math зависит от
# domain.matrix, а domain.matrix и core.contracts зависят от
# core.math.numerical_safeguards
from densematrix.core.math import (
    MatrixMath,
    add,
    divide,
    identity,
    multiply,
    scalar,
    subtract,
)
from densematrix.core.domain import (
    DEFAULT_EQUALITY_PRECISION,
    Matrix,
    MatrixDimensionError,
    MatrixException,
    MatrixIndexError,
    MatrixParameterError,
    MatrixValueError,
)
from densematrix.core.config import (
    MatrixSettings,
    configure,
    get_random_source,
    get_settings,
)

__version__ = "1.0.0"

__all__ = [
    # Matrix
    "DEFAULT_EQUALITY_PRECISION",
    "Matrix",
    # Exceptions
    "MatrixException",
    "MatrixDimensionError",
    "MatrixIndexError",
    "MatrixParameterError",
    "MatrixValueError",
    # MatrixMath
    "MatrixMath",
    "add",
    "divide",
    "identity",
    "multiply",
    "scalar",
    "subtract",
    # Config
    "MatrixSettings",
    "configure",
    "get_random_source",
    "get_settings",
]
