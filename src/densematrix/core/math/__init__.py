"""
Core math modules для densematrix

Численные примитивы и матричные операции с гарантией конечности результатов.
"""

# Numerical Safeguards
from densematrix.core.math.numerical_safeguards import (
    first_invalid_float,
    ieee_divide,
    is_singular,
    is_valid_float,
    pow10,
    truncate_scaled,
)

# MatrixMath
from densematrix.core.math.matrix_math import (
    MatrixMath,
    add,
    divide,
    identity,
    multiply,
    scalar,
    subtract,
)

__all__ = [
    # Numerical Safeguards
    "first_invalid_float",
    "ieee_divide",
    "is_singular",
    "is_valid_float",
    "pow10",
    "truncate_scaled",
    # MatrixMath
    "MatrixMath",
    "add",
    "divide",
    "identity",
    "multiply",
    "scalar",
    "subtract",
]
