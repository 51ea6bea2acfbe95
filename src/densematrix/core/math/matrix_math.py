"""
MatrixMath — операции над матрицами без мутации входов

Все операции возвращают НОВУЮ матрицу (или скаляр):
- add / subtract: поэлементно, формы должны совпадать
- multiply: на скаляр (поэлементно) или матричное произведение
- divide: поэлементное деление на скаляр (семантика IEEE-754)
- identity: единичная матрица size × size
- scalar: скалярное произведение двух векторов одинаковой длины

Результат собирается через валидирующий конструктор: если операция
порождает NaN/Inf (переполнение, деление на ноль, inf-скаляр), запись
элемента отклоняется с MatrixValueError. Отдельной проверки скаляра нет.
"""

from numbers import Real

from densematrix.core.domain.errors import MatrixDimensionError, MatrixParameterError
from densematrix.core.domain.matrix import Matrix
from densematrix.core.math.numerical_safeguards import ieee_divide


# =============================================================================
# ПРОВЕРКИ РАЗМЕРНОСТЕЙ
# =============================================================================


def _require_same_shape(a: Matrix, b: Matrix) -> None:
    """
    Проверка совпадения форм для поэлементных операций.

    Raises:
        MatrixDimensionError: С указанием несовпавшего измерения и обоих размеров
    """
    if a.rows != b.rows:
        raise MatrixDimensionError(
            "The matrices must have the same number of rows and columns.\n"
            f"Matrix A has {a.rows} rows and matrix B has {b.rows} rows."
        )
    if a.cols != b.cols:
        raise MatrixDimensionError(
            "The matrices must have the same number of rows and columns.\n"
            f"Matrix A has {a.cols} columns and matrix B has {b.cols} columns."
        )


def _from_packed(rows: int, cols: int, values: list[float]) -> Matrix:
    result = Matrix(rows, cols)
    result.from_packed_array(values)
    return result


# =============================================================================
# ПОЭЛЕМЕНТНЫЕ ОПЕРАЦИИ
# =============================================================================


def add(a: Matrix, b: Matrix) -> Matrix:
    """
    Сумма двух матриц одинаковой формы.

    Raises:
        MatrixDimensionError: Если формы не совпадают
        MatrixValueError: Если сумма переполняет double
    """
    _require_same_shape(a, b)
    values = [x + y for x, y in zip(a.to_packed_array(), b.to_packed_array())]
    return _from_packed(a.rows, a.cols, values)


def subtract(a: Matrix, b: Matrix) -> Matrix:
    """
    Разность a - b двух матриц одинаковой формы.

    Raises:
        MatrixDimensionError: Если формы не совпадают
        MatrixValueError: Если разность переполняет double
    """
    _require_same_shape(a, b)
    values = [x - y for x, y in zip(a.to_packed_array(), b.to_packed_array())]
    return _from_packed(a.rows, a.cols, values)


def multiply(a: Matrix, b: "Matrix | float") -> Matrix:
    """
    Умножение матрицы на скаляр или на другую матрицу.

    Скаляр: каждый элемент a умножается на b.
    Матрица: стандартное произведение, a.cols должно равняться b.rows,
    результат a.rows × b.cols.

    Args:
        a: Левый операнд
        b: Скаляр или правая матрица

    Returns:
        Новая матрица с результатом

    Raises:
        MatrixDimensionError: Если a.cols != b.rows (матричный случай)
        MatrixValueError: Если результат содержит NaN/Inf
        TypeError: Если b не скаляр и не матрица

    Examples:
        >>> a = Matrix.from_grid([[1.0, 2.0], [3.0, 4.0]])
        >>> multiply(a, 2.0).to_grid()
        [[2.0, 4.0], [6.0, 8.0]]
        >>> multiply(a, identity(2)).to_grid()
        [[1.0, 2.0], [3.0, 4.0]]
    """
    if isinstance(b, Matrix):
        return _multiply_matrices(a, b)
    if isinstance(b, Real):
        value = float(b)
        return _from_packed(a.rows, a.cols, [x * value for x in a.to_packed_array()])
    raise TypeError(f"Can't multiply a matrix by {type(b).__name__}")


def _multiply_matrices(a: Matrix, b: Matrix) -> Matrix:
    if a.cols != b.rows:
        raise MatrixDimensionError(
            "To multiply two matrices, the number of columns in the first matrix "
            "must match the number of rows in the second.\n"
            f"Matrix A is {a.rows}x{a.cols} and matrix B is {b.rows}x{b.cols}."
        )

    left = a.to_grid()
    right = b.to_grid()
    shared = a.cols
    values: list[float] = []
    for r in range(a.rows):
        for c in range(b.cols):
            value = 0.0
            for i in range(shared):
                value += left[r][i] * right[i][c]
            values.append(value)
    return _from_packed(a.rows, b.cols, values)


def divide(matrix: Matrix, value: float) -> Matrix:
    """
    Деление каждого элемента на value.

    Деление на ноль даёт ±inf/NaN по IEEE-754, которые отклоняются
    при записи в результирующую матрицу.

    Raises:
        MatrixValueError: Если результат содержит NaN/Inf
    """
    divisor = float(value)
    values = [ieee_divide(x, divisor) for x in matrix.to_packed_array()]
    return _from_packed(matrix.rows, matrix.cols, values)


# =============================================================================
# КОНСТРУКТОРЫ И СКАЛЯРНОЕ ПРОИЗВЕДЕНИЕ
# =============================================================================


def identity(size: int) -> Matrix:
    """
    Единичная матрица size × size.

    Raises:
        MatrixParameterError: Если size < 1
    """
    if size < 1:
        raise MatrixParameterError("Size of identity matrix must be at least 1.")
    result = Matrix(size, size)
    for i in range(size):
        result[i, i] = 1.0
    return result


def scalar(a: Matrix, b: Matrix) -> float:
    """
    Скалярное произведение двух векторов.

    Элементы сравниваются в упакованном (row-major) виде, поэтому
    строка и столбец одинаковой длины — допустимая пара.

    Args:
        a: Первый вектор (1 × N или N × 1)
        b: Второй вектор той же длины

    Returns:
        Сумма попарных произведений

    Raises:
        MatrixDimensionError: Если операнд не вектор или длины различаются

    Examples:
        >>> scalar(Matrix.create_row_matrix([1, 2, 3]), Matrix.create_column_matrix([4, 5, 6]))
        32.0
    """
    if not a.is_vector() or not b.is_vector():
        raise MatrixDimensionError("To take scalar product, both matrices must be vectors.")

    packed_a = a.to_packed_array()
    packed_b = b.to_packed_array()
    if len(packed_a) != len(packed_b):
        raise MatrixDimensionError(
            "To take scalar product, both matrices must have the same length.\n"
            f"Vector A has {len(packed_a)} elements and vector B has {len(packed_b)} elements."
        )

    result = 0.0
    for x, y in zip(packed_a, packed_b):
        result += x * y
    return result


# =============================================================================
# NAMESPACE
# =============================================================================


class MatrixMath:
    """
    Статический набор матричных операций.

    Тонкая обёртка над функциями модуля для кода, который предпочитает
    вызовы вида MatrixMath.add(a, b).
    """

    add = staticmethod(add)
    subtract = staticmethod(subtract)
    multiply = staticmethod(multiply)
    divide = staticmethod(divide)
    identity = staticmethod(identity)
    scalar = staticmethod(scalar)
