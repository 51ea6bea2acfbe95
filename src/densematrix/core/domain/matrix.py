"""
Matrix — плотная двумерная матрица double

Value-тип с фиксированной формой rows × cols и собственным хранилищем:
- Конструирование (по размерам, из сетки, из булевой сетки, row/column)
- Индексный доступ с проверкой границ и валидности значения
- Извлечение строк/столбцов, упаковка в плоский массив и обратно
- Рандомизация, клонирование, сравнение с заданной точностью

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Форма неизменна после создания (resize не существует)
2. NaN/Inf никогда не хранятся — проверка на КАЖДОЙ записи, до мутации
3. Каждая матрица владеет своим хранилищем (глубокое копирование везде)
4. Неудачная операция оставляет матрицу в прежнем состоянии
"""

import logging
import math
import random
from numbers import Real
from typing import Final, Optional, Sequence

from jsonschema import ValidationError

from densematrix.core.config import get_random_source, get_settings
from densematrix.core.contracts.validators import validate_grid, validate_packed_array
from densematrix.core.domain.errors import (
    MatrixDimensionError,
    MatrixIndexError,
    MatrixParameterError,
    MatrixValueError,
)
from densematrix.core.math.numerical_safeguards import (
    is_singular,
    is_valid_float,
    pow10,
    truncate_scaled,
)

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

# Точность (десятичные знаки) для equals() / == по умолчанию
DEFAULT_EQUALITY_PRECISION: Final[int] = 10


# =============================================================================
# HELPERS
# =============================================================================


def _checked_value(value: float) -> float:
    """
    Проверка одного элемента: вещественное число (не bool), не NaN/Inf.

    Правило то же, что у контракта packed_array для массовой записи.

    Raises:
        TypeError: Если value не вещественное число
        MatrixValueError: Если значение NaN или ±Inf
    """
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"Matrix values must be real numbers, got {type(value).__name__}.")
    number = float(value)
    if not is_valid_float(number):
        logger.debug("rejected non-finite matrix element: %s", number)
        raise MatrixValueError(f"Trying to assign invalid number to matrix: {number}.")
    return number


def _contract_values(values: list) -> list[float]:
    """
    Проверка плоского списка по контракту packed_array (всё или ничего).

    Raises:
        TypeError: Если список содержит не числа
        MatrixValueError: Если список содержит NaN/Inf
    """
    try:
        validate_packed_array(values)
    except ValidationError as e:
        raise TypeError(f"Matrix values must be real numbers: {e.message}") from e
    return [float(value) for value in values]


def _uniform(source: random.Random, low: float, high: float) -> float:
    """Значение из [low, high); округление вверх до high сдвигается внутрь."""
    value = source.random() * (high - low) + low
    if high > low and is_valid_float(value) and value >= high:
        value = math.nextafter(high, low)
    return value


# =============================================================================
# MATRIX
# =============================================================================


class Matrix:
    """
    Плотная матрица rows × cols из конечных double.

    Элементы хранятся в одном плоском буфере в порядке row-major,
    адресация (row, col) с нуля. Буфер принадлежит только этому экземпляру.

    Examples:
        >>> m = Matrix(2, 3)
        >>> m[1, 2] = 5.0
        >>> m.to_packed_array()
        [0.0, 0.0, 0.0, 0.0, 0.0, 5.0]
    """

    __hash__ = None  # Mutable: не может быть ключом dict/set

    def __init__(self, rows: int, cols: int) -> None:
        """
        Создание нулевой матрицы заданной формы.

        Нулевые размеры допускаются (матрица 0 × N или N × 0).

        Args:
            rows: Количество строк (>= 0)
            cols: Количество столбцов (>= 0)

        Raises:
            MatrixParameterError: Если rows < 0 или cols < 0
        """
        if rows < 0 or cols < 0:
            raise MatrixParameterError(
                f"Matrix dimensions can't be negative, got {rows} rows and {cols} columns."
            )
        self._rows = rows
        self._cols = cols
        self._data: list[float] = [0.0] * (rows * cols)

    # -------------------------------------------------------------------------
    # Альтернативные конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def from_grid(cls, grid: Sequence[Sequence[float]]) -> "Matrix":
        """
        Создание матрицы глубоким копированием прямоугольной сетки.

        Args:
            grid: Последовательность строк одинаковой длины

        Returns:
            Новая матрица len(grid) × len(grid[0])

        Raises:
            TypeError: Если элементы сетки не числа
            MatrixDimensionError: Если строки разной длины
            MatrixValueError: Если сетка содержит NaN/Inf
        """
        copied = [list(row) for row in grid]
        try:
            validate_grid(copied)
        except ValidationError as e:
            raise TypeError(f"Matrix values must be real numbers: {e.message}") from e

        result = cls(len(copied), len(copied[0]) if copied else 0)
        result._data = [float(value) for row in copied for value in row]
        return result

    @classmethod
    def from_bool_grid(cls, grid: Sequence[Sequence[bool]]) -> "Matrix":
        """
        Создание матрицы из булевой сетки: True → 1.0, False → -1.0.

        Args:
            grid: Прямоугольная сетка булевых значений

        Returns:
            Новая матрица той же формы
        """
        return cls.from_grid([[1.0 if cell else -1.0 for cell in row] for row in grid])

    @classmethod
    def create_row_matrix(cls, values: Sequence[float]) -> "Matrix":
        """Матрица-строка 1 × N из плоской последовательности."""
        result = cls(1, len(values))
        result._data = _contract_values(list(values))
        return result

    @classmethod
    def create_column_matrix(cls, values: Sequence[float]) -> "Matrix":
        """Матрица-столбец N × 1 из плоской последовательности."""
        result = cls(len(values), 1)
        result._data = _contract_values(list(values))
        return result

    # -------------------------------------------------------------------------
    # Форма
    # -------------------------------------------------------------------------

    @property
    def rows(self) -> int:
        """Количество строк."""
        return self._rows

    @property
    def cols(self) -> int:
        """Количество столбцов."""
        return self._cols

    @property
    def size(self) -> int:
        """Количество элементов (rows * cols)."""
        return self._rows * self._cols

    @property
    def shape(self) -> tuple[int, int]:
        return (self._rows, self._cols)

    # -------------------------------------------------------------------------
    # Индексный доступ
    # -------------------------------------------------------------------------

    def _validate(self, row: int, col: int) -> None:
        """
        Проверка, что (row, col) внутри [0, rows) × [0, cols).

        Raises:
            MatrixIndexError: Если индекс вне диапазона
        """
        if row < 0 or row >= self._rows:
            raise MatrixIndexError(f"The row {row} is out of range: {self._rows}")
        if col < 0 or col >= self._cols:
            raise MatrixIndexError(f"The column {col} is out of range: {self._cols}")

    def get(self, row: int, col: int) -> float:
        """
        Значение элемента (row, col).

        Raises:
            MatrixIndexError: Если индекс вне диапазона
        """
        self._validate(row, col)
        return self._data[row * self._cols + col]

    def set(self, row: int, col: int, value: float) -> None:
        """
        Запись элемента (row, col).

        Проверка индекса и значения выполняется ДО мутации.

        Raises:
            MatrixIndexError: Если индекс вне диапазона
            TypeError: Если value не вещественное число
            MatrixValueError: Если value — NaN или ±Inf
        """
        self._validate(row, col)
        self._data[row * self._cols + col] = _checked_value(value)

    @staticmethod
    def _unpack_key(key: tuple[int, int]) -> tuple[int, int]:
        if not isinstance(key, tuple) or len(key) != 2:
            raise TypeError(f"Matrix indices must be a (row, col) tuple, got {key!r}")
        return key

    def __getitem__(self, key: tuple[int, int]) -> float:
        row, col = self._unpack_key(key)
        return self.get(row, col)

    def __setitem__(self, key: tuple[int, int], value: float) -> None:
        row, col = self._unpack_key(key)
        self.set(row, col, value)

    # -------------------------------------------------------------------------
    # Мутации
    # -------------------------------------------------------------------------

    def clear(self) -> None:
        """Обнуление всех элементов."""
        self._data = [0.0] * self.size

    def from_packed_array(self, array: Sequence[float], index: int = 0) -> int:
        """
        Заполнение матрицы (row-major) из плоского массива, начиная с index.

        Все значения проверяются до записи: при ошибке матрица не меняется.

        Args:
            array: Плоский массив значений
            index: Позиция первого читаемого значения

        Returns:
            Позиция сразу после последнего прочитанного значения

        Raises:
            MatrixIndexError: Если index < 0 или в массиве меньше size
                значений начиная с index
            TypeError: Если среди читаемых значений есть не числа
            MatrixValueError: Если среди читаемых значений есть NaN/Inf

        Examples:
            >>> m = Matrix(1, 2)
            >>> m.from_packed_array([9.0, 1.0, 2.0, 9.0], 1)
            3
        """
        end = index + self.size
        if index < 0 or end > len(array):
            raise MatrixIndexError(
                f"Can't read {self.size} values from a packed array of length "
                f"{len(array)} starting at index {index}."
            )
        self._data = _contract_values(list(array[index:end]))
        return end

    def randomize(
        self,
        min_value: Optional[float] = None,
        max_value: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Заполнение равномерно распределёнными значениями из [min_value, max_value).

        Args:
            min_value: Нижняя граница (default: settings.randomize_min)
            max_value: Верхняя граница (default: settings.randomize_max)
            rng: Источник случайных чисел (default: общий процессный генератор)

        Raises:
            MatrixValueError: Если диапазон порождает NaN/Inf (матрица не меняется)
        """
        settings = get_settings()
        low = settings.randomize_min if min_value is None else min_value
        high = settings.randomize_max if max_value is None else max_value
        source = rng if rng is not None else get_random_source()

        logger.debug("randomize %dx%d in [%s, %s)", self._rows, self._cols, low, high)
        self._data = _contract_values([_uniform(source, low, high) for _ in range(self.size)])

    # -------------------------------------------------------------------------
    # Извлечение и копирование
    # -------------------------------------------------------------------------

    def get_row(self, row: int) -> "Matrix":
        """
        Копия строки row как матрица 1 × cols.

        Raises:
            MatrixDimensionError: Если строки не существует
        """
        if row < 0 or row >= self._rows:
            raise MatrixDimensionError(f"Can't get row '{row}' because it doesn't exist.")
        start = row * self._cols
        return Matrix.create_row_matrix(self._data[start:start + self._cols])

    def get_col(self, col: int) -> "Matrix":
        """
        Копия столбца col как матрица rows × 1.

        Raises:
            MatrixDimensionError: Если столбца не существует
        """
        if col < 0 or col >= self._cols:
            raise MatrixDimensionError(f"Can't get column '{col}' because it doesn't exist.")
        return Matrix.create_column_matrix(self._data[col::self._cols])

    def to_packed_array(self) -> list[float]:
        """Новый плоский массив длины size в порядке row-major."""
        return list(self._data)

    def to_grid(self) -> list[list[float]]:
        """Новая сетка (список строк) с копией элементов."""
        cols = self._cols
        return [self._data[r * cols:(r + 1) * cols] for r in range(self._rows)]

    def clone(self) -> "Matrix":
        """Полностью независимая глубокая копия."""
        result = Matrix(self._rows, self._cols)
        result._data = list(self._data)
        return result

    # -------------------------------------------------------------------------
    # Предикаты
    # -------------------------------------------------------------------------

    def is_vector(self) -> bool:
        """True если матрица — одна строка или один столбец (1 × 1 тоже вектор)."""
        return self._rows == 1 or self._cols == 1

    def is_zero(self) -> bool:
        """True если все элементы точно равны 0.0."""
        return all(value == 0.0 for value in self._data)

    def is_square(self) -> bool:
        return self._rows == self._cols

    def is_inversible(self) -> bool:
        """
        Проверка обратимости.

        Неквадратная матрица необратима. Для квадратной выполняется точный
        (рациональный) прямой ход метода Гаусса: матрица обратима, если
        определитель не равен нулю, независимо от масштаба элементов.
        Матрица 0 × 0 считается обратимой.

        Returns:
            True если матрица квадратная и невырожденная
        """
        if not self.is_square():
            return False
        return not is_singular(self.to_grid())

    # -------------------------------------------------------------------------
    # Сравнение
    # -------------------------------------------------------------------------

    def equals(self, other: "Matrix", precision: int = DEFAULT_EQUALITY_PRECISION) -> bool:
        """
        Сравнение с другой матрицей с точностью precision десятичных знаков.

        Оба значения умножаются на 10^precision и УСЕКАЮТСЯ к нулю до целого;
        матрицы равны, если все пары совпадают точно. Это не округление:
        при precision=0 значения 1.4 и 1.6 равны (оба → 1), а 0.9 и 1.0 нет.
        Матрицы разной формы не равны.
        Переполнение при масштабировании не склеивает значения: такие
        элементы сравниваются точно (см. truncate_scaled).

        Args:
            other: Матрица для сравнения
            precision: Количество десятичных знаков (default: 10)

        Returns:
            True если матрицы равны с заданной точностью

        Raises:
            TypeError: Если other не Matrix
            MatrixParameterError: Если precision < 0 или 10^precision
                не представимо в double
        """
        if not isinstance(other, Matrix):
            raise TypeError(f"Can't compare a matrix with {type(other).__name__}")
        if precision < 0:
            raise MatrixParameterError("Precision can't be a negative number.")
        try:
            pow10(precision)
        except OverflowError:
            raise MatrixParameterError(
                f"Precision of {precision} decimal places is not supported."
            ) from None

        if self.shape != other.shape:
            return False

        for mine, theirs in zip(self._data, other._data):
            if truncate_scaled(mine, precision) != truncate_scaled(theirs, precision):
                return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.equals(other)

    # -------------------------------------------------------------------------
    # Арифметика (делегирует в matrix_math)
    # -------------------------------------------------------------------------

    def __add__(self, other: "Matrix") -> "Matrix":
        from densematrix.core.math import matrix_math

        if not isinstance(other, Matrix):
            return NotImplemented
        return matrix_math.add(self, other)

    def __sub__(self, other: "Matrix") -> "Matrix":
        from densematrix.core.math import matrix_math

        if not isinstance(other, Matrix):
            return NotImplemented
        return matrix_math.subtract(self, other)

    def __mul__(self, other: "Matrix | float") -> "Matrix":
        from densematrix.core.math import matrix_math

        if isinstance(other, (Matrix, Real)):
            return matrix_math.multiply(self, other)
        return NotImplemented

    def __rmul__(self, other: float) -> "Matrix":
        from densematrix.core.math import matrix_math

        if isinstance(other, Real):
            return matrix_math.multiply(self, other)
        return NotImplemented

    def __matmul__(self, other: "Matrix") -> "Matrix":
        from densematrix.core.math import matrix_math

        if not isinstance(other, Matrix):
            return NotImplemented
        return matrix_math.multiply(self, other)

    def __truediv__(self, other: float) -> "Matrix":
        from densematrix.core.math import matrix_math

        if not isinstance(other, Real):
            return NotImplemented
        return matrix_math.divide(self, other)

    def __repr__(self) -> str:
        return f"Matrix(rows={self._rows}, cols={self._cols}, data={self.to_grid()})"
