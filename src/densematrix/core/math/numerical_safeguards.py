"""
Numerical Safeguards — примитивы численной безопасности для Matrix

Модуль обеспечивает единые правила работы с float во всём пакете:
- Проверка валидности float (не NaN, не Inf)
- Эмуляция IEEE-754 деления (Python бросает ZeroDivisionError вместо inf/nan)
- Безопасное вычисление 10^precision с детекцией переполнения
- Масштабирование и усечение к нулю для сравнения с заданной точностью
- Точная (рациональная) проверка вырожденности квадратной матрицы

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. NaN/Inf никогда не попадают в хранилище матрицы (проверка до записи)
2. Сравнение с точностью использует усечение к нулю, НЕ округление
3. Все операции детерминированы и воспроизводимы
"""

import math
from fractions import Fraction
from typing import Sequence


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


def first_invalid_float(values: Sequence[float]) -> float | None:
    """
    Поиск первого невалидного (NaN/Inf) значения в последовательности.

    Args:
        values: Последовательность значений

    Returns:
        Первое невалидное значение или None, если все значения finite
    """
    for value in values:
        if not is_valid_float(value):
            return value
    return None


# =============================================================================
# IEEE-754 ДЕЛЕНИЕ
# =============================================================================


def ieee_divide(numerator: float, denominator: float) -> float:
    """
    Деление с семантикой IEEE-754.

    Python бросает ZeroDivisionError для x / 0.0, тогда как IEEE-754
    возвращает ±inf (или NaN для 0 / 0). Здесь воспроизводится именно
    IEEE-результат, чтобы отказ происходил на записи элемента в матрицу,
    а не в самой операции деления.

    Args:
        numerator: Числитель
        denominator: Знаменатель

    Returns:
        numerator / denominator, либо ±inf / NaN при делении на ноль

    Examples:
        >>> ieee_divide(10.0, 2.0)
        5.0
        >>> ieee_divide(1.0, 0.0)
        inf
        >>> ieee_divide(-1.0, 0.0)
        -inf
        >>> ieee_divide(1.0, -0.0)
        -inf
        >>> math.isnan(ieee_divide(0.0, 0.0))
        True
    """
    try:
        return numerator / denominator
    except ZeroDivisionError:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        # Знак результата: знак числителя * знак нуля в знаменателе
        sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
        return math.copysign(math.inf, sign)


# =============================================================================
# ТОЧНОСТЬ СРАВНЕНИЯ
# =============================================================================


def pow10(precision: int) -> float:
    """
    Вычисление 10^precision как float с детекцией переполнения.

    Args:
        precision: Показатель степени (количество десятичных знаков)

    Returns:
        10.0 ** precision

    Raises:
        OverflowError: Если результат не представим в double (precision >= 309)

    Examples:
        >>> pow10(0)
        1.0
        >>> pow10(10)
        10000000000.0
    """
    # float ** int бросает OverflowError сам; проверка isfinite
    # покрывает платформы, где вместо этого возвращается inf
    scale = 10.0 ** precision
    if not is_valid_float(scale):
        raise OverflowError(f"10^{precision} is not representable as a double")
    return scale


def truncate_scaled(value: float, precision: int) -> int:
    """
    Масштабирование value на 10^precision с усечением к нулю до целого.

    Это НЕ округление: 1.9 → 1, -1.9 → -1.
    Пока произведение value * 10.0^precision конечно, усекается оно.
    При переполнении double результат считается точно в рациональных
    числах (Fraction), поэтому большие значения остаются различимыми.

    Args:
        value: Исходное значение (finite)
        precision: Количество десятичных знаков (0 <= precision <= 308)

    Returns:
        trunc(value * 10^precision) как int

    Raises:
        OverflowError: Если 10^precision не представимо в double

    Examples:
        >>> truncate_scaled(1.99, 0)
        1
        >>> truncate_scaled(-1.99, 0)
        -1
        >>> truncate_scaled(0.125, 2)
        12
        >>> truncate_scaled(2.0, 308) == 2 * 10 ** 308
        True
    """
    scaled = value * pow10(precision)
    if is_valid_float(scaled):
        return math.trunc(scaled)
    return math.trunc(Fraction(value) * 10 ** precision)


# =============================================================================
# ВЫРОЖДЕННОСТЬ
# =============================================================================


def is_singular(grid: Sequence[Sequence[float]]) -> bool:
    """
    Проверка вырожденности квадратной матрицы методом Гаусса.

    Исключение выполняется точно над Fraction (каждый конечный double
    представим дробью без потерь), поэтому ответ совпадает с проверкой
    det != 0 и не зависит от масштаба элементов: diag(1e-13, 1e-13)
    невырождена, а [[1e200, 2e200], [2e200, 4e200]] вырождена.

    Args:
        grid: Квадратная матрица как последовательность строк (finite)

    Returns:
        True если матрица вырождена (необратима)

    Raises:
        ValueError: Если матрица не квадратная
    """
    n = len(grid)
    if any(len(row) != n for row in grid):
        raise ValueError("singularity check requires a square matrix")
    work = [[Fraction(value) for value in row] for row in grid]

    for col in range(n):
        pivot_row = next((r for r in range(col, n) if work[r][col] != 0), None)
        if pivot_row is None:
            return True
        if pivot_row != col:
            work[col], work[pivot_row] = work[pivot_row], work[col]

        pivot = work[col][col]
        for r in range(col + 1, n):
            factor = work[r][col] / pivot
            if factor == 0:
                continue
            for c in range(col, n):
                work[r][c] -= factor * work[col][c]

    return False
