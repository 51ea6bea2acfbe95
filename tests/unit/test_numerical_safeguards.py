"""
Тесты для модуля Numerical Safeguards

Проверяет:
1. NaN/Inf детекцию
2. IEEE-754 деление (включая деление на ноль и знаковый ноль)
3. Вычисление 10^precision с детекцией переполнения
4. Масштабирование с усечением к нулю
5. Точную проверку вырожденности матрицы (не зависящую от масштаба)
"""

import math
from fractions import Fraction

import pytest

from densematrix.core.math.numerical_safeguards import (
    first_invalid_float,
    ieee_divide,
    is_singular,
    is_valid_float,
    pow10,
    truncate_scaled,
)

# =============================================================================
# ТЕСТЫ NaN/Inf ДЕТЕКЦИИ
# =============================================================================


class TestIsValidFloat:
    """Тесты для is_valid_float"""

    def test_normal_values_valid(self) -> None:
        """Обычные значения валидны"""
        assert is_valid_float(0.0)
        assert is_valid_float(1.0)
        assert is_valid_float(-1.0)
        assert is_valid_float(1e308)
        assert is_valid_float(-1e-308)

    def test_nan_invalid(self) -> None:
        """NaN невалиден"""
        assert not is_valid_float(float("nan"))

    def test_inf_invalid(self) -> None:
        """Inf невалиден"""
        assert not is_valid_float(float("inf"))
        assert not is_valid_float(float("-inf"))


class TestFirstInvalidFloat:
    """Тесты для first_invalid_float"""

    def test_all_valid_returns_none(self) -> None:
        """Все значения валидны → None"""
        assert first_invalid_float([1.0, -2.0, 0.0]) is None

    def test_empty_returns_none(self) -> None:
        """Пустая последовательность → None"""
        assert first_invalid_float([]) is None

    def test_returns_first_invalid(self) -> None:
        """Возвращается первое невалидное значение"""
        assert first_invalid_float([1.0, float("inf"), float("nan")]) == float("inf")
        assert math.isnan(first_invalid_float([1.0, float("nan"), float("inf")]))


# =============================================================================
# ТЕСТЫ IEEE-754 ДЕЛЕНИЯ
# =============================================================================


class TestIeeeDivide:
    """Тесты для ieee_divide"""

    def test_normal_division(self) -> None:
        """Обычное деление работает корректно"""
        assert ieee_divide(10.0, 2.0) == 5.0
        assert ieee_divide(-10.0, 4.0) == -2.5

    def test_positive_by_zero_is_inf(self) -> None:
        """x / 0.0 → +inf для x > 0"""
        assert ieee_divide(1.0, 0.0) == math.inf

    def test_negative_by_zero_is_minus_inf(self) -> None:
        """x / 0.0 → -inf для x < 0"""
        assert ieee_divide(-1.0, 0.0) == -math.inf

    def test_signed_zero_denominator(self) -> None:
        """Знак нуля в знаменателе учитывается"""
        assert ieee_divide(1.0, -0.0) == -math.inf
        assert ieee_divide(-1.0, -0.0) == math.inf

    def test_zero_by_zero_is_nan(self) -> None:
        """0 / 0 → NaN"""
        assert math.isnan(ieee_divide(0.0, 0.0))

    def test_nan_by_zero_is_nan(self) -> None:
        """NaN / 0 → NaN"""
        assert math.isnan(ieee_divide(float("nan"), 0.0))


# =============================================================================
# ТЕСТЫ ТОЧНОСТИ
# =============================================================================


class TestPow10:
    """Тесты для pow10"""

    @pytest.mark.parametrize(
        ("precision", "expected"),
        [(0, 1.0), (1, 10.0), (10, 1e10), (308, 1e308)],
    )
    def test_representable_powers(self, precision: int, expected: float) -> None:
        """Представимые степени вычисляются точно"""
        assert pow10(precision) == expected

    @pytest.mark.parametrize("precision", [309, 400, 10_000])
    def test_overflow_raises(self, precision: int) -> None:
        """Переполнение double → OverflowError"""
        with pytest.raises(OverflowError):
            pow10(precision)


class TestTruncateScaled:
    """Тесты для truncate_scaled"""

    def test_truncates_toward_zero_positive(self) -> None:
        """Положительные значения усекаются вниз"""
        assert truncate_scaled(1.99, 0) == 1
        assert truncate_scaled(0.125, 2) == 12

    def test_truncates_toward_zero_negative(self) -> None:
        """Отрицательные значения усекаются вверх (к нулю), не floor"""
        assert truncate_scaled(-1.99, 0) == -1
        assert truncate_scaled(-0.9, 0) == 0

    def test_not_rounding_at_half(self) -> None:
        """На границе .5 результат — усечение, а не округление"""
        assert truncate_scaled(2.5, 0) == 2
        assert truncate_scaled(0.25, 1) == 2

    def test_returns_int(self) -> None:
        """Результат — int"""
        assert isinstance(truncate_scaled(3.7, 1), int)
        assert isinstance(truncate_scaled(1e308, 1), int)

    def test_overflow_computed_exactly(self) -> None:
        """Переполнение произведения → точное целое, а не ±inf"""
        assert truncate_scaled(1e308, 1) == int(1e308) * 10
        assert truncate_scaled(-1e308, 1) == -int(1e308) * 10

    def test_overflow_keeps_values_distinct(self) -> None:
        """Разные большие значения остаются различимыми после масштабирования"""
        assert truncate_scaled(1e299, 10) != truncate_scaled(5e300, 10)
        assert truncate_scaled(2.0, 308) == 2 * 10**308
        assert truncate_scaled(2.0, 308) != truncate_scaled(3.0, 308)

    def test_overflow_truncates_fraction(self) -> None:
        """Дробная часть отбрасывается и в точной ветке"""
        assert truncate_scaled(2.5, 308) == math.trunc(Fraction(2.5) * 10**308)
        assert truncate_scaled(-2.5, 308) == -truncate_scaled(2.5, 308)

    def test_unrepresentable_precision_raises(self) -> None:
        """10^precision вне double → OverflowError"""
        with pytest.raises(OverflowError):
            truncate_scaled(1.0, 309)


# =============================================================================
# ТЕСТЫ ВЫРОЖДЕННОСТИ
# =============================================================================


class TestIsSingular:
    """Тесты для is_singular"""

    def test_identity_not_singular(self) -> None:
        """Единичная матрица невырождена"""
        assert not is_singular([[1.0, 0.0], [0.0, 1.0]])

    def test_dependent_rows_singular(self) -> None:
        """Линейно зависимые строки → вырождена"""
        assert is_singular([[1.0, 2.0], [2.0, 4.0]])

    def test_zero_matrix_singular(self) -> None:
        """Нулевая матрица вырождена"""
        assert is_singular([[0.0, 0.0], [0.0, 0.0]])
        assert is_singular([[0.0]])

    def test_pivoting_required(self) -> None:
        """Нулевой диагональный элемент не означает вырожденность"""
        assert not is_singular([[0.0, 1.0], [1.0, 0.0]])

    def test_three_by_three(self) -> None:
        """Матрица 3 × 3: невырожденная и вырожденная"""
        assert not is_singular([[2.0, 0.0, 1.0], [1.0, 3.0, 2.0], [1.0, 1.0, 2.0]])
        # Третья строка = первая + вторая
        assert is_singular([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0], [5.0, 7.0, 9.0]])

    def test_empty_matrix_not_singular(self) -> None:
        """Матрица 0 × 0 считается невырожденной"""
        assert not is_singular([])

    def test_tiny_scale_not_singular(self) -> None:
        """Малые по модулю элементы не делают матрицу вырожденной"""
        assert not is_singular([[1e-13, 0.0], [0.0, 1e-13]])
        assert not is_singular([[5e-324]])

    def test_large_scale_singular(self) -> None:
        """Большие по модулю зависимые строки → вырождена"""
        big = 1e200
        assert is_singular([[big, 2 * big], [2 * big, 4 * big]])

    def test_nearly_dependent_rows_not_singular(self) -> None:
        """Определитель 2^-52 мал, но не равен нулю"""
        assert not is_singular([[1.0, 1.0], [1.0, 1.0 + 2**-52]])

    def test_input_not_mutated(self) -> None:
        """Исходные данные не изменяются"""
        grid = [[0.0, 1.0], [2.0, 3.0]]
        is_singular(grid)
        assert grid == [[0.0, 1.0], [2.0, 3.0]]

    def test_non_square_raises(self) -> None:
        """Неквадратная матрица вызывает ошибку"""
        with pytest.raises(ValueError, match="square"):
            is_singular([[1.0, 2.0]])
