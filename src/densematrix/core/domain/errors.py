"""
Семейство исключений матричных операций

Вынесено в отдельный модуль: его используют и Matrix, и валидаторы
контрактов обмена (core.contracts), которые Matrix вызывает сама.
"""


class MatrixException(Exception):
    """
    Базовая ошибка матричных операций.

    Несёт человекочитаемое сообщение. Конкретная причина различается
    подклассом (размерность, индекс, значение, параметр).
    """

    pass


class MatrixDimensionError(MatrixException):
    """Несовместимые размерности операндов или несуществующая строка/столбец."""

    pass


class MatrixIndexError(MatrixException, IndexError):
    """Индекс элемента или позиция в упакованном массиве вне допустимого диапазона."""

    pass


class MatrixValueError(MatrixException, ValueError):
    """Попытка записать NaN или ±Inf в матрицу."""

    pass


class MatrixParameterError(MatrixException, ValueError):
    """Невалидный параметр: отрицательная/неподдерживаемая точность, размер < 1."""

    pass
