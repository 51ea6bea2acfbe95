"""
Matrix Settings — конфигурация пакета и общий источник случайных чисел

Единственный процессный random.Random, сидируемый один раз:
- random_seed=None → энтропия ОС (по умолчанию)
- random_seed=<int> → воспроизводимая последовательность (тесты, отладка)

Повторное создание генератора на каждый вызов randomize() недопустимо:
при частых вызовах это даёт коллизии seed и коррелированные матрицы.
"""

import logging
import math
import random
import threading
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

logger = logging.getLogger(__name__)


# =============================================================================
# SETTINGS MODEL
# =============================================================================


class MatrixSettings(BaseModel):
    """
    Настройки пакета densematrix.

    Immutable модель (frozen=True). Для изменения используйте configure(),
    который создаёт новый экземпляр и пересидирует генератор.
    """

    random_seed: Optional[int] = Field(
        None, description="Seed общего генератора (None → энтропия ОС)"
    )
    randomize_min: float = Field(
        -1.0, description="Нижняя граница randomize() по умолчанию (включительно)"
    )
    randomize_max: float = Field(
        1.0, description="Верхняя граница randomize() по умолчанию (исключительно)"
    )

    model_config = {"frozen": True}  # Immutable

    @field_validator("randomize_min", "randomize_max")
    @classmethod
    def validate_finite_bound(cls, v: float) -> float:
        """Границы диапазона должны быть конечными числами."""
        if not math.isfinite(v):
            raise ValueError(f"randomize bound must be finite, got {v}")
        return v

    @model_validator(mode="after")
    def validate_range_order(self) -> "MatrixSettings":
        """Проверка randomize_min <= randomize_max."""
        if self.randomize_min > self.randomize_max:
            raise ValueError(
                f"randomize_min {self.randomize_min} exceeds randomize_max {self.randomize_max}"
            )
        return self


# =============================================================================
# ГЛОБАЛЬНОЕ СОСТОЯНИЕ
# =============================================================================

_LOCK = threading.Lock()
_SETTINGS = MatrixSettings()
_RANDOM = random.Random(_SETTINGS.random_seed)


def get_settings() -> MatrixSettings:
    """Текущие настройки пакета."""
    return _SETTINGS


def get_random_source() -> random.Random:
    """
    Общий процессный генератор случайных чисел.

    Returns:
        random.Random, используемый Matrix.randomize() по умолчанию
    """
    return _RANDOM


def configure(settings: Optional[MatrixSettings] = None, **overrides) -> MatrixSettings:
    """
    Замена настроек пакета и пересидирование общего генератора.

    Args:
        settings: Готовый экземпляр настроек (опционально)
        **overrides: Поля, переопределяющие settings (или текущие настройки)

    Returns:
        Новые активные настройки

    Raises:
        pydantic.ValidationError: Если переопределения невалидны

    Examples:
        >>> configure(random_seed=42).random_seed
        42
    """
    global _SETTINGS

    base = settings if settings is not None else _SETTINGS
    # model_validate прогоняет валидаторы заново (model_copy их пропускает)
    new_settings = MatrixSettings.model_validate({**base.model_dump(), **overrides})

    with _LOCK:
        _SETTINGS = new_settings
        _RANDOM.seed(new_settings.random_seed)

    logger.debug(
        "densematrix reconfigured: seed=%s randomize_range=[%s, %s)",
        new_settings.random_seed,
        new_settings.randomize_min,
        new_settings.randomize_max,
    )
    return new_settings
