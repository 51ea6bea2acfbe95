"""
Тесты для MatrixSettings и общего источника случайных чисел

Проверяет:
1. Значения по умолчанию и immutability (frozen=True)
2. Валидацию диапазона randomize
3. configure(): замену настроек и пересидирование генератора
4. Сохранение прежних настроек при невалидном переопределении
"""

import random

import pytest
from pydantic import ValidationError

from densematrix.core.config import (
    MatrixSettings,
    configure,
    get_random_source,
    get_settings,
)


@pytest.fixture(autouse=True)
def restore_settings():
    """Восстановление настроек пакета после каждого теста"""
    yield
    configure(MatrixSettings())


# =============================================================================
# SETTINGS MODEL
# =============================================================================


class TestMatrixSettings:
    """Тесты для модели MatrixSettings"""

    def test_defaults(self) -> None:
        """Значения по умолчанию"""
        settings = MatrixSettings()
        assert settings.random_seed is None
        assert settings.randomize_min == -1.0
        assert settings.randomize_max == 1.0

    def test_frozen(self) -> None:
        """Модель неизменяема"""
        settings = MatrixSettings()
        with pytest.raises(ValidationError):
            settings.randomize_min = 0.0

    def test_min_greater_than_max_rejected(self) -> None:
        """randomize_min > randomize_max → ValidationError"""
        with pytest.raises(ValidationError, match="exceeds randomize_max"):
            MatrixSettings(randomize_min=2.0, randomize_max=1.0)

    def test_equal_bounds_allowed(self) -> None:
        """Вырожденный диапазон допустим"""
        settings = MatrixSettings(randomize_min=0.5, randomize_max=0.5)
        assert settings.randomize_min == settings.randomize_max

    @pytest.mark.parametrize("bad", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_bounds_rejected(self, bad: float) -> None:
        """NaN/Inf в границах → ValidationError"""
        with pytest.raises(ValidationError, match="must be finite"):
            MatrixSettings(randomize_min=bad)

    def test_json_round_trip(self) -> None:
        """Сериализация/десериализация JSON"""
        settings = MatrixSettings(random_seed=9, randomize_min=0.0, randomize_max=2.0)
        restored = MatrixSettings.model_validate_json(settings.model_dump_json())
        assert restored == settings


# =============================================================================
# CONFIGURE
# =============================================================================


class TestConfigure:
    """Тесты для configure / get_settings / get_random_source"""

    def test_configure_overrides(self) -> None:
        """Переопределения применяются и видны через get_settings"""
        new_settings = configure(randomize_min=0.0, randomize_max=10.0)
        assert get_settings() is new_settings
        assert get_settings().randomize_min == 0.0
        assert get_settings().randomize_max == 10.0

    def test_configure_with_instance(self) -> None:
        """Можно передать готовый экземпляр настроек"""
        settings = MatrixSettings(random_seed=3)
        assert configure(settings).random_seed == 3
        assert get_settings() == settings

    def test_overrides_apply_on_top_of_instance(self) -> None:
        """Переопределения применяются поверх переданного экземпляра"""
        result = configure(MatrixSettings(random_seed=3), random_seed=4)
        assert result.random_seed == 4

    def test_seed_makes_source_reproducible(self) -> None:
        """random_seed пересидирует общий генератор"""
        configure(random_seed=5)
        first = [get_random_source().random() for _ in range(3)]
        expected = random.Random(5)
        assert first == [expected.random() for _ in range(3)]

    def test_source_is_process_wide(self) -> None:
        """Генератор один и тот же между вызовами configure"""
        source = get_random_source()
        configure(random_seed=1)
        assert get_random_source() is source

    def test_invalid_override_keeps_previous(self) -> None:
        """Невалидное переопределение не меняет активные настройки"""
        before = configure(randomize_min=0.0, randomize_max=1.0)
        with pytest.raises(ValidationError):
            configure(randomize_min=5.0)
        assert get_settings() is before
