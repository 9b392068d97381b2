"""
Factory for short code generation strategies.

Strategies are stateless apart from their configuration, so one instance
per strategy type is shared by every registry in the process.
"""

from enum import Enum
from typing import Callable, Dict, Optional, Union

from shorturls_app.config import Settings, settings
from shorturls_app.services.short_code_strategies import (
    ShortCodeStrategy,
    RandomShortCodeStrategy,
    Base62ShortCodeStrategy
)


class ShortCodeStrategyType(Enum):
    """Available short code generation strategies"""
    RANDOM = "random"
    BASE62 = "base62"


def _build_random(config: Settings) -> ShortCodeStrategy:
    return RandomShortCodeStrategy(
        length=config.short_url_length,
        max_retries=config.max_retries
    )


def _build_base62(config: Settings) -> ShortCodeStrategy:
    return Base62ShortCodeStrategy(
        salt=config.short_code_salt,
        max_length=config.short_url_length,
        max_retries=config.max_retries
    )


class ShortCodeFactory:
    """Builds strategies from settings and keeps one instance per type"""

    _builders: Dict[ShortCodeStrategyType, Callable[[Settings], ShortCodeStrategy]] = {
        ShortCodeStrategyType.RANDOM: _build_random,
        ShortCodeStrategyType.BASE62: _build_base62,
    }
    _instances: Dict[ShortCodeStrategyType, ShortCodeStrategy] = {}

    @classmethod
    def create_strategy(
        cls,
        strategy_type: Optional[Union[ShortCodeStrategyType, str]] = None,
        config: Settings = settings,
    ) -> ShortCodeStrategy:
        """
        Return the shared strategy for a type.

        Args:
            strategy_type: Enum member or its value ("random", "base62").
                          Defaults to settings.short_code_strategy.
            config: Settings the strategy is built from on first use

        Raises:
            ValueError: If strategy_type names no known strategy
        """
        strategy_type = ShortCodeStrategyType(strategy_type or config.short_code_strategy)

        instance = cls._instances.get(strategy_type)
        if instance is None:
            instance = cls._builders[strategy_type](config)
            cls._instances[strategy_type] = instance
        return instance

    @classmethod
    def reset(cls) -> None:
        """Forget shared instances, e.g. after settings changed"""
        cls._instances.clear()
