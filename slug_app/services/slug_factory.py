"""
Factory for creating slug strategies.
Uses caching to avoid creating multiple instances.
"""

from enum import Enum
from slug_app.services.slug_strategies import (
    SlugStrategy,
    RandomSlugStrategy,
    SecureSlugStrategy
)
from slug_app.config import settings


class SlugStrategyType(Enum):
    """Available slug strategies"""
    RANDOM = "random"
    SECURE = "secure"


class SlugStrategyFactory:
    """Factory for creating slug strategies with caching"""

    _instances = {}  # Cache for strategy instances

    @classmethod
    def create_strategy(
        cls,
        strategy_type: SlugStrategyType = None
    ) -> SlugStrategy:
        """
        Create or return cached slug strategy.

        Args:
            strategy_type: Type of strategy to create.
                          If None, uses value from settings.

        Returns:
            A cached instance of a SlugStrategy

        Raises:
            ValueError: If strategy_type is unknown
        """
        if strategy_type is None:
            strategy_type = SlugStrategyType(settings.slug_strategy)

        if strategy_type in cls._instances:
            return cls._instances[strategy_type]

        if strategy_type == SlugStrategyType.RANDOM:
            instance = RandomSlugStrategy(length=settings.slug_length)
        elif strategy_type == SlugStrategyType.SECURE:
            instance = SecureSlugStrategy(length=settings.slug_length)
        else:
            raise ValueError(f"Unknown strategy type: {strategy_type}")

        cls._instances[strategy_type] = instance
        return instance

    @classmethod
    def clear_instances(cls):
        """Clear cached instances (for testing)"""
        cls._instances.clear()
