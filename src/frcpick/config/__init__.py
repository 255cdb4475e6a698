"""Configuration helpers for weight presets."""

from .strategies import (
    CUSTOM_STRATEGY_ID,
    METRIC_NAMES,
    PICK_LIST_STRATEGIES,
    PickListStrategy,
    WeightConfiguration,
    custom_strategy,
    get_strategy,
    iter_strategies,
)

__all__ = [
    "CUSTOM_STRATEGY_ID",
    "METRIC_NAMES",
    "PICK_LIST_STRATEGIES",
    "PickListStrategy",
    "WeightConfiguration",
    "custom_strategy",
    "get_strategy",
    "iter_strategies",
]
