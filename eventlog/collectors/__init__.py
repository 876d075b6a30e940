"""Event collectors built on the emission core."""

from .ml_completion import (
    MLCompletionSettingsCollector,
    RankerProvider,
    RankerProviderRegistry,
    RankingModelRule,
)

__all__ = [
    "MLCompletionSettingsCollector",
    "RankerProvider",
    "RankerProviderRegistry",
    "RankingModelRule",
]
