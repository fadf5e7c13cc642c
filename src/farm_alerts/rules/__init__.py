"""Alert rules: thresholds, evaluators and the aggregating engine."""

from farm_alerts.rules.engine import (
    AlertEngine,
    aggregate,
    default_evaluators,
)
from farm_alerts.rules.evaluators import (
    ColdStressEvaluator,
    DroughtEvaluator,
    Evaluator,
    HeatStressEvaluator,
    HeavyRainEvaluator,
    PestRiskEvaluator,
    ProviderAdvisoryEvaluator,
    SeasonalEvaluator,
)
from farm_alerts.rules.market import MarketTimingAdvisor
from farm_alerts.rules.messages import AlertFormatter, AlertTemplate
from farm_alerts.rules.thresholds import (
    AgronomicConfig,
    ComparisonOperator,
    Threshold,
)

__all__ = [
    "AlertEngine",
    "aggregate",
    "default_evaluators",
    "Evaluator",
    "SeasonalEvaluator",
    "DroughtEvaluator",
    "HeavyRainEvaluator",
    "HeatStressEvaluator",
    "ColdStressEvaluator",
    "PestRiskEvaluator",
    "ProviderAdvisoryEvaluator",
    "MarketTimingAdvisor",
    "AlertFormatter",
    "AlertTemplate",
    "AgronomicConfig",
    "ComparisonOperator",
    "Threshold",
]
