"""Business logic services."""

from fantasy_trade_engine.services.baselines import BaselineProvider, BaselineSet
from fantasy_trade_engine.services.calibration import (
    ValuePerPointCalibrator,
    blend_value_per_point,
    vorp_points,
)
from fantasy_trade_engine.services.lineup import LineupOptimizer
from fantasy_trade_engine.services.pipeline import TradeEngine
from fantasy_trade_engine.services.trade_generator import (
    TradeCandidateGenerator,
    candidate_count,
    generate_candidates,
)
from fantasy_trade_engine.services.trade_ranker import TradeEvaluator
from fantasy_trade_engine.services.trades import TradeService
from fantasy_trade_engine.services.valuation import ValuationEngine
from fantasy_trade_engine.services.weakness import WeaknessAnalyzer

__all__ = [
    # Baselines / calibration
    "BaselineProvider",
    "BaselineSet",
    "ValuePerPointCalibrator",
    "blend_value_per_point",
    "vorp_points",
    # Valuation
    "ValuationEngine",
    # Lineups / weakness
    "LineupOptimizer",
    "WeaknessAnalyzer",
    # Trades
    "TradeCandidateGenerator",
    "TradeEvaluator",
    "TradeService",
    "candidate_count",
    "generate_candidates",
    # Pipeline
    "TradeEngine",
]
