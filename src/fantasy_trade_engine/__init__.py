"""
Fantasy Trade Engine

Player valuation, team weakness scoring and deterministic win-win trade
generation for fantasy football leagues.
"""

__version__ = "0.1.0"

from fantasy_trade_engine.config import EngineSettings, get_settings
from fantasy_trade_engine.exceptions import (
    ConfigurationError,
    LeagueNotFoundError,
    MissingBaselineError,
    TeamNotFoundError,
    TradeEngineError,
)
from fantasy_trade_engine.services.pipeline import TradeEngine

__all__ = [
    "__version__",
    "EngineSettings",
    "get_settings",
    "ConfigurationError",
    "LeagueNotFoundError",
    "MissingBaselineError",
    "TeamNotFoundError",
    "TradeEngineError",
    "TradeEngine",
]
