"""League data sources and stores."""

from fantasy_trade_engine.sources.context import LeagueContext, LeagueSource
from fantasy_trade_engine.sources.memory import InMemoryLeagueSource, ValuationRepository

__all__ = ["LeagueContext", "LeagueSource", "InMemoryLeagueSource", "ValuationRepository"]
