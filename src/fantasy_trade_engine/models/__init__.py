"""Pydantic models and schemas."""

from fantasy_trade_engine.models.league import (
    FLEX_SLOT,
    STANDARD_LINEUP,
    LeagueSnapshot,
    LineupRequirements,
    Team,
)
from fantasy_trade_engine.models.player import (
    GameLog,
    Player,
    Position,
    PositionBaseline,
    Projection,
)
from fantasy_trade_engine.models.trade import (
    NeedChange,
    NeedDelta,
    SideNeedDelta,
    TradeCandidate,
    TradeGenerationMeta,
    TradeGenerationResult,
    TradeItem,
    TradeMode,
    TradePlayer,
    TradeProposal,
    ValueDelta,
)
from fantasy_trade_engine.models.valuation import (
    PriceRange,
    Valuation,
    ValuationComponents,
    ValuationMetadata,
    ValuationResult,
)
from fantasy_trade_engine.models.weakness import (
    Lineup,
    StarterSlot,
    TeamNeedProfile,
    WeaknessItem,
)

__all__ = [
    # League
    "FLEX_SLOT",
    "STANDARD_LINEUP",
    "LeagueSnapshot",
    "LineupRequirements",
    "Team",
    # Player
    "GameLog",
    "Player",
    "Position",
    "PositionBaseline",
    "Projection",
    # Trade
    "NeedChange",
    "NeedDelta",
    "SideNeedDelta",
    "TradeCandidate",
    "TradeGenerationMeta",
    "TradeGenerationResult",
    "TradeItem",
    "TradeMode",
    "TradePlayer",
    "TradeProposal",
    "ValueDelta",
    # Valuation
    "PriceRange",
    "Valuation",
    "ValuationComponents",
    "ValuationMetadata",
    "ValuationResult",
    # Weakness
    "Lineup",
    "StarterSlot",
    "TeamNeedProfile",
    "WeaknessItem",
]
