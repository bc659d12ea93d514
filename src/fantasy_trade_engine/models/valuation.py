"""
Valuation Models

Per-player prices with their explainable components.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from fantasy_trade_engine.models.player import Position
from fantasy_trade_engine.utils.rounding import Rounded


class ValuationComponents(BaseModel):
    """The four weighted contributions to a price."""

    model_config = ConfigDict(frozen=True)

    anchor: Rounded = Field(description="Most recent auction price, 0 when unknown")
    delta_perf: Rounded = Field(description="EMA performance surprise in dollars")
    vorp: Rounded = Field(description="Projected points over replacement in dollars")
    global_adj: Rounded = Field(
        default=0.0, serialization_alias="global", description="Market-wide adjustment"
    )


class Valuation(BaseModel):
    """Computed price for a single player."""

    model_config = ConfigDict(frozen=True)

    player_id: str
    player_name: str
    position: Position
    price: Rounded
    projected_ppg: Rounded
    components: ValuationComponents
    computed_at: datetime
    engine_version: str


class PriceRange(BaseModel):
    min: Rounded = 0.0
    max: Rounded = 0.0


class ValuationMetadata(BaseModel):
    """Summary statistics for a valuation run."""

    total_players: int = 0
    avg_price: Rounded = 0.0
    price_range: PriceRange = Field(default_factory=PriceRange)


class ValuationResult(BaseModel):
    """All valuations computed for a league in one run."""

    model_config = ConfigDict(frozen=True)

    league_id: str
    season: int
    engine_version: str
    computed_at: datetime
    vpp: Rounded = Field(description="Calibrated dollars per point above replacement")
    valuations: tuple[Valuation, ...] = ()
    metadata: ValuationMetadata = Field(default_factory=ValuationMetadata)

    def price_map(self) -> dict[str, float]:
        """Exact prices keyed by player id."""
        return {v.player_id: v.price for v in self.valuations}

    def get(self, player_id: str) -> Valuation | None:
        return next((v for v in self.valuations if v.player_id == player_id), None)
