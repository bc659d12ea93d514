"""
Team Weakness Models

Starting lineups and baseline-relative roster needs.
"""

from pydantic import BaseModel, ConfigDict, Field

from fantasy_trade_engine.models.player import Position
from fantasy_trade_engine.utils.rounding import Rounded


class StarterSlot(BaseModel):
    """One filled (or empty) starting lineup slot."""

    model_config = ConfigDict(frozen=True)

    slot: str = Field(description="Slot label, e.g. QB, RB2, FLEX")
    position: Position | None = Field(
        default=None, description="Core position of the slot, None for FLEX"
    )
    player_id: str | None = None
    player_name: str | None = None
    player_position: Position | None = None
    projected_points: Rounded = 0.0
    is_bye: bool = False
    is_injured: bool = False
    is_flex: bool = False

    @property
    def is_empty(self) -> bool:
        return self.player_id is None


class Lineup(BaseModel):
    """Greedy starting lineup for a roster."""

    model_config = ConfigDict(frozen=True)

    starters: tuple[StarterSlot, ...] = ()
    flex_starter: StarterSlot | None = Field(
        default=None, description="First filled FLEX slot"
    )
    bench: tuple[str, ...] = Field(default=(), description="Unused player ids")

    def starters_at(self, position: Position) -> list[StarterSlot]:
        return [s for s in self.starters if s.position == position and not s.is_flex]


class WeaknessItem(BaseModel):
    """A lineup slot whose starter falls below replacement level."""

    model_config = ConfigDict(frozen=True)

    slot: str
    position: Position | None = None
    deficit_points: Rounded = Field(ge=0)
    deficit_value: Rounded = Field(ge=0, description="Deficit converted to dollars")
    drivers: tuple[str, ...] = ()


class TeamNeedProfile(BaseModel):
    """Complete roster needs assessment for a team."""

    model_config = ConfigDict(frozen=True)

    team_id: str
    team_name: str
    need_score: Rounded = Field(ge=0, description="Sum of recorded slot deficits in points")
    items: tuple[WeaknessItem, ...] = ()
    needs_by_position: dict[str, Rounded] = Field(
        default_factory=dict, description="Position or FLEX -> summed deficit points"
    )
    vpp: Rounded = Field(description="Dollars per point used for deficit values")
    lineup: Lineup = Field(default_factory=Lineup)

    @property
    def top_need(self) -> str | None:
        """Slot label of the worst deficit."""
        return self.items[0].slot if self.items else None
