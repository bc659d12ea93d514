"""
Player-related Pydantic models.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Position(str, Enum):
    """Primary fantasy positions."""

    QB = "QB"
    RB = "RB"
    WR = "WR"
    TE = "TE"
    K = "K"
    DST = "D/ST"


POSITION_ALIASES = {
    "D-ST": Position.DST,
    "DST": Position.DST,
    "DEF": Position.DST,
    "D/ST": Position.DST,
}


def parse_position(value: object) -> object:
    """Normalize position strings such as ``D-ST`` or ``def``."""
    if isinstance(value, str):
        key = value.strip().upper()
        return POSITION_ALIASES.get(key, key)
    return value


class GameLog(BaseModel):
    """Actual fantasy points scored in one week."""

    model_config = ConfigDict(frozen=True)

    week: int = Field(ge=0)
    points: float


class Projection(BaseModel):
    """Projected mean fantasy points for one week."""

    model_config = ConfigDict(frozen=True)

    week: int = Field(ge=0)
    points: float


class Player(BaseModel):
    """Player snapshot used for a single computation run."""

    model_config = ConfigDict(frozen=True)

    player_id: str
    name: str | None = None
    position: Position
    auction_price: float | None = Field(
        default=None, description="Most recent auction price in this league"
    )
    game_logs: tuple[GameLog, ...] = ()
    projections: tuple[Projection, ...] = ()
    bye_week: int | None = None
    injury_status: str | None = None

    @field_validator("position", mode="before")
    @classmethod
    def normalize_position(cls, value: object) -> object:
        return parse_position(value)

    @property
    def display_name(self) -> str:
        """Get display name for the player."""
        if self.name:
            return self.name
        return self.player_id

    @property
    def latest_projection(self) -> Projection | None:
        """Most recent season projection (highest week)."""
        if not self.projections:
            return None
        return max(self.projections, key=lambda p: p.week)

    def recent_logs(self, window: int) -> list[GameLog]:
        """Newest-first game logs capped to ``window`` entries."""
        newest_first = sorted(self.game_logs, key=lambda log: log.week, reverse=True)
        return newest_first[:window]

    def is_injured(self) -> bool:
        if not self.injury_status:
            return False
        return self.injury_status.strip().lower() not in ("", "healthy", "active")

    def is_on_bye(self, week: int | None) -> bool:
        return week is not None and self.bye_week is not None and self.bye_week == week


class PositionBaseline(BaseModel):
    """Replacement-level points per game for a position in a season."""

    model_config = ConfigDict(frozen=True)

    season: int
    position: Position
    points_per_game: float

    @field_validator("position", mode="before")
    @classmethod
    def normalize_position(cls, value: object) -> object:
        return parse_position(value)
